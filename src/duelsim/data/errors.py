"""Exceptions raised while reading bundled definition files."""


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """A definition file is missing, unreadable or not valid JSON."""


class DataValidationError(DataError):
    """A definition file parsed but its content has the wrong shape."""
