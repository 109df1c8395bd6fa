"""Service-layer exceptions."""


class CharacterStoreError(Exception):
    """Raised when a character cannot be saved or loaded."""


class MatchStateError(Exception):
    """Raised when a caller refers to a combatant that is not part of the match."""


class FactoryError(Exception):
    """Raised when a combatant cannot be built from the requested source."""
