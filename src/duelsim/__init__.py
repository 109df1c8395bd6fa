"""Turn-based duel simulator: battle resolution, opponent AI and progression."""

__version__ = "0.1.0"
