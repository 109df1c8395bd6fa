"""Shared type aliases for the core and domain layers."""
from typing import Literal

GameMode = Literal["pve", "pvp"]
MatchPhase = Literal["setup", "selection", "battle", "result"]
Side = Literal["player1", "player2"]
MatchOutcome = Literal["player1", "player2", "draw"]

__all__ = ["GameMode", "MatchOutcome", "MatchPhase", "Side"]
