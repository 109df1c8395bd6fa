"""Service layer exports."""

from .ai_service import AISelection, AIStrategy, OpponentStrategySelector
from .battle_service import BattleEvent, BattleService
from .character_service import CharacterService
from .character_store import CharacterSerializer, CharacterStore, InMemoryCharacterStore, JsonCharacterStore
from .errors import CharacterStoreError, FactoryError, MatchStateError
from .progression_service import ProgressionService

__all__ = [
    "AISelection",
    "AIStrategy",
    "BattleEvent",
    "BattleService",
    "CharacterSerializer",
    "CharacterService",
    "CharacterStore",
    "CharacterStoreError",
    "FactoryError",
    "InMemoryCharacterStore",
    "JsonCharacterStore",
    "MatchStateError",
    "OpponentStrategySelector",
    "ProgressionService",
]
