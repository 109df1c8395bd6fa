"""Character persistence: serializer plus in-memory and JSON-file stores."""
from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Mapping, Protocol

from duelsim.domain.entities import STAT_NAMES, Character, CoreStats
from duelsim.domain.entities.character import MAX_LEVEL
from duelsim.services.errors import CharacterStoreError

logger = logging.getLogger(__name__)

CharacterPayload = Dict[str, Any]


class CharacterStore(Protocol):
    """Load/save contract for the single current character."""

    def load_character(self) -> Character | None: ...

    def save_character(self, character: Character) -> None: ...

    def delete_character(self) -> None: ...

    def has_saved_character(self) -> bool: ...


class CharacterSerializer:
    """Converts characters to/from a validated, versioned payload."""

    SAVE_VERSION = 1

    def serialize(self, character: Character) -> CharacterPayload:
        """Return a JSON-serializable payload."""
        return {
            "save_version": self.SAVE_VERSION,
            "character": {
                "name": character.name,
                "stats": character.stats.as_dict(),
                "creation_date": character.creation_date.isoformat(),
                "level": character.level,
                "experience": character.experience,
                "total_bonus_points": character.total_bonus_points,
                "bonus_points_spent": character.bonus_points_spent,
                "battles_won": character.battles_won,
                "battles_lost": character.battles_lost,
                "total_damage_dealt": character.total_damage_dealt,
                "total_damage_taken": character.total_damage_taken,
            },
        }

    def deserialize(self, payload: Mapping[str, Any]) -> Character:
        """Rehydrate a Character from a persisted payload."""
        if not isinstance(payload, Mapping):
            raise CharacterStoreError("Character data must be a JSON object.")
        if payload.get("save_version") != self.SAVE_VERSION:
            raise CharacterStoreError("Unsupported character save version.")
        data = payload.get("character")
        if not isinstance(data, Mapping):
            raise CharacterStoreError("Character data is missing the 'character' section.")

        stats_payload = data.get("stats")
        if not isinstance(stats_payload, Mapping):
            raise CharacterStoreError("character.stats must be an object.")
        stats = CoreStats(
            **{name: self._require_int(stats_payload.get(name), f"character.stats.{name}") for name in STAT_NAMES}
        )

        level = self._require_int(data.get("level"), "character.level")
        if not 1 <= level <= MAX_LEVEL:
            raise CharacterStoreError(f"character.level must be between 1 and {MAX_LEVEL}.")

        return Character(
            name=self._require_str(data.get("name"), "character.name"),
            stats=stats,
            creation_date=self._require_datetime(data.get("creation_date"), "character.creation_date"),
            level=level,
            experience=self._require_non_negative_int(data.get("experience"), "character.experience"),
            total_bonus_points=self._require_non_negative_int(
                data.get("total_bonus_points"), "character.total_bonus_points"
            ),
            bonus_points_spent=self._require_non_negative_int(
                data.get("bonus_points_spent", 0), "character.bonus_points_spent"
            ),
            battles_won=self._require_non_negative_int(data.get("battles_won"), "character.battles_won"),
            battles_lost=self._require_non_negative_int(data.get("battles_lost"), "character.battles_lost"),
            total_damage_dealt=self._require_number(data.get("total_damage_dealt"), "character.total_damage_dealt"),
            total_damage_taken=self._require_number(data.get("total_damage_taken"), "character.total_damage_taken"),
        )

    @staticmethod
    def _require_int(value: object, context: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise CharacterStoreError(f"{context} must be an integer.")
        return value

    @classmethod
    def _require_non_negative_int(cls, value: object, context: str) -> int:
        number = cls._require_int(value, context)
        if number < 0:
            raise CharacterStoreError(f"{context} must be non-negative.")
        return number

    @staticmethod
    def _require_number(value: object, context: str) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise CharacterStoreError(f"{context} must be a number.")
        return float(value)

    @staticmethod
    def _require_str(value: object, context: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise CharacterStoreError(f"{context} must be a non-empty string.")
        return value

    @staticmethod
    def _require_datetime(value: object, context: str) -> datetime:
        if not isinstance(value, str):
            raise CharacterStoreError(f"{context} must be an ISO-8601 string.")
        try:
            return datetime.fromisoformat(value)
        except ValueError as exc:
            raise CharacterStoreError(f"{context} is not a valid timestamp: {exc}") from exc


class InMemoryCharacterStore:
    """Keeps the character as a serialized payload so loads never alias saves."""

    def __init__(self, serializer: CharacterSerializer | None = None) -> None:
        self._serializer = serializer or CharacterSerializer()
        self._payload: CharacterPayload | None = None
        self.save_count = 0

    def load_character(self) -> Character | None:
        if self._payload is None:
            return None
        return self._serializer.deserialize(self._payload)

    def save_character(self, character: Character) -> None:
        self._payload = self._serializer.serialize(character)
        self.save_count += 1

    def delete_character(self) -> None:
        self._payload = None

    def has_saved_character(self) -> bool:
        return self._payload is not None


class JsonCharacterStore:
    """Stores the current character as a JSON file on disk."""

    def __init__(self, path: Path | str, serializer: CharacterSerializer | None = None) -> None:
        self._path = Path(path)
        self._serializer = serializer or CharacterSerializer()

    @property
    def path(self) -> Path:
        return self._path

    def load_character(self) -> Character | None:
        if not self._path.exists():
            return None
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise CharacterStoreError(f"Unable to read character file {self._path}: {exc}") from exc
        return self._serializer.deserialize(payload)

    def save_character(self, character: Character) -> None:
        payload = self._serializer.serialize(character)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        except OSError as exc:
            raise CharacterStoreError(f"Unable to write character file {self._path}: {exc}") from exc
        logger.debug("Saved character %s to %s", character.name, self._path)

    def delete_character(self) -> None:
        try:
            self._path.unlink(missing_ok=True)
        except OSError as exc:
            raise CharacterStoreError(f"Unable to delete character file {self._path}: {exc}") from exc

    def has_saved_character(self) -> bool:
        return self._path.exists()
