from __future__ import annotations

import json
from pathlib import Path

import pytest

from duelsim.domain.entities import Character, CoreStats
from duelsim.services.character_store import (
    CharacterSerializer,
    InMemoryCharacterStore,
    JsonCharacterStore,
)
from duelsim.services.errors import CharacterStoreError


def _make_character() -> Character:
    character = Character(name="Hero", stats=CoreStats(8, 5, 7, 3, 2), level=3, experience=120)
    character.total_bonus_points = 4
    character.bonus_points_spent = 1
    character.battles_won = 3
    character.battles_lost = 2
    character.total_damage_dealt = 412.5
    character.total_damage_taken = 380.25
    return character


def test_in_memory_store_round_trip_does_not_alias() -> None:
    store = InMemoryCharacterStore()
    assert store.load_character() is None
    assert not store.has_saved_character()

    original = _make_character()
    store.save_character(original)
    loaded = store.load_character()

    assert loaded == original
    assert loaded is not original
    loaded.stats.strength = 10
    reloaded = store.load_character()
    assert reloaded is not None
    assert reloaded.stats.strength == 8

    store.delete_character()
    assert store.load_character() is None


def test_json_store_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "character.json"
    store = JsonCharacterStore(path)
    assert store.load_character() is None

    original = _make_character()
    store.save_character(original)

    assert path.exists()
    assert JsonCharacterStore(path).load_character() == original
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["save_version"] == CharacterSerializer.SAVE_VERSION

    store.delete_character()
    assert not store.has_saved_character()
    store.delete_character()


def test_corrupt_file_raises_store_error(tmp_path: Path) -> None:
    path = tmp_path / "character.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(CharacterStoreError):
        JsonCharacterStore(path).load_character()


@pytest.mark.parametrize(
    "mutate",
    [
        lambda payload: payload.update(save_version=99),
        lambda payload: payload.pop("character"),
        lambda payload: payload["character"].update(level=0),
        lambda payload: payload["character"].update(level=51),
        lambda payload: payload["character"].update(name=""),
        lambda payload: payload["character"].update(experience=-1),
        lambda payload: payload["character"]["stats"].update(wisdom="high"),
        lambda payload: payload["character"].update(creation_date="yesterday"),
    ],
)
def test_invalid_payloads_are_rejected(mutate) -> None:
    serializer = CharacterSerializer()
    payload = serializer.serialize(_make_character())
    mutate(payload)
    with pytest.raises(CharacterStoreError):
        serializer.deserialize(payload)


def test_non_mapping_payload_is_rejected() -> None:
    with pytest.raises(CharacterStoreError):
        CharacterSerializer().deserialize([1, 2, 3])  # type: ignore[arg-type]
