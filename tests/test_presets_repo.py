from __future__ import annotations

import json
from pathlib import Path

import pytest

from duelsim.data.errors import DataLoadError, DataValidationError
from duelsim.data.repositories import PresetsRepository
from duelsim.domain.entities import CoreStats


def _write_presets(tmp_path: Path, payload: object) -> Path:
    (tmp_path / "presets.json").write_text(json.dumps(payload), encoding="utf-8")
    return tmp_path


def test_bundled_presets_load() -> None:
    repo = PresetsRepository()

    assert repo.ids() == ["balanced", "mage", "rogue", "warrior"]
    warrior = repo.get("warrior")
    assert warrior.name == "Warrior"
    assert warrior.stats == CoreStats(8, 5, 7, 3, 2)
    assert [preset.id for preset in repo.all()] == repo.ids()


def test_unknown_preset_raises_key_error() -> None:
    with pytest.raises(KeyError):
        PresetsRepository().get("necromancer")


def test_missing_file_raises_load_error(tmp_path: Path) -> None:
    with pytest.raises(DataLoadError):
        PresetsRepository(base_path=tmp_path).ids()


def test_out_of_range_stat_is_rejected(tmp_path: Path) -> None:
    base = _write_presets(
        tmp_path,
        {
            "giant": {
                "name": "Giant",
                "stats": {"strength": 12, "agility": 1, "endurance": 5, "wisdom": 1, "intellect": 1},
            }
        },
    )
    with pytest.raises(DataValidationError):
        PresetsRepository(base_path=base).get("giant")


def test_unknown_fields_are_rejected(tmp_path: Path) -> None:
    base = _write_presets(
        tmp_path,
        {
            "odd": {
                "name": "Odd",
                "stats": {"strength": 5, "agility": 5, "endurance": 5, "wisdom": 5, "intellect": 5},
                "luck": 7,
            }
        },
    )
    with pytest.raises(DataValidationError):
        PresetsRepository(base_path=base).all()
