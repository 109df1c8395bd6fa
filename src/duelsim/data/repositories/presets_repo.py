"""Character presets repository."""
from __future__ import annotations

from typing import Dict

from duelsim.data.errors import DataValidationError
from duelsim.data.repositories.base import RepositoryBase
from duelsim.domain.defs import PresetDef
from duelsim.domain.entities import STAT_NAMES, CoreStats

MIN_PRESET_STAT = 1
MAX_PRESET_STAT = 10


class PresetsRepository(RepositoryBase[PresetDef]):
    """Loads the starting stat spreads offered at character creation."""

    def __init__(self, base_path=None) -> None:
        super().__init__("presets.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, PresetDef]:
        presets: Dict[str, PresetDef] = {}
        for raw_id, payload in raw.items():
            preset_data = self._require_mapping(payload, f"preset '{raw_id}'")
            self._assert_exact_fields(preset_data, {"name", "stats"}, f"preset '{raw_id}'")
            name = self._require_str(preset_data["name"], f"preset '{raw_id}' name")
            stats_data = self._require_mapping(preset_data["stats"], f"preset '{raw_id}' stats")
            self._assert_exact_fields(stats_data, set(STAT_NAMES), f"preset '{raw_id}' stats")

            values: Dict[str, int] = {}
            for stat in STAT_NAMES:
                value = self._require_int(stats_data[stat], f"preset '{raw_id}' {stat}")
                if not MIN_PRESET_STAT <= value <= MAX_PRESET_STAT:
                    raise DataValidationError(
                        f"preset '{raw_id}' {stat} must be between {MIN_PRESET_STAT} and {MAX_PRESET_STAT}."
                    )
                values[stat] = value

            presets[raw_id] = PresetDef(id=raw_id, name=name, stats=CoreStats(**values))
        return presets
