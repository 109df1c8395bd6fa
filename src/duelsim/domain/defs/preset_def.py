"""Character preset definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from duelsim.domain.entities import CoreStats


@dataclass(slots=True)
class PresetDef:
    """A named starting stat spread."""

    id: str
    name: str
    stats: CoreStats
