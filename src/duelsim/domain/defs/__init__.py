"""Static definition structures."""

from .preset_def import PresetDef

__all__ = ["PresetDef"]
