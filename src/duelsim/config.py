"""Configuration persistence and logging setup."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict

from duelsim.core.types import GameMode

_DEFAULT_AI_DELAY = 0.5
_DEFAULT_MODE: GameMode = "pve"
_DEFAULT_LOG_LEVEL = "WARNING"
_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(slots=True)
class DuelConfig:
    """User-tunable settings."""

    ai_delay_seconds: float = _DEFAULT_AI_DELAY
    default_mode: GameMode = _DEFAULT_MODE
    log_level: str = _DEFAULT_LOG_LEVEL
    save_path: str | None = None

    def resolved_save_path(self) -> Path:
        return Path(self.save_path) if self.save_path else get_default_character_path()


def debug_enabled() -> bool:
    """Return True only when DUELSIM_DEBUG is explicitly set to '1'."""
    return os.getenv("DUELSIM_DEBUG") == "1"


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "DuelSim"
        return Path.home() / "DuelSim"
    return Path.home() / ".config" / "duelsim"


def get_default_config_path() -> Path:
    return get_user_data_dir() / "config.json"


def get_default_character_path() -> Path:
    return get_user_data_dir() / "character.json"


def _normalize_delay(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        return _DEFAULT_AI_DELAY
    return float(value)


def _normalize_mode(value: object) -> GameMode:
    return "pvp" if value == "pvp" else _DEFAULT_MODE


def _normalize_log_level(value: object) -> str:
    if isinstance(value, str) and value.upper() in _VALID_LOG_LEVELS:
        return value.upper()
    return _DEFAULT_LOG_LEVEL


def _normalize_save_path(value: object) -> str | None:
    return value if isinstance(value, str) and value else None


def config_from_mapping(raw: Dict[str, Any]) -> DuelConfig:
    return DuelConfig(
        ai_delay_seconds=_normalize_delay(raw.get("ai_delay_seconds")),
        default_mode=_normalize_mode(raw.get("default_mode")),
        log_level=_normalize_log_level(raw.get("log_level")),
        save_path=_normalize_save_path(raw.get("save_path")),
    )


def load_config(path: Path | None = None) -> DuelConfig:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return DuelConfig()
    if not isinstance(raw, dict):
        return DuelConfig()
    return config_from_mapping(raw)


def save_config(config: DuelConfig, path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = asdict(config_from_mapping(asdict(config)))
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")


def configure_logging(config: DuelConfig) -> None:
    """Apply the configured level to the package logger."""
    level = logging.DEBUG if debug_enabled() else getattr(logging, config.log_level)
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("duelsim").setLevel(level)
