"""Composition root wiring config, stores and services together."""
from __future__ import annotations

from dataclasses import dataclass

from duelsim.config import DuelConfig
from duelsim.core.rng import RNG
from duelsim.core.scheduler import TurnScheduler
from duelsim.core.types import GameMode
from duelsim.data.repositories import PresetsRepository
from duelsim.domain.battle_models import MatchState
from duelsim.presentation.event_log import EventLog
from duelsim.services.ai_service import OpponentStrategySelector
from duelsim.services.battle_service import BattleService
from duelsim.services.character_service import CharacterService
from duelsim.services.character_store import CharacterStore, JsonCharacterStore
from duelsim.services.progression_service import ProgressionService

DEFAULT_PLAYER_NAME = "Player"
DEFAULT_PLAYER_PRESET = "warrior"
DEFAULT_OPPONENT_PRESET = "mage"
COMPUTER_NAME = "Computer"
SECOND_PLAYER_NAME = "Player 2"


@dataclass(slots=True)
class DuelApp:
    """Holds the wired services for one process."""

    config: DuelConfig
    store: CharacterStore
    presets_repo: PresetsRepository
    character_service: CharacterService
    battle_service: BattleService
    scheduler: TurnScheduler
    event_log: EventLog

    def new_match(self, mode: GameMode | None = None, *, seed: int | None = None) -> MatchState:
        """Create a match for the stored character (or a default fighter) in setup phase."""
        chosen_mode: GameMode = mode or self.config.default_mode
        builder_rng = RNG(seed)
        character = self.store.load_character()
        if character is not None:
            player1 = self.character_service.build_combatant(character, builder_rng)
        else:
            player1 = self.character_service.build_preset_combatant(
                DEFAULT_PLAYER_PRESET, DEFAULT_PLAYER_NAME, builder_rng
            )

        if chosen_mode == "pve":
            player2 = self.character_service.build_preset_combatant(
                DEFAULT_OPPONENT_PRESET, COMPUTER_NAME, builder_rng, is_ai=True
            )
        else:
            player2 = self.character_service.build_preset_combatant(
                DEFAULT_OPPONENT_PRESET, SECOND_PLAYER_NAME, builder_rng
            )
        return self.battle_service.create_match(
            player1,
            player2,
            mode=chosen_mode,
            seed=seed,
            character_bound=character is not None,
        )


def build_app(
    config: DuelConfig | None = None,
    *,
    store: CharacterStore | None = None,
    presets_repo: PresetsRepository | None = None,
) -> DuelApp:
    """Wire every service from config; pass a store to replace the JSON file."""
    resolved = config or DuelConfig()
    character_store = store or JsonCharacterStore(resolved.resolved_save_path())
    presets = presets_repo or PresetsRepository()
    scheduler = TurnScheduler()
    event_log = EventLog()
    battle_service = BattleService(
        OpponentStrategySelector(),
        progression_service=ProgressionService(character_store),
        scheduler=scheduler,
        ai_delay=resolved.ai_delay_seconds,
        event_sink=event_log,
    )
    return DuelApp(
        config=resolved,
        store=character_store,
        presets_repo=presets,
        character_service=CharacterService(store=character_store, presets_repo=presets),
        battle_service=battle_service,
        scheduler=scheduler,
        event_log=event_log,
    )
