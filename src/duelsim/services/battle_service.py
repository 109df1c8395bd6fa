"""Round orchestrator: the match state machine."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Literal, Protocol, Tuple

from duelsim.core.rng import RNG
from duelsim.core.scheduler import TurnScheduler
from duelsim.core.types import GameMode, MatchOutcome
from duelsim.domain.abilities import AttackKind, DefenseKind
from duelsim.domain.battle_models import MatchState, RoundResult
from duelsim.domain.damage import DamageResolution, resolve_attack_damage
from duelsim.domain.entities import Combatant
from duelsim.domain.progression import is_win
from duelsim.services.ai_service import OpponentStrategySelector
from duelsim.services.errors import MatchStateError
from duelsim.services.factories import make_instance_id
from duelsim.services.progression_service import ProgressionService

logger = logging.getLogger(__name__)

AbilitySlot = Literal["attack", "defense"]


@dataclass(slots=True)
class BattleEvent:
    """Base battle event."""


@dataclass(slots=True)
class MatchStartedEvent(BattleEvent):
    match_id: str
    mode: GameMode
    player1_name: str
    player2_name: str


@dataclass(slots=True)
class AISelectionEvent(BattleEvent):
    combatant_id: str
    combatant_name: str
    strategy: str
    attacks: Tuple[AttackKind, ...]
    defenses: Tuple[DefenseKind, ...]


@dataclass(slots=True)
class AbilitySelectedEvent(BattleEvent):
    combatant_id: str
    combatant_name: str
    slot: AbilitySlot
    ability: str
    selected: bool


@dataclass(slots=True)
class SelectionRejectedEvent(BattleEvent):
    combatant_id: str | None
    combatant_name: str | None
    reason: str


@dataclass(slots=True)
class RoundStartedEvent(BattleEvent):
    round_number: int


@dataclass(slots=True)
class AttackResolvedEvent(BattleEvent):
    attacker_id: str
    attacker_name: str
    defender_id: str
    defender_name: str
    attack: AttackKind
    damage: float
    dodged: bool


@dataclass(slots=True)
class DodgeEvent(BattleEvent):
    defender_id: str
    defender_name: str
    attack: AttackKind


@dataclass(slots=True)
class RoundResolvedEvent(BattleEvent):
    round_number: int
    player1_name: str
    player1_health: float
    player2_name: str
    player2_health: float
    winner_id: str | None
    winner_name: str | None


@dataclass(slots=True)
class MatchResolvedEvent(BattleEvent):
    outcome: MatchOutcome
    winner_id: str | None
    winner_name: str | None


@dataclass(slots=True)
class ExperienceGainedEvent(BattleEvent):
    character_name: str
    amount: int
    won: bool


@dataclass(slots=True)
class LevelUpEvent(BattleEvent):
    character_name: str
    new_level: int
    levels_gained: int
    points_granted: int


class EventSink(Protocol):
    def publish(self, event: BattleEvent) -> None: ...


class BattleService:
    """Drives a match through setup, selection, battle and result.

    Invalid requests never raise; they come back as ``SelectionRejectedEvent``
    and leave the phase unchanged. Events are returned from every call and,
    when a sink is configured, published to it as well (deferred AI picks are
    only visible through the sink).
    """

    def __init__(
        self,
        selector: OpponentStrategySelector,
        *,
        progression_service: ProgressionService | None = None,
        scheduler: TurnScheduler | None = None,
        ai_delay: float = 0.0,
        event_sink: EventSink | None = None,
    ) -> None:
        self._selector = selector
        self._progression_service = progression_service
        self._scheduler = scheduler
        self._ai_delay = max(0.0, ai_delay)
        self._event_sink = event_sink

    # -----------------------
    # Match Lifecycle
    # -----------------------
    def create_match(
        self,
        player1: Combatant,
        player2: Combatant,
        *,
        mode: GameMode = "pve",
        seed: int | None = None,
        character_bound: bool = False,
    ) -> MatchState:
        """Build a match in the setup phase with its own RNG."""
        if player1 is player2:
            raise MatchStateError("A match needs two distinct combatants.")
        rng = RNG(seed)
        return MatchState(
            match_id=make_instance_id("match", rng),
            mode=mode,
            player1=player1,
            player2=player2,
            rng=rng,
            seed=seed,
            character_bound=character_bound,
        )

    def start_match(self, match: MatchState) -> List[BattleEvent]:
        """Setup -> Selection. Also restarts a finished match."""
        if match.phase not in ("setup", "result"):
            return self._emit([self._rejected(None, f"Cannot start a match during {match.phase}.")])

        self._cancel_pending_ai(match)
        for combatant in match.combatants():
            combatant.reset_for_new_match()
        match.round_number = 1
        match.round_results.clear()
        match.outcome = None
        match.winner_id = None
        match.progression_applied = False
        match.phase = "selection"
        logger.info("Match %s started: %s vs %s (%s)", match.match_id, match.player1.name, match.player2.name, match.mode)

        events: List[BattleEvent] = [
            MatchStartedEvent(
                match_id=match.match_id,
                mode=match.mode,
                player1_name=match.player1.name,
                player2_name=match.player2.name,
            )
        ]
        if match.mode == "pve":
            events.extend(self._apply_ai_selection(match))
        return self._emit(events)

    def is_ready(self, match: MatchState) -> bool:
        """Human sides must have two attacks and two defenses selected."""
        return all(combatant.is_ready for combatant in self._human_combatants(match))

    # -----------------------
    # Selections
    # -----------------------
    def select_attack(self, match: MatchState, combatant_id: str, attack: AttackKind) -> List[BattleEvent]:
        return self._change_selection(match, combatant_id, "attack", attack, select=True)

    def deselect_attack(self, match: MatchState, combatant_id: str, attack: AttackKind) -> List[BattleEvent]:
        return self._change_selection(match, combatant_id, "attack", attack, select=False)

    def select_defense(self, match: MatchState, combatant_id: str, defense: DefenseKind) -> List[BattleEvent]:
        return self._change_selection(match, combatant_id, "defense", defense, select=True)

    def deselect_defense(self, match: MatchState, combatant_id: str, defense: DefenseKind) -> List[BattleEvent]:
        return self._change_selection(match, combatant_id, "defense", defense, select=False)

    # -----------------------
    # Rounds
    # -----------------------
    def execute_round(self, match: MatchState) -> List[BattleEvent]:
        """Selection -> Battle -> (Selection | Result)."""
        if match.phase != "selection":
            return self._emit([self._rejected(None, f"Cannot resolve a round during {match.phase}.")])

        not_ready = [combatant for combatant in self._human_combatants(match) if not combatant.is_ready]
        if not_ready:
            return self._emit(
                [
                    self._rejected(combatant, f"{combatant.name} must choose 2 attacks and 2 defenses!")
                    for combatant in not_ready
                ]
            )

        events: List[BattleEvent] = []
        self._complete_pending_ai(match, events)

        match.phase = "battle"
        player1, player2 = match.player1, match.player2
        events.append(RoundStartedEvent(round_number=match.round_number))

        # Both directions read the pre-round snapshot before any damage lands.
        to_player2 = resolve_attack_damage(player1, player2, match.rng)
        to_player1 = resolve_attack_damage(player2, player1, match.rng)

        player2.take_damage(to_player2.total_damage)
        player1.take_damage(to_player1.total_damage)
        player1.deal_damage(to_player2.total_damage)
        player2.deal_damage(to_player1.total_damage)

        events.extend(self._attack_events(player1, player2, to_player2))
        events.extend(self._attack_events(player2, player1, to_player1))

        round_winner = self._round_winner(match, to_player2, to_player1)
        if round_winner is not None:
            round_winner.win_round()

        match.round_results.append(
            RoundResult(
                round_number=match.round_number,
                player1_attacks=tuple(player1.selected_attacks),
                player1_defenses=tuple(player1.selected_defenses),
                player2_attacks=tuple(player2.selected_attacks),
                player2_defenses=tuple(player2.selected_defenses),
                player1_damage_dealt=to_player2.total_damage,
                player2_damage_dealt=to_player1.total_damage,
                player1_health_after=player1.health,
                player2_health_after=player2.health,
                player1_breakdown=to_player2.breakdown,
                player2_breakdown=to_player1.breakdown,
                round_winner_id=round_winner.combatant_id if round_winner else None,
            )
        )
        events.append(
            RoundResolvedEvent(
                round_number=match.round_number,
                player1_name=player1.name,
                player1_health=player1.health,
                player2_name=player2.name,
                player2_health=player2.health,
                winner_id=round_winner.combatant_id if round_winner else None,
                winner_name=round_winner.name if round_winner else None,
            )
        )
        logger.debug(
            "Round %d of %s: %.3f dealt to %s, %.3f dealt to %s",
            match.round_number,
            match.match_id,
            to_player2.total_damage,
            player2.name,
            to_player1.total_damage,
            player1.name,
        )

        if player1.health <= 0 or player2.health <= 0:
            events.extend(self._finish_match(match))
        else:
            match.round_number += 1
            player1.clear_selections()
            player2.clear_selections()
            match.phase = "selection"
            events.extend(self._queue_ai_selection(match))
        return self._emit(events)

    # -----------------------
    # Helpers
    # -----------------------
    def _get_combatant(self, match: MatchState, combatant_id: str) -> Combatant:
        for combatant in match.combatants():
            if combatant.combatant_id == combatant_id:
                return combatant
        raise MatchStateError(f"Combatant '{combatant_id}' not found.")

    def _human_combatants(self, match: MatchState) -> List[Combatant]:
        return [combatant for combatant in match.combatants() if match.is_human(combatant)]

    def _change_selection(
        self,
        match: MatchState,
        combatant_id: str,
        slot: AbilitySlot,
        ability: AttackKind | DefenseKind,
        *,
        select: bool,
    ) -> List[BattleEvent]:
        combatant = self._get_combatant(match, combatant_id)
        if match.phase != "selection":
            return self._emit([self._rejected(combatant, f"Selections are closed during {match.phase}.")])
        if not match.is_human(combatant):
            return self._emit([self._rejected(combatant, f"{combatant.name} is computer-controlled.")])

        if slot == "attack":
            if not isinstance(ability, AttackKind):
                return self._emit([self._rejected(combatant, f"{ability!r} is not an attack.")])
            changed = combatant.select_attack(ability) if select else combatant.deselect_attack(ability)
        else:
            if not isinstance(ability, DefenseKind):
                return self._emit([self._rejected(combatant, f"{ability!r} is not a defense.")])
            changed = combatant.select_defense(ability) if select else combatant.deselect_defense(ability)

        if not changed:
            if select:
                reason = f"{combatant.name} cannot add {ability.label}: two {slot}s at most, no repeats."
            else:
                reason = f"{combatant.name} has not selected {ability.label}."
            return self._emit([self._rejected(combatant, reason)])
        return self._emit(
            [
                AbilitySelectedEvent(
                    combatant_id=combatant.combatant_id,
                    combatant_name=combatant.name,
                    slot=slot,
                    ability=ability.value,
                    selected=select,
                )
            ]
        )

    def _apply_ai_selection(self, match: MatchState) -> List[BattleEvent]:
        ai, opponent = match.player2, match.player1
        selection = self._selector.apply_selection(ai, opponent, match.rng)
        match.pending_ai_call = None
        return [
            AISelectionEvent(
                combatant_id=ai.combatant_id,
                combatant_name=ai.name,
                strategy=selection.strategy.value,
                attacks=selection.attacks,
                defenses=selection.defenses,
            )
        ]

    def _queue_ai_selection(self, match: MatchState) -> List[BattleEvent]:
        if match.mode != "pve":
            return []
        if self._scheduler is None or self._ai_delay <= 0:
            return self._apply_ai_selection(match)
        match.pending_ai_call = self._scheduler.schedule(
            self._ai_delay, lambda: self._run_deferred_ai_selection(match)
        )
        return []

    def _run_deferred_ai_selection(self, match: MatchState) -> None:
        if match.phase != "selection":
            return
        self._emit(self._apply_ai_selection(match))

    def _complete_pending_ai(self, match: MatchState, events: List[BattleEvent]) -> None:
        if match.mode != "pve":
            return
        pending = match.pending_ai_call
        if pending is not None and not pending.done:
            pending.cancel()
            events.extend(self._apply_ai_selection(match))
        elif not match.player2.is_ready:
            events.extend(self._apply_ai_selection(match))

    def _cancel_pending_ai(self, match: MatchState) -> None:
        if match.pending_ai_call is not None:
            match.pending_ai_call.cancel()
            match.pending_ai_call = None

    def _round_winner(
        self, match: MatchState, to_player2: DamageResolution, to_player1: DamageResolution
    ) -> Combatant | None:
        if to_player2.total_damage > to_player1.total_damage:
            return match.player1
        if to_player1.total_damage > to_player2.total_damage:
            return match.player2
        return None

    def _attack_events(
        self, attacker: Combatant, defender: Combatant, resolution: DamageResolution
    ) -> List[BattleEvent]:
        events: List[BattleEvent] = []
        for entry in resolution.breakdown:
            if entry.dodged:
                events.append(
                    DodgeEvent(defender_id=defender.combatant_id, defender_name=defender.name, attack=entry.attack)
                )
            events.append(
                AttackResolvedEvent(
                    attacker_id=attacker.combatant_id,
                    attacker_name=attacker.name,
                    defender_id=defender.combatant_id,
                    defender_name=defender.name,
                    attack=entry.attack,
                    damage=entry.damage,
                    dodged=entry.dodged,
                )
            )
        return events

    def _finish_match(self, match: MatchState) -> List[BattleEvent]:
        player1, player2 = match.player1, match.player2
        match.phase = "result"
        if player1.health <= 0 and player2.health <= 0:
            match.outcome = "draw"
            winner = None
        elif player1.health <= 0:
            match.outcome = "player2"
            winner = player2
        else:
            match.outcome = "player1"
            winner = player1
        match.winner_id = winner.combatant_id if winner else None
        logger.info(
            "Match %s finished after %d rounds: %s",
            match.match_id,
            match.round_number,
            winner.name if winner else "draw",
        )

        events: List[BattleEvent] = [
            MatchResolvedEvent(
                outcome=match.outcome,
                winner_id=match.winner_id,
                winner_name=winner.name if winner else None,
            )
        ]
        events.extend(self._apply_progression(match))
        return events

    def _apply_progression(self, match: MatchState) -> List[BattleEvent]:
        if match.progression_applied:
            return []
        match.progression_applied = True
        if self._progression_service is None or not match.character_bound:
            return []

        update = self._progression_service.record_match(match.player1, won=is_win(match.outcome))
        if update is None:
            return []
        result = update.result
        events: List[BattleEvent] = [
            ExperienceGainedEvent(
                character_name=update.character.name,
                amount=result.experience_gained,
                won=result.won,
            )
        ]
        if result.leveled_up:
            events.append(
                LevelUpEvent(
                    character_name=update.character.name,
                    new_level=result.new_level,
                    levels_gained=result.level_up.levels_gained,
                    points_granted=result.level_up.points_granted,
                )
            )
        return events

    @staticmethod
    def _rejected(combatant: Combatant | None, reason: str) -> SelectionRejectedEvent:
        return SelectionRejectedEvent(
            combatant_id=combatant.combatant_id if combatant else None,
            combatant_name=combatant.name if combatant else None,
            reason=reason,
        )

    def _emit(self, events: List[BattleEvent]) -> List[BattleEvent]:
        if self._event_sink is not None:
            for event in events:
                self._event_sink.publish(event)
        return events
