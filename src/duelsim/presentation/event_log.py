"""Append-only, human-readable log of battle events."""
from __future__ import annotations

from typing import Iterable, List

from duelsim.services.battle_service import (
    AttackResolvedEvent,
    BattleEvent,
    DodgeEvent,
    ExperienceGainedEvent,
    LevelUpEvent,
    MatchResolvedEvent,
    MatchStartedEvent,
    RoundResolvedEvent,
    RoundStartedEvent,
    SelectionRejectedEvent,
)

_MODE_LABELS = {"pve": "Player vs Computer", "pvp": "Player vs Player"}


def format_event(event: BattleEvent) -> str | None:
    """Return the display line for an event, or None for events that are not shown."""
    if isinstance(event, MatchStartedEvent):
        mode = _MODE_LABELS.get(event.mode, event.mode)
        return f"Battle begins! {event.player1_name} vs {event.player2_name} ({mode})"
    if isinstance(event, RoundStartedEvent):
        return f"=== Round {event.round_number} ==="
    if isinstance(event, DodgeEvent):
        return f"{event.defender_name} dodged the {event.attack.label}!"
    if isinstance(event, AttackResolvedEvent):
        return f"{event.attacker_name} uses {event.attack.label}: {event.damage:.1f} damage"
    if isinstance(event, RoundResolvedEvent):
        lines = [
            f"{event.player1_name}: {event.player1_health:.1f} HP",
            f"{event.player2_name}: {event.player2_health:.1f} HP",
        ]
        if event.winner_name:
            lines.append(f"{event.winner_name} wins round {event.round_number}")
        else:
            lines.append(f"Round {event.round_number} is even")
        return "\n".join(lines)
    if isinstance(event, MatchResolvedEvent):
        if event.outcome == "draw":
            return "DRAW! Both fighters have fallen!"
        return f"{event.winner_name} WINS!"
    if isinstance(event, ExperienceGainedEvent):
        return f"{event.character_name} gains {event.amount} experience"
    if isinstance(event, LevelUpEvent):
        return (
            f"{event.character_name} reached level {event.new_level}! "
            f"+{event.points_granted} stat points"
        )
    if isinstance(event, SelectionRejectedEvent):
        return event.reason
    return None


class EventLog:
    """Collects display lines for published events."""

    def __init__(self) -> None:
        self._lines: List[str] = []

    def publish(self, event: BattleEvent) -> None:
        text = format_event(event)
        if text is None:
            return
        self._lines.extend(text.split("\n"))

    def extend(self, events: Iterable[BattleEvent]) -> None:
        for event in events:
            self.publish(event)

    def append_text(self, text: str) -> None:
        self._lines.append(text)

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    def __len__(self) -> int:
        return len(self._lines)
