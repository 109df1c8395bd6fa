from __future__ import annotations

from duelsim.domain.abilities import AttackKind
from duelsim.presentation.event_log import EventLog, format_event
from duelsim.services.battle_service import (
    AISelectionEvent,
    AttackResolvedEvent,
    DodgeEvent,
    LevelUpEvent,
    MatchResolvedEvent,
    MatchStartedEvent,
    RoundResolvedEvent,
    RoundStartedEvent,
)


def test_format_core_events() -> None:
    assert (
        format_event(MatchStartedEvent(match_id="m", mode="pve", player1_name="Hero", player2_name="Computer"))
        == "Battle begins! Hero vs Computer (Player vs Computer)"
    )
    assert format_event(RoundStartedEvent(round_number=3)) == "=== Round 3 ==="
    assert (
        format_event(
            AttackResolvedEvent(
                attacker_id="a",
                attacker_name="Hero",
                defender_id="b",
                defender_name="Computer",
                attack=AttackKind.WEAPON,
                damage=7.425,
                dodged=False,
            )
        )
        == "Hero uses Weapon Attack: 7.4 damage"
    )
    assert (
        format_event(DodgeEvent(defender_id="b", defender_name="Computer", attack=AttackKind.FIRE))
        == "Computer dodged the Fire Attack!"
    )


def test_format_match_results() -> None:
    draw = MatchResolvedEvent(outcome="draw", winner_id=None, winner_name=None)
    assert format_event(draw) == "DRAW! Both fighters have fallen!"
    win = MatchResolvedEvent(outcome="player1", winner_id="a", winner_name="Hero")
    assert format_event(win) == "Hero WINS!"
    level = LevelUpEvent(character_name="Hero", new_level=3, levels_gained=2, points_granted=4)
    assert format_event(level) == "Hero reached level 3! +4 stat points"


def test_event_log_splits_multiline_entries_and_skips_silent_events() -> None:
    log = EventLog()
    log.extend(
        [
            AISelectionEvent(combatant_id="b", combatant_name="Computer", strategy="balanced", attacks=(), defenses=()),
            RoundResolvedEvent(
                round_number=1,
                player1_name="Hero",
                player1_health=82.575,
                player2_name="Computer",
                player2_health=90.0,
                winner_id="a",
                winner_name="Hero",
            ),
        ]
    )
    log.append_text("note")

    assert log.lines == ["Hero: 82.6 HP", "Computer: 90.0 HP", "Hero wins round 1", "note"]
    assert len(log) == 4
