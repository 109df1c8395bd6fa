from __future__ import annotations

from duelsim.domain.abilities import AttackKind, DefenseKind
from duelsim.domain.entities import Combatant, CoreStats


def _make_combatant(endurance: int = 5) -> Combatant:
    return Combatant(
        combatant_id="c1",
        name="Tester",
        stats=CoreStats(strength=5, agility=5, endurance=endurance, wisdom=5, intellect=5),
    )


def test_max_health_scales_with_endurance() -> None:
    assert _make_combatant(endurance=5).max_health == 90.0
    assert _make_combatant(endurance=10).max_health == 100.0
    assert _make_combatant(endurance=5).health == 90.0


def test_health_is_clamped_and_alive_follows_it() -> None:
    combatant = _make_combatant()

    combatant.health = 500
    assert combatant.health == combatant.max_health
    assert combatant.is_alive

    combatant.health = -12.5
    assert combatant.health == 0.0
    assert not combatant.is_alive

    combatant.health = 0.01
    assert combatant.is_alive


def test_take_damage_records_actual_loss() -> None:
    combatant = _make_combatant()
    combatant.health = 10.0

    actual = combatant.take_damage(25.0)

    assert actual == 10.0
    assert combatant.health == 0.0
    assert combatant.damage_taken == 10.0
    assert not combatant.is_alive


def test_negative_damage_does_not_heal() -> None:
    combatant = _make_combatant()
    combatant.health = 50.0

    assert combatant.take_damage(-20.0) == 0.0
    assert combatant.health == 50.0


def test_selection_holds_at_most_two_distinct_entries() -> None:
    combatant = _make_combatant()

    assert combatant.select_attack(AttackKind.FIRE)
    assert not combatant.select_attack(AttackKind.FIRE)
    assert combatant.select_attack(AttackKind.ACID)
    assert not combatant.select_attack(AttackKind.WEAPON)
    assert combatant.selected_attacks == [AttackKind.FIRE, AttackKind.ACID]

    assert combatant.deselect_attack(AttackKind.FIRE)
    assert not combatant.deselect_attack(AttackKind.FIRE)
    assert combatant.select_attack(AttackKind.WEAPON)
    assert not combatant.is_ready

    combatant.select_defense(DefenseKind.WEAPON)
    combatant.select_defense(DefenseKind.PSYCHO)
    assert combatant.is_ready


def test_set_selections_keeps_first_two_distinct() -> None:
    combatant = _make_combatant()
    combatant.set_selections(
        [AttackKind.FIRE, AttackKind.FIRE, AttackKind.PSYCHO, AttackKind.ACID],
        [DefenseKind.ACID, DefenseKind.WEAPON, DefenseKind.FIRE],
    )
    assert combatant.selected_attacks == [AttackKind.FIRE, AttackKind.PSYCHO]
    assert combatant.selected_defenses == [DefenseKind.ACID, DefenseKind.WEAPON]


def test_reset_for_new_match_restores_health_and_counters() -> None:
    combatant = _make_combatant()
    combatant.set_selections([AttackKind.FIRE, AttackKind.ACID], [DefenseKind.FIRE, DefenseKind.ACID])
    combatant.take_damage(40.0)
    combatant.deal_damage(12.0)
    combatant.win_round()

    combatant.reset_for_new_match()

    assert combatant.health == combatant.max_health
    assert combatant.damage_dealt == 0.0
    assert combatant.damage_taken == 0.0
    assert combatant.rounds_won == 0
    assert combatant.selected_attacks == []
    assert combatant.selected_defenses == []
