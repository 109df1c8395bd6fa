from __future__ import annotations

import itertools

import pytest

from duelsim.domain.abilities import ATTACK_ORDER, DEFENSE_ORDER, AttackKind, DefenseKind
from duelsim.domain.damage import (
    ATTACK_STAT_WEIGHTS,
    compute_base_damage,
    compute_defense_reduction,
    dodge_chance,
    resolve_attack_damage,
)
from duelsim.domain.entities import Combatant, CoreStats
from duelsim.domain.rules import MAX_REDUCTION
from tests.helpers.rng_stubs import FixedRNG, ScriptedRNG


def _make_combatant(combatant_id: str, stats: CoreStats | None = None) -> Combatant:
    return Combatant(
        combatant_id=combatant_id,
        name=combatant_id,
        stats=stats or CoreStats(5, 5, 5, 5, 5),
    )


def test_weapon_attack_on_even_fighters() -> None:
    attacker = _make_combatant("a")
    defender = _make_combatant("d")
    attacker.selected_attacks = [AttackKind.WEAPON]
    defender.selected_defenses = [DefenseKind.WEAPON]

    assert compute_base_damage(AttackKind.WEAPON, attacker.stats) == pytest.approx(11.25)
    assert compute_defense_reduction(AttackKind.WEAPON, defender.stats, defender.selected_defenses) == pytest.approx(0.34)

    resolution = resolve_attack_damage(attacker, defender, FixedRNG())
    assert resolution.total_damage == pytest.approx(7.425)
    assert resolution.dodge_count == 0

    defender.take_damage(resolution.total_damage)
    assert defender.health == pytest.approx(82.575)


def test_every_attack_row_weighs_half_a_point_per_stat() -> None:
    for attack in ATTACK_ORDER:
        weights = ATTACK_STAT_WEIGHTS[attack]
        assert weights.endurance == 0.0
        assert compute_base_damage(attack, CoreStats(5, 5, 5, 5, 5)) == pytest.approx(11.25)


def test_reduction_never_exceeds_cap() -> None:
    tank = CoreStats(1, 10, 40, 1, 1)
    for attack in ATTACK_ORDER:
        for pair in itertools.combinations(DEFENSE_ORDER, 2):
            for dodged in (False, True):
                reduction = compute_defense_reduction(attack, tank, pair, dodged=dodged)
                assert 0.0 <= reduction <= MAX_REDUCTION


def test_damage_is_never_negative() -> None:
    attacker = _make_combatant("a", CoreStats(1, 1, 1, 1, 1))
    defender = _make_combatant("d", CoreStats(1, 10, 50, 1, 1))
    attacker.selected_attacks = [AttackKind.FIRE, AttackKind.ACID]
    defender.selected_defenses = [DefenseKind.FIRE, DefenseKind.ACID]

    resolution = resolve_attack_damage(attacker, defender, FixedRNG(roll=0.0))
    assert resolution.total_damage >= 0.0
    for entry in resolution.breakdown:
        assert entry.damage == pytest.approx(entry.base_damage * (1 - MAX_REDUCTION))


def test_each_attack_rolls_dodge_independently() -> None:
    attacker = _make_combatant("a")
    defender = _make_combatant("d")
    attacker.selected_attacks = [AttackKind.WEAPON, AttackKind.LIGHTNING]
    defender.selected_defenses = [DefenseKind.PSYCHO, DefenseKind.ACID]

    # agility 5 -> 5% dodge: first roll evades, second does not
    rng = ScriptedRNG([0.01, 0.5])
    resolution = resolve_attack_damage(attacker, defender, rng)

    assert rng.random_calls == 2
    first, second = resolution.breakdown
    assert first.dodged and not second.dodged
    assert first.reduction == pytest.approx(second.reduction + 0.5)
    assert first.damage < second.damage
    assert resolution.dodge_count == 1


def test_dodge_chance_scales_with_agility() -> None:
    assert dodge_chance(CoreStats(5, 0, 5, 5, 5)) == 0.0
    assert dodge_chance(CoreStats(5, 10, 5, 5, 5)) == pytest.approx(0.1)


def test_no_attacks_means_no_damage() -> None:
    attacker = _make_combatant("a")
    defender = _make_combatant("d")

    resolution = resolve_attack_damage(attacker, defender, FixedRNG())
    assert resolution.total_damage == 0.0
    assert resolution.breakdown == ()
