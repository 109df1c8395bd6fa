from __future__ import annotations

from duelsim.domain.entities import Character, CoreStats
from duelsim.domain.entities.character import MAX_LEVEL, experience_threshold
from duelsim.domain.progression import (
    apply_level_ups,
    experience_for_result,
    gain_experience,
    is_win,
    record_battle_result,
)


def _make_character(level: int = 1, experience: int = 0) -> Character:
    return Character(name="Hero", stats=CoreStats(5, 5, 5, 5, 5), level=level, experience=experience)


def test_experience_rewards() -> None:
    assert experience_for_result(True, 125.9) == 92
    assert experience_for_result(False, 125.9) == 26
    assert experience_for_result(True, 0.0) == 80
    assert experience_for_result(False, 19.99) == 20


def test_thresholds() -> None:
    assert experience_threshold(1) == 150
    assert experience_threshold(2) == 250
    assert experience_threshold(49) == 4950


def test_single_gain_can_cross_several_levels() -> None:
    character = _make_character()

    result = gain_experience(character, 400)

    assert character.level == 3
    assert character.experience == 0
    assert result.levels_gained == 2
    assert result.points_granted == 4
    assert character.total_bonus_points == 4


def test_partial_gain_keeps_remainder() -> None:
    character = _make_character()
    gain_experience(character, 399)
    assert character.level == 2
    assert character.experience == 249
    assert character.experience_to_next_level == 250


def test_split_gains_match_one_large_gain() -> None:
    whole = _make_character()
    split = _make_character()

    gain_experience(whole, 1000)
    for amount in (300, 300, 400):
        gain_experience(split, amount)

    assert (whole.level, whole.experience, whole.total_bonus_points) == (4, 250, 6)
    assert (split.level, split.experience, split.total_bonus_points) == (4, 250, 6)


def test_level_cap_discards_leftover() -> None:
    character = _make_character(level=49)

    result = gain_experience(character, 5000)

    assert character.level == MAX_LEVEL
    assert character.experience == 0
    assert result.levels_gained == 1
    assert result.experience_discarded == 50
    assert character.is_max_level

    again = gain_experience(character, 300)
    assert again.levels_gained == 0
    assert character.level == MAX_LEVEL
    assert character.experience == 0


def test_huge_gain_stops_at_cap() -> None:
    character = _make_character()
    result = gain_experience(character, 10**7)
    assert character.level == MAX_LEVEL
    assert result.levels_gained == MAX_LEVEL - 1
    assert character.total_bonus_points == (MAX_LEVEL - 1) * 2


def test_apply_level_ups_without_enough_experience_is_a_no_op() -> None:
    character = _make_character(experience=149)
    result = apply_level_ups(character)
    assert result.levels_gained == 0
    assert character.level == 1
    assert character.experience == 149


def test_level_never_decreases_across_results() -> None:
    character = _make_character()
    previous = character.level
    for won in (True, False, True, True, False):
        record_battle_result(character, won=won, damage_dealt=90.0, damage_taken=50.0)
        assert character.level >= previous
        previous = character.level


def test_record_battle_result_updates_record() -> None:
    character = _make_character()
    assert character.win_rate == 0.0

    result = record_battle_result(character, won=True, damage_dealt=95.0, damage_taken=40.5)
    assert result.experience_gained == 89
    assert not result.leveled_up
    record_battle_result(character, won=False, damage_dealt=30.0, damage_taken=90.0)

    assert character.battles_won == 1
    assert character.battles_lost == 1
    assert character.battles_played == 2
    assert character.win_rate == 50.0
    assert character.total_damage_dealt == 125.0
    assert character.total_damage_taken == 130.5
    assert character.experience == 89 + 21


def test_draw_counts_as_loss() -> None:
    assert is_win("player1")
    assert not is_win("draw")
    assert not is_win("player2")
    assert is_win("player2", side="player2")
