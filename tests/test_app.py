from __future__ import annotations

from duelsim.app import build_app
from duelsim.config import DuelConfig
from duelsim.domain.abilities import ATTACK_ORDER, DEFENSE_ORDER
from duelsim.services.character_store import InMemoryCharacterStore


def _play_to_result(app, match) -> None:
    battle_service = app.battle_service
    battle_service.start_match(match)
    for _ in range(200):
        if match.phase == "result":
            return
        for combatant in match.combatants():
            if match.is_human(combatant):
                for attack in ATTACK_ORDER[:2]:
                    battle_service.select_attack(match, combatant.combatant_id, attack)
                for defense in DEFENSE_ORDER[:2]:
                    battle_service.select_defense(match, combatant.combatant_id, defense)
        battle_service.execute_round(match)
        app.scheduler.flush()


def test_pve_match_with_stored_character_records_progression() -> None:
    store = InMemoryCharacterStore()
    app = build_app(DuelConfig(ai_delay_seconds=0.5), store=store)
    created = app.character_service.create_from_preset("Hero", "rogue")
    assert created.success

    match = app.new_match("pve", seed=7)
    assert match.character_bound
    assert match.player1.name == "Hero"
    assert match.player2.is_ai

    _play_to_result(app, match)

    assert match.phase == "result"
    saved = store.load_character()
    assert saved is not None
    assert saved.battles_played == 1
    assert saved.experience > 0 or saved.level > 1
    assert "=== Round 1 ===" in app.event_log.lines
    assert app.event_log.lines[0].startswith("Battle begins! Hero vs Computer")


def test_pvp_match_without_character_uses_defaults() -> None:
    store = InMemoryCharacterStore()
    app = build_app(DuelConfig(ai_delay_seconds=0.0), store=store)

    match = app.new_match("pvp", seed=3)

    assert not match.character_bound
    assert match.player1.name == "Player"
    assert match.player2.name == "Player 2"
    assert not match.player2.is_ai
    _play_to_result(app, match)
    assert match.phase == "result"
    assert store.save_count == 0


def test_same_seed_replays_the_same_match() -> None:
    outcomes = []
    for _ in range(2):
        app = build_app(DuelConfig(ai_delay_seconds=0.0), store=InMemoryCharacterStore())
        match = app.new_match("pve", seed=11)
        _play_to_result(app, match)
        outcomes.append((match.outcome, match.round_number, [r.player1_damage_dealt for r in match.round_results]))
    assert outcomes[0] == outcomes[1]
