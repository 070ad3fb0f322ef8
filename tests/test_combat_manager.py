"""
Comprehensive tests for CombatManager.

Covers: combat start, card play validation, X-cost, exhaust routing,
end-of-turn flow, enemy actions, poison, victory/defeat and events.
"""

import pytest

from packages.combat import CombatConfig, CombatManager, CombatPhase, Random
from packages.combat.content.cards import CardEffect
from packages.combat.content.enemies import EnemyAction, EnemyMove, Intent
from packages.combat.content.starter import CARDS, create_starter_player, get_card, get_encounter
from packages.combat.events import CombatEvent

from conftest import make_template, simple_card, strikes


def snapshot_state(manager):
    """Observable state used to assert a rejected call changed nothing."""
    return (
        manager.player.energy,
        manager.player.current_hp,
        manager.player.block,
        [id(c) for c in manager.hand],
        [id(c) for c in manager.discard_pile],
        [id(c) for c in manager.exhaust_pile],
        [e.current_hp for e in manager.enemies],
        manager.turns.cards_played_this_combat,
    )


# =============================================================================
# START
# =============================================================================


class TestStartCombat:

    def test_opening_state(self, make_combat):
        manager = make_combat()
        assert manager.phase == CombatPhase.PLAYER_TURN
        assert manager.turn == 1
        assert manager.is_player_turn
        assert len(manager.hand) == 5
        assert len(manager.draw_pile) == 5
        assert manager.player.energy == 3

    def test_resets_player_combat_stats(self, make_combat):
        manager = make_combat(start=False)
        manager.player.strength = 4
        manager.player.block = 9
        manager.player.weak = 2
        manager.start_combat()
        assert manager.player.strength == 0
        assert manager.player.block == 0
        assert manager.player.weak == 0

    def test_enemies_have_intents(self, make_combat):
        manager = make_combat(enemies=get_encounter("jaw_worm"))
        enemy = manager.enemies[0]
        assert 40 <= enemy.max_hp <= 44
        assert enemy.current_intent is not None

    def test_innate_in_opening_hand(self, make_combat):
        manager = make_combat(deck=strikes(10) + [get_card("opening_gambit")])
        assert any(c.id == "opening_gambit" for c in manager.hand)
        assert len(manager.hand) == 5

    def test_deck_is_not_mutated(self, make_combat):
        deck = strikes(10)
        manager = make_combat(deck=deck)
        manager.play_card(manager.hand[0], manager.enemies[0])
        assert all(not any(c is d for d in deck) for c in manager.discard_pile)
        assert len(manager.player.deck) == 10

    def test_start_twice_rejected(self, make_combat):
        manager = make_combat()
        assert manager.start_combat() is False

    def test_same_seed_same_combat(self):
        def run(seed):
            manager = CombatManager(create_starter_player(), get_encounter("jaw_worm"), rng=Random(seed))
            manager.start_combat()
            return [c.id for c in manager.hand], manager.enemies[0].max_hp

        assert run(99) == run(99)


# =============================================================================
# CARD PLAY
# =============================================================================


class TestPlayCard:

    def test_strike_deals_damage(self, make_combat):
        manager = make_combat()
        enemy = manager.enemies[0]
        card = manager.hand[0]
        assert manager.play_card(card, enemy)
        assert enemy.current_hp == 34
        assert manager.player.energy == 2
        assert manager.discard_pile[-1] is card
        assert card not in manager.hand

    def test_strength_weak_vulnerable_pipeline(self, make_combat):
        manager = make_combat(enemies=[make_template(hp=100)])
        enemy = manager.enemies[0]
        manager.player.strength = 3
        manager.player.weak = 1
        enemy.vulnerable = 1
        manager.play_card(manager.hand[0], enemy)
        # (6+3) * 0.75 = 6 -> * 1.5 = 9
        assert enemy.current_hp == 91

    def test_block_absorbs_card_damage(self, make_combat):
        manager = make_combat()
        enemy = manager.enemies[0]
        enemy.block = 4
        manager.play_card(manager.hand[0], enemy)
        assert enemy.block == 0
        assert enemy.current_hp == 38

    def test_multi_hit(self, make_combat):
        manager = make_combat(deck=[get_card("twin_strike") for _ in range(5)])
        enemy = manager.enemies[0]
        manager.play_card(manager.hand[0], enemy)
        assert enemy.current_hp == 30

    def test_all_enemies(self, make_combat):
        manager = make_combat(deck=[get_card("cleave") for _ in range(5)],
                              enemies=[make_template("a"), make_template("b")])
        assert manager.play_card(manager.hand[0])
        assert [e.current_hp for e in manager.enemies] == [32, 32]

    def test_upgraded_card_uses_upgraded_effects(self, make_combat):
        manager = make_combat(deck=[get_card("strike", upgraded=True) for _ in range(5)])
        manager.play_card(manager.hand[0], manager.enemies[0])
        assert manager.enemies[0].current_hp == 31

    def test_effects_resolve_in_order(self, make_combat):
        manager = make_combat(deck=[get_card("iron_wave") for _ in range(5)])
        manager.play_card(manager.hand[0], manager.enemies[0])
        assert manager.player.block == 5
        assert manager.enemies[0].current_hp == 35


class TestPlayCardRejections:

    def test_insufficient_energy(self, make_combat):
        manager = make_combat(deck=[get_card("bash") for _ in range(5)])
        enemy = manager.enemies[0]
        assert manager.play_card(manager.hand[0], enemy)
        before = snapshot_state(manager)
        assert manager.play_card(manager.hand[0], enemy) is False
        assert snapshot_state(manager) == before

    def test_card_not_in_hand(self, make_combat):
        manager = make_combat()
        before = snapshot_state(manager)
        assert manager.play_card(get_card("strike"), manager.enemies[0]) is False
        assert snapshot_state(manager) == before

    def test_missing_target(self, make_combat):
        manager = make_combat()
        before = snapshot_state(manager)
        assert manager.play_card(manager.hand[0]) is False
        assert manager.play_card(manager.hand[0], None) is False
        assert snapshot_state(manager) == before

    def test_dead_target(self, make_combat):
        manager = make_combat(enemies=[make_template("a"), make_template("b")])
        manager.enemies[0].current_hp = 0
        before = snapshot_state(manager)
        assert manager.play_card(manager.hand[0], manager.enemies[0]) is False
        assert snapshot_state(manager) == before

    def test_foreign_target(self, make_combat):
        manager = make_combat()
        other = make_combat()
        assert manager.play_card(manager.hand[0], other.enemies[0]) is False

    def test_unplayable_status(self, make_combat):
        manager = make_combat(deck=[get_card("wound") for _ in range(5)])
        assert manager.play_card(manager.hand[0]) is False
        assert manager.get_playable_cards() == []

    def test_rejected_during_enemy_turn(self, make_combat):
        manager = make_combat()
        manager.end_player_turn(run_enemy_turn=False)
        assert manager.phase == CombatPhase.ENEMY_TURN
        assert manager.play_card(manager.hand[0], manager.enemies[0]) is False
        assert manager.end_player_turn() is False

    def test_rejected_after_combat_end(self, make_combat):
        manager = make_combat(enemies=[make_template(hp=6)])
        manager.play_card(manager.hand[0], manager.enemies[0])
        assert manager.combat_ended
        before = snapshot_state(manager)
        assert manager.play_card(manager.hand[0], manager.enemies[0]) is False
        assert manager.end_player_turn() is False
        assert snapshot_state(manager) == before


class TestXCost:

    def test_spends_all_energy(self, make_combat):
        manager = make_combat(deck=[get_card("overcharge") for _ in range(5)],
                              enemies=[make_template("a"), make_template("b")])
        assert manager.play_card(manager.hand[0])
        assert manager.player.energy == 0
        assert [e.current_hp for e in manager.enemies] == [37, 37]

    def test_playable_with_zero_energy(self, make_combat):
        manager = make_combat(deck=[get_card("overcharge") for _ in range(5)])
        manager.player.energy = 0
        assert manager.play_card(manager.hand[0])
        assert manager.enemies[0].current_hp == 40


class TestRouting:

    def test_exhaust_card(self, make_combat):
        manager = make_combat(deck=[get_card("offering")] + strikes(9))
        offering = next((c for c in manager.hand if c.id == "offering"), None)
        if offering is None:
            offering = manager.piles.draw_pile[0]
            manager.piles.draw_specific_card(offering)
        assert manager.play_card(offering)
        assert manager.exhaust_pile[-1] is offering
        assert offering not in manager.discard_pile
        assert manager.player.energy == 5
        assert manager.player.current_hp == 74

    def test_power_goes_to_discard_when_not_exhaust(self, make_combat):
        manager = make_combat(deck=[get_card("inflame") for _ in range(5)])
        card = manager.hand[0]
        manager.play_card(card)
        assert manager.player.strength == 2
        assert manager.discard_pile[-1] is card

    def test_generated_card(self, make_combat):
        maker = simple_card("maker", effects=[CardEffect("ADD_TO_HAND", 1, card_id="dazed")], cost=0)
        manager = make_combat(deck=[maker] + strikes(4))
        card = next(c for c in manager.hand if c.id == "maker")
        manager.play_card(card)
        assert any(c.id == "dazed" for c in manager.hand)

    def test_next_card_twice(self, make_combat):
        double = simple_card("double", cost=0, effects=[CardEffect("NEXT_CARD_TWICE", 1)])
        manager = make_combat(deck=[double] + strikes(4))
        manager.play_card(next(c for c in manager.hand if c.id == "double"))
        strike = next(c for c in manager.hand if c.id == "strike")
        manager.play_card(strike, manager.enemies[0])
        assert manager.enemies[0].current_hp == 28
        assert manager.turns.play_twice_charges == 0


# =============================================================================
# TURN FLOW
# =============================================================================


class TestEndTurn:

    def test_enemy_attacks_and_new_turn_starts(self, make_combat):
        manager = make_combat(enemies=[make_template(damage=6)])
        manager.end_player_turn()
        assert manager.player.current_hp == 74
        assert manager.turn == 2
        assert manager.is_player_turn
        assert manager.player.energy == 3
        assert len(manager.hand) == 5

    def test_block_absorbs_enemy_attack_then_resets(self, make_combat):
        manager = make_combat(deck=[get_card("defend") for _ in range(10)],
                              enemies=[make_template(damage=6)])
        manager.play_card(manager.hand[0])
        manager.end_player_turn()
        assert manager.player.current_hp == 79
        assert manager.player.block == 0

    def test_hand_cleanup_rules(self, make_combat):
        deck = [get_card("steady_stance"), get_card("fleeting_guard")] + strikes(3)
        manager = make_combat(deck=deck, enemies=[make_template(damage=0)])
        stance = next(c for c in manager.hand if c.id == "steady_stance")
        guard = next(c for c in manager.hand if c.id == "fleeting_guard")
        manager.end_player_turn()
        assert stance in manager.hand
        assert guard in manager.exhaust_pile

    def test_retain_hand_effect(self, make_combat):
        hold = simple_card("hold", cost=0, innate=True, effects=[CardEffect("RETAIN_HAND")])
        manager = make_combat(deck=[hold] + strikes(9), enemies=[make_template(damage=0)])
        kept = [c for c in manager.hand if c.id == "strike"]
        manager.play_card(next(c for c in manager.hand if c.id == "hold"))
        manager.end_player_turn()
        assert all(c in manager.hand for c in kept)

    def test_player_debuffs_tick(self, make_combat):
        manager = make_combat(enemies=[make_template(damage=0)])
        manager.player.weak = 2
        manager.end_player_turn()
        assert manager.player.weak == 1

    def test_enemy_block_resets_before_it_acts(self, make_combat):
        guard = make_template(moves=[
            EnemyMove("guard", "Guard", Intent.DEFEND, [EnemyAction("APPLY_BLOCK_SELF", 8)]),
        ])
        manager = make_combat(enemies=[guard])
        manager.end_player_turn()
        assert manager.enemies[0].block == 8
        manager.end_player_turn()
        assert manager.enemies[0].block == 8

    def test_enemy_debuff_and_strength(self, make_combat):
        hexer = make_template(moves=[
            EnemyMove("hex", "Hex", Intent.DEBUFF,
                      [EnemyAction("APPLY_WEAK", 2), EnemyAction("APPLY_STRENGTH_SELF", 2)]),
        ])
        manager = make_combat(enemies=[hexer])
        manager.end_player_turn()
        assert manager.player.weak == 2
        assert manager.enemies[0].strength == 2

    def test_enemy_adds_status_card(self, make_combat):
        slimer = make_template(moves=[
            EnemyMove("spit", "Spit", Intent.DEBUFF, [EnemyAction("ADD_STATUS_CARD", 2, card_id="wound")]),
        ])
        manager = make_combat(enemies=[slimer])
        manager.end_player_turn()
        assert manager.piles.total_cards == 12

    def test_unknown_enemy_action_is_skipped(self, make_combat, caplog):
        odd = make_template(moves=[
            EnemyMove("odd", "Odd", Intent.UNKNOWN, [EnemyAction("SUMMON_MINION", 1), EnemyAction("DAMAGE", 3)]),
        ])
        manager = make_combat(enemies=[odd])
        manager.end_player_turn()
        assert manager.player.current_hp == 77
        assert "SUMMON_MINION" in caplog.text

    def test_delayed_enemy_turn(self, make_combat):
        manager = make_combat(enemies=[make_template(damage=6)])
        assert manager.end_player_turn(run_enemy_turn=False)
        assert manager.player.current_hp == 80
        assert manager.execute_enemy_turn()
        assert manager.player.current_hp == 74
        assert manager.is_player_turn
        assert manager.execute_enemy_turn() is False


class TestPoison:

    def test_poison_ticks_after_enemy_acts(self, make_combat):
        manager = make_combat(deck=[get_card("deadly_poison") for _ in range(5)],
                              enemies=[make_template(hp=40, damage=0)])
        enemy = manager.enemies[0]
        manager.play_card(manager.hand[0], enemy)
        assert enemy.poison == 5
        manager.end_player_turn()
        assert enemy.current_hp == 35
        assert enemy.poison == 4

    def test_player_poison_ticks_at_end_of_player_turn(self, make_combat):
        poisoner = make_template(moves=[
            EnemyMove("spit", "Spit", Intent.DEBUFF, [EnemyAction("APPLY_POISON", 5)]),
        ])
        manager = make_combat(enemies=[poisoner])
        manager.end_player_turn()
        assert manager.player.poison == 5
        assert manager.player.current_hp == 80

        manager.end_player_turn()
        assert manager.player.current_hp == 75
        manager.end_player_turn()
        assert manager.player.current_hp == 70
        assert manager.damage_taken == 10

    def test_player_poison_can_kill(self, make_combat):
        manager = make_combat(hp=80, enemies=[make_template(damage=0)])
        manager.player.current_hp = 3
        manager.player.poison = 5
        manager.end_player_turn()
        assert manager.combat_ended
        assert manager.victory is False
        assert manager.turn == 1

    def test_poison_kill_is_victory(self, make_combat):
        manager = make_combat(deck=[get_card("deadly_poison") for _ in range(5)],
                              enemies=[make_template(hp=5, damage=0)])
        manager.play_card(manager.hand[0], manager.enemies[0])
        manager.end_player_turn()
        assert manager.combat_ended
        assert manager.victory is True


# =============================================================================
# COMBAT END
# =============================================================================


class TestCombatEnd:

    def test_victory(self, make_combat):
        manager = make_combat(enemies=[make_template(hp=12)])
        enemy = manager.enemies[0]
        manager.play_card(manager.hand[0], enemy)
        manager.play_card(manager.hand[0], enemy)
        assert manager.combat_ended
        assert manager.victory is True
        assert manager.get_alive_enemies() == []

    def test_defeat_halts_before_later_enemies(self, make_combat):
        manager = make_combat(hp=10, enemies=[make_template("big", damage=50), make_template("small")])
        small = manager.enemies[1]
        intent_before = small.current_intent
        history_before = list(small.move_history)
        manager.end_player_turn()
        assert manager.combat_ended
        assert manager.victory is False
        assert small.current_intent is intent_before
        assert small.move_history == history_before
        assert manager.turn == 1

    def test_victory_and_defeat_exclusive(self, make_combat):
        offering = simple_card("burn", cost=0, effects=[CardEffect("LOSE_HP", 100),
                                                        CardEffect("DAMAGE_ALL", 100)])
        manager = make_combat(hp=10, deck=[offering] * 5)
        manager.play_card(manager.hand[0])
        assert manager.combat_ended
        assert manager.victory is True
        ends = manager.combat_log.get_events(CombatEvent.COMBAT_END.value)
        assert len(ends) == 1

    def test_result_summary(self, make_combat):
        manager = make_combat(enemies=[make_template(hp=12, damage=5)])
        manager.end_player_turn()
        enemy = manager.enemies[0]
        manager.play_card(manager.hand[0], enemy)
        manager.play_card(manager.hand[0], enemy)
        result = manager.get_result()
        assert result.victory is True
        assert result.turns == 2
        assert result.hp_lost == 5
        assert result.damage_taken == 5
        assert result.damage_dealt == 12
        assert result.cards_played == 2
        assert result.cards_played_sequence == ["strike", "strike"]


# =============================================================================
# EVENTS / QUERIES
# =============================================================================


class TestEvents:

    def test_card_played_event(self, make_combat):
        manager = make_combat()
        played = []
        manager.events.on(CombatEvent.CARD_PLAYED, lambda card, **_: played.append(card.id))
        manager.play_card(manager.hand[0], manager.enemies[0])
        assert played == ["strike"]

    def test_failing_listener_does_not_break_combat(self, make_combat):
        manager = make_combat()

        def explode(**_):
            raise RuntimeError("listener bug")

        manager.events.on(CombatEvent.CARD_PLAYED, explode)
        assert manager.play_card(manager.hand[0], manager.enemies[0])

    def test_event_order_for_turn(self, make_combat):
        manager = make_combat(enemies=[make_template(damage=1)])
        manager.end_player_turn()
        types = [e.event_type for e in manager.combat_log.entries if e.event_type != "card_drawn"]
        turn_end = types.index("turn_end")
        enemy_start = types.index("enemy_turn_start")
        assert turn_end < enemy_start < types.index("enemy_action") < types.index("turn_start", enemy_start)

    def test_turn_entries_in_combat_log(self, make_combat):
        manager = make_combat(enemies=[make_template(damage=1)])
        manager.end_player_turn()
        log = manager.combat_log
        starts = log.get_events(CombatEvent.TURN_START.value)
        assert [e.turn for e in starts] == [1, 2]
        assert [e.data["turn"] for e in starts] == [1, 2]
        assert [e.data["turn"] for e in log.get_events(CombatEvent.TURN_END.value)] == [1]
        assert [e.data["turn"] for e in log.get_events(CombatEvent.ENEMY_TURN_START.value)] == [1]

    def test_shuffle_event(self, make_combat):
        manager = make_combat(deck=strikes(6), enemies=[make_template(hp=200, damage=0)])
        manager.end_player_turn()
        assert manager.piles.shuffle_count == 1
        assert manager.combat_log.get_events("shuffle")


class TestQueries:

    def test_views_are_read_only(self, make_combat):
        manager = make_combat()
        assert isinstance(manager.hand, tuple)
        assert isinstance(manager.draw_pile, tuple)

    def test_playable_cards(self, make_combat):
        manager = make_combat(deck=[get_card("bash")] + strikes(4))
        assert len(manager.get_playable_cards()) == 5
        manager.player.energy = 1
        assert all(c.id == "strike" for c in manager.get_playable_cards())

    def test_can_play_card_matches_play(self, make_combat):
        manager = make_combat()
        card = manager.hand[0]
        assert manager.can_play_card(card) is False
        assert manager.can_play_card(card, manager.enemies[0]) is True

    def test_custom_hand_size(self, make_combat):
        manager = make_combat(config=CombatConfig(hand_size=3))
        assert len(manager.hand) == 3

    def test_invalid_config(self):
        with pytest.raises(ValueError):
            CombatConfig(hand_size=-1)

    def test_starter_player_full_fight_terminates(self):
        player = create_starter_player()
        manager = CombatManager(player, get_encounter("jaw_worm"), rng=Random(5),
                                card_pool=list(CARDS.values()))
        manager.start_combat()
        for _ in range(40):
            if manager.combat_ended:
                break
            for card in list(manager.hand):
                target = manager.get_alive_enemies()[0] if manager.get_alive_enemies() else None
                if manager.can_play_card(card, target):
                    manager.play_card(card, target)
                if manager.combat_ended:
                    break
            manager.end_player_turn()
        assert manager.combat_ended
        assert manager.victory is not None
