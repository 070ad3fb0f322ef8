"""
Relic Tests

Trigger dispatch, threshold counters, next-combat bonuses, passive
predicates and onObtain effects.
"""

from packages.combat import CombatConfig
from packages.combat.content.cards import CardEffect
from packages.combat.content.relics import Relic, RelicEffect
from packages.combat.content.starter import RELICS
from packages.combat.events import CombatEvent
from packages.combat.registry import relics_passive
from packages.combat.relic_manager import RelicManager
from packages.combat.state.entities import Player

from conftest import make_template, simple_card, strikes


def play_strikes(manager, count):
    target = manager.get_alive_enemies()[0]
    for _ in range(count):
        card = next(c for c in manager.hand if c.id == "strike")
        assert manager.play_card(card, target)


class TestTriggerDispatch:

    def test_legacy_trigger_names_normalized(self):
        effect = RelicEffect("COMBAT_START", "BLOCK", 10)
        assert effect.trigger == "onCombatStart"

    def test_combat_start_relic(self, make_combat):
        manager = make_combat(relics=[RELICS["anchor"]])
        assert manager.player.block == 10

    def test_relic_order_is_acquisition_order(self):
        player = Player()
        player.add_relic(RELICS["vajra"])
        player.add_relic(RELICS["anchor"])
        pairs = RelicManager().get_effects_for_trigger(player, "onCombatStart")
        assert [relic.id for relic, _ in pairs] == ["vajra", "anchor"]

    def test_relic_triggered_event(self, make_combat):
        manager = make_combat(relics=[RELICS["vajra"]])
        fired = manager.combat_log.get_events(CombatEvent.RELIC_TRIGGERED.value)
        assert [e.data["relic_id"] for e in fired] == ["vajra"]

    def test_unknown_action_does_not_stop_combat(self, make_combat):
        broken = Relic("broken", "Broken", [RelicEffect("onCombatStart", "MADE_UP_ACTION", 1)])
        manager = make_combat(relics=[broken, RELICS["anchor"]])
        assert manager.player.block == 10
        assert manager.is_player_turn


class TestThresholdRelics:

    def test_shuriken_fires_on_third_attack(self, make_combat):
        manager = make_combat(relics=[RELICS["shuriken"]])
        relic = manager.player.get_relic("shuriken")

        play_strikes(manager, 2)
        assert relic.counter == 2
        assert manager.player.strength == 0

        play_strikes(manager, 1)
        assert relic.counter == 0
        assert manager.player.strength == 1

    def test_counter_persists_across_turns(self, make_combat):
        manager = make_combat(relics=[RELICS["shuriken"]], enemies=[make_template(hp=200, damage=0)])
        relic = manager.player.get_relic("shuriken")

        play_strikes(manager, 2)
        manager.end_player_turn()
        assert relic.counter == 2

        play_strikes(manager, 1)
        assert manager.player.strength == 1

    def test_kunai_counts_attacks_across_turns(self, make_combat):
        manager = make_combat(relics=[RELICS["kunai"]], enemies=[make_template(hp=200, damage=0)])
        play_strikes(manager, 2)
        manager.end_player_turn()
        play_strikes(manager, 1)
        assert manager.player.dexterity == 1
        assert "single turn" not in RELICS["kunai"].description

    def test_counter_never_negative_on_load(self):
        player = Player()
        player.add_relic(RELICS["shuriken"])
        RelicManager.load_counters(player, [-4])
        assert player.relics[0].counter == 0


class TestNextCombatEnergy:

    def test_bonus_consumed_once(self, make_combat):
        relic_manager = RelicManager()
        player = Player()
        player.add_relic(RELICS["ancient_tea_set"])
        relic_manager.trigger_relics(player, "onRest")
        assert relic_manager.pending_energy == 2

        first = make_combat(relic_manager=relic_manager)
        assert first.player.energy == 5
        assert relic_manager.pending_energy == 0

        second = make_combat(relic_manager=relic_manager)
        assert second.player.energy == 3


class TestObtain:

    def test_strawberry_raises_max_hp(self):
        player = Player(max_hp=80)
        player.add_relic(RELICS["strawberry"])
        assert player.max_hp == 87
        assert player.current_hp == 87

    def test_potion_belt_adds_slots(self):
        player = Player()
        player.add_relic(RELICS["potion_belt"])
        assert len(player.potions) == 5

    def test_owned_relic_is_a_copy(self):
        player = Player()
        owned = player.add_relic(RELICS["shuriken"])
        owned.counter = 2
        assert RELICS["shuriken"].counter == 0


class TestPassiveRelics:

    def test_tungsten_rod(self):
        player = Player()
        player.add_relic(RELICS["tungsten_rod"])
        assert relics_passive.check_tungsten_rod(player, 5) == 4
        assert relics_passive.check_tungsten_rod(player, 1) == 0
        assert relics_passive.check_tungsten_rod(player, 0) == 0

    def test_torii(self):
        player = Player()
        player.add_relic(RELICS["torii"])
        assert relics_passive.check_torii(player, 5) == 1
        assert relics_passive.check_torii(player, 1) == 1
        assert relics_passive.check_torii(player, 6) == 6

    def test_red_skull_only_when_bloodied(self):
        player = Player(max_hp=80)
        player.add_relic(RELICS["red_skull"])
        assert relics_passive.check_red_skull(player) == 0
        player.current_hp = 40
        assert relics_passive.check_red_skull(player) == 3

    def test_without_relics(self):
        player = Player()
        assert relics_passive.check_tungsten_rod(player, 5) == 5
        assert not relics_passive.has_paper_phrog(player)
        assert not relics_passive.check_ice_cream(player)

    def test_passive_relic_ignored_by_trigger(self, make_combat):
        manager = make_combat(relics=[RELICS["tungsten_rod"]])
        results = manager.relic_manager.trigger_relics(manager.player, "passive")
        assert all(r.success for r in results)

    def test_tungsten_rod_in_combat(self, make_combat):
        manager = make_combat(relics=[RELICS["tungsten_rod"]], enemies=[make_template(damage=6)])
        manager.end_player_turn()
        assert manager.player.current_hp == 80 - 5

    def test_red_skull_adds_damage(self, make_combat):
        manager = make_combat(hp=80, relics=[RELICS["red_skull"]])
        manager.player.current_hp = 30
        enemy = manager.get_alive_enemies()[0]
        play_strikes(manager, 1)
        assert enemy.current_hp == 40 - 9

    def test_ice_cream_keeps_energy(self, make_combat):
        manager = make_combat(relics=[RELICS["ice_cream"]], enemies=[make_template(damage=0)])
        manager.end_player_turn()
        assert manager.player.energy == 6

    def test_ice_cream_respects_energy_overflow(self, make_combat):
        manager = make_combat(relics=[RELICS["ice_cream"]], enemies=[make_template(damage=0)],
                              config=CombatConfig(max_energy_overflow=0))
        for _ in range(5):
            manager.end_player_turn()
        assert manager.turn == 6
        assert manager.player.energy == 3

    def test_tungsten_rod_reduces_card_hp_loss(self, make_combat):
        bleed = simple_card("bleed", cost=0, innate=True, effects=[CardEffect("LOSE_HP", 6)])
        manager = make_combat(deck=[bleed] + strikes(4), relics=[RELICS["tungsten_rod"]])
        manager.play_card(next(c for c in manager.hand if c.id == "bleed"))
        assert manager.player.current_hp == 75
        assert manager.damage_taken == 5


class TestCombatEndRelics:

    def test_burning_blood_heals_on_victory(self, make_combat):
        manager = make_combat(relics=[RELICS["burning_blood"]], enemies=[make_template(hp=6)])
        manager.player.current_hp = 50
        play_strikes(manager, 1)
        assert manager.victory is True
        assert manager.player.current_hp == 56
