"""
Damage Calculation Tests

Verifies order of operations (Strength, then Weak, then Vulnerable, each
floored), block absorption and the small helpers around them.
"""

import pytest

from packages.combat.calc.damage import (
    apply_hp_loss,
    calculate_block,
    calculate_damage,
    calculate_incoming_damage,
    calculate_intent_damage,
    poison_tick,
    would_be_lethal,
    FRAIL_MULT,
    VULN_MULT_PAPER_PHROG,
    WEAK_MULT,
)


class TestBasicDamage:
    """Base damage and Strength."""

    def test_no_modifiers(self):
        assert calculate_damage(10) == 10
        assert calculate_damage(0) == 0

    def test_strength_is_added_flat(self):
        # 6 + 3 = 9
        assert calculate_damage(6, strength=3) == 9
        assert calculate_damage(6, strength=-2) == 4

    def test_never_negative(self):
        assert calculate_damage(5, strength=-10) == 0


class TestMultipliers:
    """Weak and Vulnerable, floored after each step."""

    def test_weak_floors(self):
        # 10 * 0.75 = 7.5 -> 7
        assert calculate_damage(10, weak=True) == 7
        assert calculate_damage(8, weak=True) == 6

    def test_vulnerable_floors(self):
        # 7 * 1.5 = 10.5 -> 10
        assert calculate_damage(7, vuln=True) == 10
        assert calculate_damage(10, vuln=True) == 15

    def test_weak_floors_before_vulnerable(self):
        # (6+3) * 0.75 = 6.75 -> 6, then * 1.5 = 9
        assert calculate_damage(6, strength=3, weak=True, vuln=True) == 9

    def test_paper_phrog_multiplier(self):
        assert calculate_damage(10, vuln=True, vuln_mult=VULN_MULT_PAPER_PHROG) == 17

    def test_custom_weak_multiplier(self):
        assert calculate_damage(10, weak=True, weak_mult=0.5) == 5
        assert WEAK_MULT == 0.75

    def test_intent_damage_ignores_vulnerable(self):
        assert calculate_intent_damage(11, strength=3) == 14
        assert calculate_intent_damage(11, weak=True) == 8


class TestBlock:

    def test_dexterity_is_added_flat(self):
        assert calculate_block(5, dexterity=2) == 7

    def test_frail(self):
        # 5 * 0.75 = 3.75 -> 3
        assert calculate_block(5, frail=True) == 3
        assert FRAIL_MULT == 0.75

    def test_block_never_negative(self):
        assert calculate_block(5, dexterity=-10) == 0


class TestIncomingDamage:

    def test_block_absorbs_fully(self):
        assert calculate_incoming_damage(5, 8) == (0, 3)

    def test_block_partially_absorbs(self):
        assert calculate_incoming_damage(10, 4) == (6, 0)

    def test_no_block(self):
        assert calculate_incoming_damage(7, 0) == (7, 0)

    def test_apply_hp_loss_floors_at_zero(self):
        assert apply_hp_loss(5, 10) == 0
        assert apply_hp_loss(50, 10) == 40

    @pytest.mark.parametrize("damage,hp,block,lethal", [
        (10, 10, 0, True),
        (10, 11, 0, False),
        (15, 10, 5, True),
        (14, 10, 5, False),
    ])
    def test_would_be_lethal(self, damage, hp, block, lethal):
        assert would_be_lethal(damage, hp, block) is lethal


class TestPoison:

    def test_tick_deals_stacks_and_decrements(self):
        assert poison_tick(5) == (5, 4)

    def test_no_poison(self):
        assert poison_tick(0) == (0, 0)
