"""
Card effect handlers.

Each handler receives the CardEffect and the shared EffectContext. Damage
goes through ctx.actions so the combat manager applies the full damage
pipeline (Strength, Weak, Vulnerable, block) and publishes events.
Numeric values are read with ctx.get_value(effect) so X-cost cards
resolve a 0 value to the energy spent.
"""

from __future__ import annotations

from typing import List, TYPE_CHECKING

from . import EffectContext, EffectResult, card_effect

if TYPE_CHECKING:
    from ..content.cards import CardEffect
    from ..state.entities import Enemy


def _targets(effect: CardEffect, ctx: EffectContext) -> List[Enemy]:
    """Enemies hit by effect: its own target override, else the card's."""
    target_type = effect.target
    if target_type is None and ctx.card is not None:
        target_type = ctx.card.target
    return ctx.resolve_targets(target_type)


def _no_target() -> EffectResult:
    return EffectResult(False, "No valid target")


# =============================================================================
# Damage
# =============================================================================

@card_effect("DAMAGE")
def damage(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    """Deal value damage times hits to the effect's targets."""
    value = ctx.get_value(effect)
    total = 0
    hit_any = False
    for _ in range(max(1, effect.times)):
        # Re-resolved per hit so random targets re-roll and corpses drop out
        targets = _targets(effect, ctx)
        if not targets:
            break
        hit_any = True
        for enemy in targets:
            total += ctx.actions.deal_damage_to_enemy(enemy, value)
    if not hit_any:
        return _no_target()
    return EffectResult(True, value=total)


@card_effect("DAMAGE_ALL")
def damage_all(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    value = ctx.get_value(effect)
    total = 0
    for _ in range(max(1, effect.times)):
        total += ctx.actions.deal_damage_to_all_enemies(value)
    return EffectResult(True, value=total)


@card_effect("DAMAGE_RANDOM")
def damage_random(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    value = ctx.get_value(effect)
    total = 0
    for _ in range(max(1, effect.times)):
        enemy = ctx.actions.get_random_enemy()
        if enemy is None:
            break
        total += ctx.actions.deal_damage_to_enemy(enemy, value)
    return EffectResult(True, value=total)


@card_effect("DAMAGE_EQUAL_BLOCK")
def damage_equal_block(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    """Body Slam: damage equal to current block."""
    targets = _targets(effect, ctx)
    if not targets:
        return _no_target()
    total = 0
    for enemy in targets:
        total += ctx.actions.deal_damage_to_enemy(enemy, ctx.player.block)
    return EffectResult(True, value=total)


# =============================================================================
# Block
# =============================================================================

@card_effect("BLOCK")
def block(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    gained = 0
    for _ in range(max(1, effect.times)):
        gained += ctx.actions.gain_block(ctx.player, ctx.get_value(effect))
    return EffectResult(True, value=gained)


@card_effect("DOUBLE_BLOCK")
def double_block(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    gained = ctx.actions.gain_block(ctx.player, ctx.player.block, raw=True)
    return EffectResult(True, value=gained)


# =============================================================================
# Cards
# =============================================================================

@card_effect("DRAW")
def draw(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    drawn = ctx.actions.draw_cards(ctx.get_value(effect))
    return EffectResult(True, value=len(drawn))


@card_effect("DISCARD")
def discard(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    """Discard value random cards from hand."""
    count = 0
    for _ in range(ctx.get_value(effect)):
        if ctx.actions.discard_random_card() is None:
            break
        count += 1
    return EffectResult(True, value=count)


@card_effect("EXHAUST_RANDOM")
def exhaust_random(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    count = 0
    for _ in range(ctx.get_value(effect)):
        if ctx.actions.exhaust_random_card() is None:
            break
        count += 1
    return EffectResult(True, value=count)


def _create_cards(effect: CardEffect, ctx: EffectContext, place) -> EffectResult:
    if not effect.card_id:
        return EffectResult(False, f"{effect.type} needs a card_id")
    added = 0
    for _ in range(max(1, ctx.get_value(effect))):
        card = ctx.actions.create_card(effect.card_id)
        if card is None:
            return EffectResult(False, f"Unknown card: {effect.card_id}", value=added)
        if not place(card):
            break
        added += 1
    return EffectResult(True, value=added)


@card_effect("ADD_TO_HAND")
def add_to_hand(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    return _create_cards(effect, ctx, ctx.actions.add_card_to_hand)


@card_effect("ADD_TO_DISCARD")
def add_to_discard(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    return _create_cards(effect, ctx, ctx.actions.add_card_to_discard)


@card_effect("ADD_TO_DRAW")
def add_to_draw(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    return _create_cards(effect, ctx, ctx.actions.add_card_to_draw_pile)


@card_effect("UPGRADE_CARD")
def upgrade_card(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    """Upgrade value random cards in hand (every card if value <= 0)."""
    if ctx.piles is None:
        return EffectResult(False, "No hand outside combat")
    candidates = [c for c in ctx.piles.hand if c.can_upgrade()]
    if effect.value <= 0:
        for card in candidates:
            card.upgrade()
        return EffectResult(True, value=len(candidates))

    upgraded = 0
    for _ in range(effect.value):
        if not candidates:
            break
        card = candidates.pop(ctx.actions.random_int(len(candidates) - 1))
        card.upgrade()
        upgraded += 1
    return EffectResult(True, value=upgraded)


@card_effect("RETAIN_HAND")
def retain_hand(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    if ctx.turns is None:
        return EffectResult(False, "No turn outside combat")
    ctx.turns.retain_hand = True
    return EffectResult(True)


@card_effect("NEXT_CARD_TWICE")
def next_card_twice(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    """Double Tap: the next value cards played this turn resolve twice."""
    if ctx.turns is None:
        return EffectResult(False, "No turn outside combat")
    ctx.turns.play_twice_charges += max(1, effect.value)
    return EffectResult(True, value=ctx.turns.play_twice_charges)


# =============================================================================
# Energy / HP
# =============================================================================

@card_effect("GAIN_ENERGY")
def gain_energy(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    gained = ctx.player.gain_energy(ctx.get_value(effect), ctx.config.max_energy_overflow)
    return EffectResult(True, value=gained)


@card_effect("LOSE_ENERGY")
def lose_energy(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    return EffectResult(True, value=ctx.player.lose_energy(ctx.get_value(effect)))


@card_effect("HEAL")
def heal(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    return EffectResult(True, value=ctx.player.heal(ctx.get_value(effect)))


@card_effect("LOSE_HP")
def lose_hp(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    return EffectResult(True, value=ctx.actions.lose_hp(ctx.player, ctx.get_value(effect)))


@card_effect("GAIN_MAX_HP")
def gain_max_hp(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    value = ctx.get_value(effect)
    ctx.player.increase_max_hp(value)
    return EffectResult(True, value=value)


# =============================================================================
# Player buffs
# =============================================================================

_PLAYER_BUFFS = {
    "APPLY_STRENGTH": "strength",
    "GAIN_STRENGTH": "strength",
    "APPLY_DEXTERITY": "dexterity",
    "GAIN_DEXTERITY": "dexterity",
    "APPLY_PLATED_ARMOR": "plated_armor",
    "APPLY_THORNS": "thorns",
    "APPLY_RITUAL": "ritual",
    "APPLY_REGEN": "regen",
}


@card_effect(*_PLAYER_BUFFS)
def apply_player_buff(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    status = _PLAYER_BUFFS[effect.type]
    return EffectResult(True, value=ctx.player.add_status(status, ctx.get_value(effect)))


# =============================================================================
# Debuffs
# =============================================================================

_DEBUFFS = {
    "APPLY_VULNERABLE": "vulnerable",
    "APPLY_WEAK": "weak",
    "APPLY_FRAIL": "frail",
    "APPLY_POISON": "poison",
}


@card_effect(*_DEBUFFS)
def apply_debuff(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    """Stack a debuff on the effect's targets."""
    targets = _targets(effect, ctx)
    if not targets:
        return _no_target()
    status = _DEBUFFS[effect.type]
    value = ctx.get_value(effect)
    for enemy in targets:
        enemy.add_status(status, value)
    return EffectResult(True, value=value * len(targets))


@card_effect("REDUCE_STRENGTH")
def reduce_strength(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    targets = _targets(effect, ctx)
    if not targets:
        return _no_target()
    value = ctx.get_value(effect)
    for enemy in targets:
        enemy.strength = max(0, enemy.strength - value)
    return EffectResult(True, value=value)
