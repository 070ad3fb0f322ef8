"""
Potion effect handlers.

Potion damage and block are raw. Single-target potions receive their
target in ctx.target (validated by the combat manager before the potion
is consumed).
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from ..content.cards import TargetType
from . import EffectContext, EffectResult, potion_effect

if TYPE_CHECKING:
    from ..content.potions import PotionEffect


DEFAULT_HEAL_PERCENT = 0.2


# =============================================================================
# HP
# =============================================================================

@potion_effect("HEAL")
def heal(effect: PotionEffect, ctx: EffectContext) -> EffectResult:
    """Flat heal, or a fraction of max HP when percentage is set."""
    if effect.percentage is not None:
        amount = math.floor(ctx.player.max_hp * effect.percentage)
    else:
        amount = effect.value
    return EffectResult(True, value=ctx.player.heal(amount))


@potion_effect("HEAL_PERCENT")
def heal_percent(effect: PotionEffect, ctx: EffectContext) -> EffectResult:
    percentage = effect.percentage if effect.percentage is not None else DEFAULT_HEAL_PERCENT
    amount = math.floor(ctx.player.max_hp * percentage)
    return EffectResult(True, value=ctx.player.heal(amount))


@potion_effect("GAIN_MAX_HP")
def gain_max_hp(effect: PotionEffect, ctx: EffectContext) -> EffectResult:
    ctx.player.increase_max_hp(effect.value)
    return EffectResult(True, value=effect.value)


@potion_effect("REVIVE")
def revive(effect: PotionEffect, ctx: EffectContext) -> EffectResult:
    """Fairy in a Bottle: set HP to a fraction of max HP."""
    percentage = effect.percentage if effect.percentage is not None else 0.3
    hp = max(1, math.floor(ctx.player.max_hp * percentage))
    if ctx.player.is_dead:
        return EffectResult(True, value=ctx.player.revive(hp))
    return EffectResult(True, value=ctx.player.heal(hp))


# =============================================================================
# Block / resources
# =============================================================================

@potion_effect("BLOCK")
def block(effect: PotionEffect, ctx: EffectContext) -> EffectResult:
    return EffectResult(True, value=ctx.actions.gain_block(ctx.player, effect.value, raw=True))


@potion_effect("GAIN_ENERGY")
def gain_energy(effect: PotionEffect, ctx: EffectContext) -> EffectResult:
    gained = ctx.player.gain_energy(effect.value, ctx.config.max_energy_overflow)
    return EffectResult(True, value=gained)


@potion_effect("DRAW")
def draw(effect: PotionEffect, ctx: EffectContext) -> EffectResult:
    return EffectResult(True, value=len(ctx.actions.draw_cards(effect.value)))


# =============================================================================
# Damage
# =============================================================================

@potion_effect("DAMAGE")
def damage(effect: PotionEffect, ctx: EffectContext) -> EffectResult:
    target_type = effect.target or (ctx.potion.target_type if ctx.potion else None)
    if target_type == TargetType.ALL_ENEMIES:
        return EffectResult(True, value=ctx.actions.deal_damage_to_all_enemies(effect.value, raw=True))

    targets = ctx.resolve_targets(target_type)
    if not targets:
        return EffectResult(False, "No valid target")
    dealt = ctx.actions.deal_damage_to_enemy(targets[0], effect.value, raw=True)
    return EffectResult(True, value=dealt)


# =============================================================================
# Buffs
# =============================================================================

_PLAYER_BUFFS = {
    "APPLY_STRENGTH": "strength",
    "GAIN_STRENGTH": "strength",
    "APPLY_DEXTERITY": "dexterity",
    "GAIN_DEXTERITY": "dexterity",
    "GAIN_PLATED_ARMOR": "plated_armor",
    "APPLY_PLATED_ARMOR": "plated_armor",
}


@potion_effect(*_PLAYER_BUFFS)
def player_buff(effect: PotionEffect, ctx: EffectContext) -> EffectResult:
    return EffectResult(True, value=ctx.player.add_status(_PLAYER_BUFFS[effect.type], effect.value))


# =============================================================================
# Debuffs
# =============================================================================

_DEBUFFS = {
    "APPLY_POISON": "poison",
    "APPLY_WEAK": "weak",
    "APPLY_VULNERABLE": "vulnerable",
}


@potion_effect(*_DEBUFFS)
def debuff(effect: PotionEffect, ctx: EffectContext) -> EffectResult:
    target_type = effect.target or (ctx.potion.target_type if ctx.potion else None)
    targets = ctx.resolve_targets(target_type)
    if not targets:
        return EffectResult(False, "No valid target")
    for enemy in targets:
        enemy.add_status(_DEBUFFS[effect.type], effect.value)
    return EffectResult(True, value=effect.value * len(targets))
