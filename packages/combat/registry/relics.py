"""
Relic action handlers.

Relic damage and block are raw: they skip Strength, Weak, Vulnerable,
Dexterity and Frail. ctx.relic is the owning relic instance; threshold
relics keep their count in relic.counter (see relic_factories).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from . import EffectContext, EffectResult, relic_effect

if TYPE_CHECKING:
    from ..content.relics import RelicEffect


# Below this fraction of max HP, HEAL_PERCENT relics fire
LOW_HP_PERCENT = 0.5

DEFAULT_PLATED_BLOCK = 6
DRAW_IF_ATTACKS_CARDS = 3


# =============================================================================
# Simple effects
# =============================================================================

@relic_effect("HEAL")
def heal(effect: RelicEffect, ctx: EffectContext) -> EffectResult:
    return EffectResult(True, value=ctx.player.heal(effect.value))


@relic_effect("BLOCK")
def block(effect: RelicEffect, ctx: EffectContext) -> EffectResult:
    return EffectResult(True, value=ctx.actions.gain_block(ctx.player, effect.value, raw=True))


@relic_effect("DRAW")
def draw(effect: RelicEffect, ctx: EffectContext) -> EffectResult:
    return EffectResult(True, value=len(ctx.actions.draw_cards(effect.value)))


@relic_effect("GAIN_ENERGY")
def gain_energy(effect: RelicEffect, ctx: EffectContext) -> EffectResult:
    gained = ctx.player.gain_energy(effect.value, ctx.config.max_energy_overflow)
    return EffectResult(True, value=gained)


@relic_effect("GAIN_STRENGTH")
def gain_strength(effect: RelicEffect, ctx: EffectContext) -> EffectResult:
    return EffectResult(True, value=ctx.player.add_status("strength", effect.value))


@relic_effect("GAIN_DEXTERITY")
def gain_dexterity(effect: RelicEffect, ctx: EffectContext) -> EffectResult:
    return EffectResult(True, value=ctx.player.add_status("dexterity", effect.value))


@relic_effect("THORNS")
def thorns(effect: RelicEffect, ctx: EffectContext) -> EffectResult:
    """Hit back the attacker, or a random enemy if there is none."""
    enemy = ctx.trigger_data.get("attacker") or ctx.actions.get_random_enemy()
    if enemy is None or enemy.is_dead:
        return EffectResult(False, "No enemy to damage")
    return EffectResult(True, value=ctx.actions.deal_damage_to_enemy(enemy, effect.value, raw=True))


@relic_effect("APPLY_VULNERABLE", "APPLY_WEAK")
def debuff_all(effect: RelicEffect, ctx: EffectContext) -> EffectResult:
    status = "vulnerable" if effect.action == "APPLY_VULNERABLE" else "weak"
    enemies = ctx.living_enemies
    for enemy in enemies:
        enemy.add_status(status, effect.value)
    return EffectResult(bool(enemies), value=len(enemies))


@relic_effect("DAMAGE_RANDOM")
def damage_random(effect: RelicEffect, ctx: EffectContext) -> EffectResult:
    enemy = ctx.actions.get_random_enemy()
    if enemy is None:
        return EffectResult(False, "No enemy to damage")
    return EffectResult(True, value=ctx.actions.deal_damage_to_enemy(enemy, effect.value, raw=True))


@relic_effect("DAMAGE_ALL")
def damage_all(effect: RelicEffect, ctx: EffectContext) -> EffectResult:
    return EffectResult(True, value=ctx.actions.deal_damage_to_all_enemies(effect.value, raw=True))


@relic_effect("ADD_RANDOM_CARD")
def add_random_card(effect: RelicEffect, ctx: EffectContext) -> EffectResult:
    """Add value random cards from the combat card pool to hand."""
    pool = ctx.actions.get_card_pool()
    if not pool:
        return EffectResult(False, "No cards available")
    added = 0
    for _ in range(max(1, effect.value)):
        card = pool[ctx.actions.random_int(len(pool) - 1)].copy()
        if not ctx.actions.add_card_to_hand(card):
            break
        added += 1
    return EffectResult(added > 0, value=added)


# =============================================================================
# Conditional effects
# =============================================================================

@relic_effect("ENERGY_EVERY_N_TURNS")
def energy_every_n_turns(effect: RelicEffect, ctx: EffectContext) -> EffectResult:
    """+1 energy on turns divisible by value."""
    if effect.value > 0 and ctx.turn > 0 and ctx.turn % effect.value == 0:
        return EffectResult(True, value=ctx.player.gain_energy(1, ctx.config.max_energy_overflow))
    return EffectResult(False, "Not this turn")


@relic_effect("DRAW_IF_ATTACKS")
def draw_if_attacks(effect: RelicEffect, ctx: EffectContext) -> EffectResult:
    """Draw 3 if fewer than value attacks were played last turn."""
    if ctx.turns is None or ctx.turns.turn <= 1:
        return EffectResult(False, "No previous turn")
    threshold = effect.value or 3
    if ctx.turns.attacks_played_last_turn < threshold:
        drawn = ctx.actions.draw_cards(DRAW_IF_ATTACKS_CARDS)
        return EffectResult(True, value=len(drawn))
    return EffectResult(False, "Too many attacks played")


@relic_effect("PLATED_ARMOR")
def plated_armor(effect: RelicEffect, ctx: EffectContext) -> EffectResult:
    """Orichalcum: raw block when ending the turn with none."""
    if ctx.player.block == 0:
        value = effect.value or DEFAULT_PLATED_BLOCK
        return EffectResult(True, value=ctx.actions.gain_block(ctx.player, value, raw=True))
    return EffectResult(False, "Player has block")


@relic_effect("HEAL_PERCENT")
def heal_percent(effect: RelicEffect, ctx: EffectContext) -> EffectResult:
    """Heal value HP if below half HP."""
    if ctx.player.hp_percent < LOW_HP_PERCENT:
        return EffectResult(True, value=ctx.player.heal(effect.value))
    return EffectResult(False, "HP above threshold")


# =============================================================================
# Carry-over / obtain
# =============================================================================

@relic_effect("ENERGY_NEXT_COMBAT")
def energy_next_combat(effect: RelicEffect, ctx: EffectContext) -> EffectResult:
    """Bank energy for the start of the next combat."""
    if ctx.relic_manager is None:
        return EffectResult(False, "No relic manager to hold the bonus")
    ctx.relic_manager.add_next_combat_energy(effect.value)
    return EffectResult(True, value=effect.value)


@relic_effect("MAX_HP", "GAIN_MAX_HP")
def max_hp(effect: RelicEffect, ctx: EffectContext) -> EffectResult:
    ctx.player.increase_max_hp(effect.value)
    return EffectResult(True, value=effect.value)


@relic_effect("GAIN_GOLD")
def gain_gold(effect: RelicEffect, ctx: EffectContext) -> EffectResult:
    ctx.player.gold += max(0, effect.value)
    return EffectResult(True, value=effect.value)


@relic_effect("POTION_SLOT")
def potion_slot(effect: RelicEffect, ctx: EffectContext) -> EffectResult:
    ctx.player.add_potion_slots(effect.value)
    return EffectResult(True, value=effect.value)
