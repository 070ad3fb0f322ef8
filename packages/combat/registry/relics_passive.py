"""Data-driven passive relic definitions.

Passive relics change a comparison, a multiplier or an out-of-combat
affordance instead of firing on a trigger. The trigger dispatcher skips
their actions; the subsystem that owns the rule queries them directly
through the predicates below.
"""

from typing import Any, Iterable

# Passive relic effects keyed by relic id - combat code checks these flags
PASSIVE_RELICS = {
    # Damage taken
    "tungsten_rod": {"reduce_hp_loss": 1},
    "torii": {"reduce_small_damage": 5},

    # Damage dealt
    "red_skull": {"bloodied_strength": 3},
    "paper_phrog": {"enemy_vulnerable_multiplier": 1.75},

    # Energy
    "ice_cream": {"energy_persists": True},
}

# Bloodied threshold for red_skull-style relics
BLOODIED_HP_PERCENT = 0.5

# Relic actions that never fire through a trigger
PASSIVE_ACTIONS = frozenset({
    "ELITE_BONUS_RELIC",
    "CURSES_PLAYABLE",
    "VULNERABLE_BONUS",
    "MORE_EVENT_OPTIONS",
    "MERCHANT_BONUS",
    "MERCHANT_DISCOUNT",
    "EXTRA_CARD_REWARD",
    "EXTRA_CARD_CHOICE",
    "REST_REMOVE_CARD",
    "REST_DIG",
    "REDUCE_SMALL_DAMAGE",
    "REDUCE_HP_LOSS",
    "RETAIN_ENERGY",
    "EVENT_TO_TREASURE",
    "INTANGIBLE_EVERY_N",
    "AUTO_UPGRADE_SKILLS",
    "AUTO_UPGRADE_POWERS",
    "REDUCE_RANDOM_COST",
    "DISCARD_DRAW",
    "STRENGTH_AT_HP",
})


def is_passive_action(action: str) -> bool:
    return action in PASSIVE_ACTIONS


def _relic_ids(player) -> Iterable[str]:
    return (relic.id for relic in player.relics)


def has_passive_effect(player, effect_type: str) -> bool:
    """Check if player has a relic with the given passive effect."""
    for relic_id in _relic_ids(player):
        if effect_type in PASSIVE_RELICS.get(relic_id, {}):
            return True
    return False


def get_passive_value(player, effect_type: str, default: Any = None) -> Any:
    """Get the value of a passive effect from owned relics."""
    for relic_id in _relic_ids(player):
        effects = PASSIVE_RELICS.get(relic_id, {})
        if effect_type in effects:
            return effects[effect_type]
    return default


# =============================================================================
# Predicates
# =============================================================================

def check_tungsten_rod(player, hp_loss: int) -> int:
    """HP loss after Tungsten Rod (reduce by 1, floor 0)."""
    reduction = get_passive_value(player, "reduce_hp_loss", 0)
    if reduction and hp_loss > 0:
        return max(0, hp_loss - reduction)
    return hp_loss


def check_torii(player, hp_loss: int) -> int:
    """Unblocked attack damage of 2..threshold becomes 1."""
    threshold = get_passive_value(player, "reduce_small_damage", 0)
    if threshold and 1 < hp_loss <= threshold:
        return 1
    return hp_loss


def check_red_skull(player) -> int:
    """Extra Strength while at or below half HP (0 otherwise)."""
    bonus = get_passive_value(player, "bloodied_strength", 0)
    if bonus and player.current_hp <= player.max_hp * BLOODIED_HP_PERCENT:
        return bonus
    return 0


def has_paper_phrog(player) -> bool:
    return has_passive_effect(player, "enemy_vulnerable_multiplier")


def check_ice_cream(player) -> bool:
    """True if unspent energy carries over to the next turn."""
    return bool(get_passive_value(player, "energy_persists", False))
