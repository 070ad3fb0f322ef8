"""
Relic templates.

A relic is a list of (trigger, action, value) effect tuples plus a counter
for threshold relics ("every N attacks"). Relics are added to a player
once, through Player.add_relic, which stores an independent copy.

Trigger names are canonical camelCase hook names (onCombatStart). Older
catalog data uses SCREAMING_CASE names (COMBAT_START); normalize_trigger
maps those onto the canonical form so both spellings resolve.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List
from enum import Enum


class RelicRarity(Enum):
    """Relic tiers."""
    STARTER = "STARTER"
    COMMON = "COMMON"
    UNCOMMON = "UNCOMMON"
    RARE = "RARE"
    BOSS = "BOSS"
    SHOP = "SHOP"
    EVENT = "EVENT"
    SPECIAL = "SPECIAL"


# Legacy catalog spelling -> canonical hook name
LEGACY_TRIGGERS: Dict[str, str] = {
    "COMBAT_START": "onCombatStart",
    "COMBAT_END": "onCombatEnd",
    "COMBAT_VICTORY": "onCombatVictory",
    "TURN_START": "onTurnStart",
    "TURN_END": "onTurnEnd",
    "CARD_PLAYED": "onCardPlayed",
    "ATTACK_PLAYED": "onAttackPlayed",
    "SKILL_PLAYED": "onSkillPlayed",
    "POWER_PLAYED": "onPowerPlayed",
    "FIRST_ATTACK": "onFirstAttack",
    "CARD_EXHAUSTED": "onCardExhausted",
    "CARD_DISCARDED": "onCardDiscarded",
    "SHUFFLE": "onShuffle",
    "PLAYER_DAMAGED": "onPlayerDamaged",
    "ENEMY_KILLED": "onEnemyKilled",
    "POTION_USED": "onPotionUsed",
    "REST": "onRest",
    "OBTAIN": "onObtain",
    "PASSIVE": "passive",
}


def normalize_trigger(trigger: str) -> str:
    """Return the canonical hook name for a trigger string."""
    return LEGACY_TRIGGERS.get(trigger, trigger)


@dataclass
class RelicEffect:
    """One (trigger, action, value) tuple."""
    trigger: str
    action: str
    value: int = 0

    def __post_init__(self):
        self.trigger = normalize_trigger(self.trigger)

    def copy(self) -> 'RelicEffect':
        return replace(self)


@dataclass(eq=False)
class Relic:
    """A relic definition or owned relic instance."""
    id: str
    name: str
    effects: List[RelicEffect] = field(default_factory=list)
    rarity: RelicRarity = RelicRarity.COMMON
    description: str = ""

    # Used by threshold relics; never negative
    counter: int = 0

    def get_effects_for_trigger(self, trigger: str) -> List[RelicEffect]:
        """Effects of this relic listening on trigger, in declaration order."""
        trigger = normalize_trigger(trigger)
        return [e for e in self.effects if e.trigger == trigger]

    def copy(self) -> 'Relic':
        """Create an independent instance of this relic."""
        return replace(self, effects=[e.copy() for e in self.effects])

    def __repr__(self) -> str:
        return f"Relic({self.id}, counter={self.counter})"
