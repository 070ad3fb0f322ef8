"""
Content module - card, relic, potion and enemy templates.

The starter catalog (content.starter) is imported explicitly by callers;
it builds Player objects and so is not loaded here.
"""

from .cards import Card, CardEffect, CardRarity, CardType, TargetType
from .relics import Relic, RelicEffect, RelicRarity, normalize_trigger
from .potions import Potion, PotionEffect, PotionRarity
from .enemies import EnemyAction, EnemyMove, EnemyTemplate, EnemyType, Intent

__all__ = [
    "Card",
    "CardEffect",
    "CardRarity",
    "CardType",
    "TargetType",
    "Relic",
    "RelicEffect",
    "RelicRarity",
    "normalize_trigger",
    "Potion",
    "PotionEffect",
    "PotionRarity",
    "EnemyAction",
    "EnemyMove",
    "EnemyTemplate",
    "EnemyType",
    "Intent",
]
