"""
Descent Combat Engine

A turn-based deck-building combat engine: one player with a deck, relics
and potions against a group of enemies with telegraphed, weighted moves.

Core subsystems:
- state: RNG (XorShift128), Player/Enemy runtime objects, snapshots
- content: Card, relic, potion and enemy templates (plus a starter catalog)
- calc: Damage/block formulas
- registry: Name-keyed card, relic and potion effect handlers
- piles / turns / relic_manager: Per-combat subsystems
- combat_manager: Orchestrates one encounter

Usage:
    from packages.combat import CombatManager, Random
    from packages.combat.content.starter import create_starter_player, get_encounter

    player = create_starter_player()
    manager = CombatManager(player, get_encounter("jaw_worm"), rng=Random(42))
    manager.start_combat()
    while not manager.combat_ended:
        ...
"""

__version__ = "0.1.0"

# Configuration
from .config import CombatConfig

# RNG System
from .state.rng import XorShift128, Random, seed_to_long

# Damage Calculation
from .calc.damage import (
    calculate_damage,
    calculate_block,
    calculate_incoming_damage,
    WEAK_MULT,
    VULN_MULT,
    FRAIL_MULT,
)

# Content
from .content.cards import Card, CardEffect, CardType, CardRarity, TargetType
from .content.relics import Relic, RelicEffect, RelicRarity
from .content.potions import Potion, PotionEffect, PotionRarity
from .content.enemies import EnemyAction, EnemyMove, EnemyTemplate, EnemyType, Intent

# Runtime state
from .state.entities import Combatant, Player, Enemy, create_enemy
from .state.snapshot import snapshot_combat, restore_combat

# Effect registries
from .registry import (
    EffectContext,
    EffectResult,
    EffectRegistry,
    card_effect,
    relic_effect,
    potion_effect,
)

# Combat subsystems
from .events import CombatEvent, EventBus, CombatLog
from .piles import CardPileManager
from .turns import TurnManager, TurnPhase
from .relic_manager import RelicManager
from .combat_manager import CombatManager, CombatPhase, CombatResult

__all__ = [
    "__version__",
    "CombatConfig",
    "XorShift128",
    "Random",
    "seed_to_long",
    "calculate_damage",
    "calculate_block",
    "calculate_incoming_damage",
    "WEAK_MULT",
    "VULN_MULT",
    "FRAIL_MULT",
    "Card",
    "CardEffect",
    "CardType",
    "CardRarity",
    "TargetType",
    "Relic",
    "RelicEffect",
    "RelicRarity",
    "Potion",
    "PotionEffect",
    "PotionRarity",
    "EnemyAction",
    "EnemyMove",
    "EnemyTemplate",
    "EnemyType",
    "Intent",
    "Combatant",
    "Player",
    "Enemy",
    "create_enemy",
    "snapshot_combat",
    "restore_combat",
    "EffectContext",
    "EffectResult",
    "EffectRegistry",
    "card_effect",
    "relic_effect",
    "potion_effect",
    "CombatEvent",
    "EventBus",
    "CombatLog",
    "CardPileManager",
    "TurnManager",
    "TurnPhase",
    "RelicManager",
    "CombatManager",
    "CombatPhase",
    "CombatResult",
]
