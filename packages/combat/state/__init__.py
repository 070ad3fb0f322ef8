"""
State module - runtime combat participants, RNG and the save boundary.

Contains:
- RNG system (XorShift128, seed conversion)
- Combatant / Player / Enemy runtime objects
- Plain-record snapshots for external save systems
"""

# RNG System
from .rng import XorShift128, Random, seed_to_long

# Combat participants
from .entities import Combatant, Player, Enemy, create_enemy

# Save boundary
from .snapshot import snapshot_combat, restore_combat, card_record

__all__ = [
    "XorShift128",
    "Random",
    "seed_to_long",
    "Combatant",
    "Player",
    "Enemy",
    "create_enemy",
    "snapshot_combat",
    "restore_combat",
    "card_record",
]
