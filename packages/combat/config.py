"""
Combat configuration.

Module constants hold the rule numbers the engine was balanced around.
CombatConfig bundles the ones a caller may want to tune per encounter
(hand sizes, energy overflow, status multipliers) so a CombatManager can
be built with non-default rules without touching module globals.
"""

from dataclasses import dataclass

from .calc.damage import FRAIL_MULT, VULN_MULT, WEAK_MULT


# =============================================================================
# Rule constants
# =============================================================================

DEFAULT_HAND_SIZE = 5
MAX_HAND_SIZE = 10

DEFAULT_ENERGY = 3
MAX_ENERGY_OVERFLOW = 10  # energy may exceed max_energy by this much

# Player defaults
DEFAULT_MAX_HP = 80
DEFAULT_GOLD = 99
DEFAULT_POTION_SLOTS = 3

# Event history kept by the EventBus
EVENT_HISTORY_LIMIT = 100


@dataclass
class CombatConfig:
    """Tunable rules for a single encounter."""
    hand_size: int = DEFAULT_HAND_SIZE
    max_hand_size: int = MAX_HAND_SIZE
    max_energy_overflow: int = MAX_ENERGY_OVERFLOW

    weak_multiplier: float = WEAK_MULT
    vulnerable_multiplier: float = VULN_MULT
    frail_multiplier: float = FRAIL_MULT

    def __post_init__(self):
        if self.hand_size < 0:
            raise ValueError("hand_size must be non-negative")
        if self.max_hand_size < 1:
            raise ValueError("max_hand_size must be positive")
