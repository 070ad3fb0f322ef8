"""
Potion templates.

Potions carry an effect list like relics but are single-use. A potion
needs a provided target only when its target_type is SINGLE_ENEMY.
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional
from enum import Enum

from .cards import TargetType


class PotionRarity(Enum):
    """Potion rarities."""
    COMMON = "COMMON"
    UNCOMMON = "UNCOMMON"
    RARE = "RARE"


@dataclass
class PotionEffect:
    """One step of a potion's resolution."""
    type: str
    value: int = 0
    target: Optional[TargetType] = None
    percentage: Optional[float] = None  # fraction of max HP for heal/revive

    def copy(self) -> 'PotionEffect':
        return replace(self)


@dataclass(eq=False)
class Potion:
    """A potion definition or a potion sitting in a slot."""
    id: str
    name: str
    effects: List[PotionEffect] = field(default_factory=list)
    target_type: TargetType = TargetType.SELF
    rarity: PotionRarity = PotionRarity.COMMON
    description: str = ""

    @property
    def requires_target(self) -> bool:
        return self.target_type == TargetType.SINGLE_ENEMY

    @property
    def is_revive(self) -> bool:
        """True if this potion fires automatically when the player would die."""
        return any(e.type == "REVIVE" for e in self.effects)

    def copy(self) -> 'Potion':
        """Create an independent instance of this potion."""
        return replace(self, effects=[e.copy() for e in self.effects])

    def __repr__(self) -> str:
        return f"Potion({self.id})"
