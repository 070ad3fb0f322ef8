"""
Card templates.

A Card read from the catalog is a blueprint. The engine never plays the
catalog object itself: deck entries and generated cards are produced with
Card.copy(), which clones every effect list so that upgrading or mutating
a runtime card cannot leak back into the shared template.

Card structure:
- cost: energy cost, -1 for unplayable (ignored when is_x_cost is set)
- target: SELF, SINGLE_ENEMY, ALL_ENEMIES, RANDOM_ENEMY
- effects: ordered CardEffect list, resolved in declaration order

Flags:
- exhaust: Removed from the combat piles after play
- ethereal: Exhausts if still in hand at end of turn
- retain: Not discarded at end of turn
- innate: Starts in the opening hand
- is_x_cost: Spends all remaining energy; an effect value of 0 becomes
  the energy spent
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional
from enum import Enum


class CardType(Enum):
    """Card types."""
    ATTACK = "ATTACK"
    SKILL = "SKILL"
    POWER = "POWER"
    STATUS = "STATUS"
    CURSE = "CURSE"


class CardRarity(Enum):
    """Card rarities."""
    STARTER = "STARTER"
    COMMON = "COMMON"
    UNCOMMON = "UNCOMMON"
    RARE = "RARE"
    SPECIAL = "SPECIAL"
    CURSE = "CURSE"


class TargetType(Enum):
    """Targeting modes shared by cards, card effects and potions."""
    SELF = "SELF"
    SINGLE_ENEMY = "SINGLE_ENEMY"
    ALL_ENEMIES = "ALL_ENEMIES"
    RANDOM_ENEMY = "RANDOM_ENEMY"


@dataclass
class CardEffect:
    """One step of a card's resolution."""
    type: str  # registry key: DAMAGE, BLOCK, DRAW, ...
    value: int = 0
    target: Optional[TargetType] = None  # overrides the card's target
    times: int = 1
    card_id: Optional[str] = None  # for effects that create cards

    def copy(self) -> 'CardEffect':
        return replace(self)


@dataclass(eq=False)
class Card:
    """
    A card definition or runtime card instance.

    Equality is identity: two Strikes in the same hand are different cards,
    and pile membership is checked by identity.
    """
    id: str
    name: str
    card_type: CardType
    cost: int = 1
    target: TargetType = TargetType.SELF
    effects: List[CardEffect] = field(default_factory=list)
    rarity: CardRarity = CardRarity.COMMON
    description: str = ""

    # Flags
    exhaust: bool = False
    retain: bool = False
    innate: bool = False
    ethereal: bool = False
    is_x_cost: bool = False

    # Upgrade data (None = unchanged on upgrade)
    upgraded_cost: Optional[int] = None
    upgraded_effects: Optional[List[CardEffect]] = None

    # Current state
    upgraded: bool = False

    @property
    def current_cost(self) -> int:
        """Current energy cost."""
        if self.upgraded and self.upgraded_cost is not None:
            return self.upgraded_cost
        return self.cost

    @property
    def current_effects(self) -> List[CardEffect]:
        """Effects resolved when the card is played."""
        if self.upgraded and self.upgraded_effects is not None:
            return self.upgraded_effects
        return self.effects

    @property
    def is_playable(self) -> bool:
        """False for unplayable cards (cost -1 and not X-cost)."""
        return self.is_x_cost or self.current_cost >= 0

    @property
    def is_attack(self) -> bool:
        return self.card_type == CardType.ATTACK

    def can_upgrade(self) -> bool:
        """Check if this card can be upgraded."""
        return not self.upgraded and self.card_type not in (CardType.STATUS, CardType.CURSE)

    def upgrade(self) -> bool:
        """Upgrade this card. Returns False if it could not be upgraded."""
        if not self.can_upgrade():
            return False
        self.upgraded = True
        return True

    def copy(self) -> 'Card':
        """Create an independent instance of this card."""
        return replace(
            self,
            effects=[e.copy() for e in self.effects],
            upgraded_effects=(
                [e.copy() for e in self.upgraded_effects]
                if self.upgraded_effects is not None else None
            ),
        )

    def __repr__(self) -> str:
        return f"Card({self.id}{'+' if self.upgraded else ''})"
