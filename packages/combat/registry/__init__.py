"""
Effect Registry - name-keyed dispatch for card, relic and potion effects.

Three independent registries map an effect's symbolic type to a handler
`(effect, ctx) -> EffectResult`. New effect types are added by registering
a handler; nothing dispatches through a central switch.

Usage:
    from packages.combat.registry import card_effect, EffectResult

    @card_effect("GAIN_GOLD")
    def gain_gold(effect, ctx):
        ctx.player.gold += effect.value
        return EffectResult(True, value=effect.value)

Unknown effect types log a warning and return EffectResult(success=False);
a bad catalog entry never stops a combat.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import (
    Any, Callable, Dict, List, Optional, Sequence, TYPE_CHECKING
)

from ..config import CombatConfig
from .relics_passive import check_tungsten_rod, is_passive_action

if TYPE_CHECKING:
    from ..content.cards import Card, CardEffect, TargetType
    from ..content.potions import Potion, PotionEffect
    from ..content.relics import Relic, RelicEffect
    from ..piles import CardPileManager
    from ..relic_manager import RelicManager
    from ..state.entities import Enemy, Player
    from ..state.rng import Random
    from ..turns import TurnManager

logger = logging.getLogger(__name__)


# =============================================================================
# Results
# =============================================================================

@dataclass
class EffectResult:
    """Outcome of one effect handler."""
    success: bool
    message: str = ""
    value: int = 0
    data: Dict[str, Any] = field(default_factory=dict)


# =============================================================================
# Actions facade
# =============================================================================

class EffectActions:
    """
    Operations a handler may perform on the encounter.

    This base class is what handlers see outside a combat (e.g. onObtain
    relic effects): there are no enemies or piles, so every combat
    operation is an inert no-op. CombatManager supplies a subclass bound
    to the live encounter.
    """

    def deal_damage_to_enemy(self, enemy: Enemy, amount: int, raw: bool = False) -> int:
        """Damage one enemy. Returns HP actually lost."""
        return 0

    def deal_damage_to_all_enemies(self, amount: int, raw: bool = False) -> int:
        """Damage every living enemy. Returns total HP lost."""
        return 0

    def gain_block(self, target: Any, amount: int, raw: bool = False) -> int:
        """Add block to player or enemy. Returns block gained."""
        return target.gain_block(amount, raw=raw)

    def lose_hp(self, player: Player, amount: int) -> int:
        """Player HP loss that ignores block (Tungsten Rod applies). Returns HP lost."""
        return player.lose_hp(check_tungsten_rod(player, amount))

    def draw_cards(self, count: int) -> List[Card]:
        return []

    def discard_random_card(self) -> Optional[Card]:
        return None

    def exhaust_random_card(self) -> Optional[Card]:
        return None

    def add_card_to_hand(self, card: Card) -> bool:
        return False

    def add_card_to_discard(self, card: Card) -> bool:
        return False

    def add_card_to_draw_pile(self, card: Card, position: str = "random") -> bool:
        return False

    def create_card(self, card_id: str) -> Optional[Card]:
        """Fresh copy of a card from the combat card pool."""
        return None

    def get_card_pool(self) -> List[Card]:
        return []

    def get_alive_enemies(self) -> List[Enemy]:
        return []

    def get_random_enemy(self) -> Optional[Enemy]:
        return None

    def random_int(self, range_val: int) -> int:
        """Random int in [0, range_val] from the combat RNG."""
        return 0

    def trigger_relics(self, trigger: str, **data) -> List[EffectResult]:
        return []

    def log(self, message: str) -> None:
        logger.debug(message)


# =============================================================================
# Context
# =============================================================================

@dataclass
class EffectContext:
    """
    Everything a handler can see: the player, the enemy roster, the piles,
    turn counters, an optional target and the actions facade.

    Card, relic and potion handlers all receive this same shape; the
    category-specific fields (card, energy_spent, relic, potion) are set
    by the caller that builds the context.
    """
    player: Player
    enemies: List[Enemy] = field(default_factory=list)
    target: Optional[Enemy] = None
    actions: EffectActions = field(default_factory=EffectActions)
    piles: Optional[CardPileManager] = None
    turns: Optional[TurnManager] = None
    rng: Optional[Random] = None
    config: CombatConfig = field(default_factory=CombatConfig)

    # Source of the effect
    card: Optional[Card] = None
    energy_spent: Optional[int] = None  # set for X-cost cards
    relic: Optional[Relic] = None
    relic_manager: Optional[RelicManager] = None
    potion: Optional[Potion] = None
    trigger_data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_player(cls, player: Player, **kwargs) -> EffectContext:
        """Context with no encounter attached (onObtain, rest sites)."""
        return cls(player=player, **kwargs)

    def with_source(self, **changes) -> EffectContext:
        """Copy of this context with fields replaced."""
        return replace(self, **changes)

    @property
    def living_enemies(self) -> List[Enemy]:
        return [e for e in self.enemies if not e.is_dead]

    @property
    def turn(self) -> int:
        return self.turns.turn if self.turns is not None else 0

    @property
    def in_combat(self) -> bool:
        return self.piles is not None

    def get_value(self, effect: Any) -> int:
        """
        Effective numeric value of an effect.

        An X-cost card's 0-valued effect resolves to the energy spent.
        """
        if effect.value == 0 and self.energy_spent is not None:
            return self.energy_spent
        return effect.value

    def resolve_targets(self, target_type: Optional[TargetType]) -> List[Enemy]:
        """Enemies an effect should hit for a given target type."""
        from ..content.cards import TargetType

        if target_type == TargetType.ALL_ENEMIES:
            return self.living_enemies
        if target_type == TargetType.RANDOM_ENEMY:
            enemy = self.actions.get_random_enemy()
            return [enemy] if enemy is not None else []
        if target_type == TargetType.SELF:
            return []
        if self.target is not None and not self.target.is_dead:
            return [self.target]
        return []


# =============================================================================
# Registry
# =============================================================================

Handler = Callable[[Any, EffectContext], Optional[EffectResult]]


class EffectRegistry:
    """String-keyed table of effect handlers for one effect category."""

    def __init__(self, name: str):
        self.name = name
        self._handlers: Dict[str, Handler] = {}

    def register(self, effect_type: str, handler: Handler) -> None:
        """Register (or replace) the handler for an effect type."""
        if not effect_type:
            raise ValueError("effect_type must be a non-empty string")
        self._handlers[effect_type] = handler

    def unregister(self, effect_type: str) -> bool:
        return self._handlers.pop(effect_type, None) is not None

    def get_handler(self, effect_type: str) -> Optional[Handler]:
        return self._handlers.get(effect_type)

    def has_handler(self, effect_type: str) -> bool:
        return effect_type in self._handlers

    def list_effect_types(self) -> List[str]:
        return sorted(self._handlers)

    def execute(self, effect_type: str, effect: Any, ctx: EffectContext) -> EffectResult:
        """Run the handler for effect_type. Unknown types are a logged no-op."""
        handler = self._handlers.get(effect_type)
        if handler is None:
            logger.warning(f"Unknown {self.name} effect type: {effect_type}")
            return EffectResult(False, f"Unknown {self.name} effect type: {effect_type}")

        result = handler(effect, ctx)
        if result is None:
            return EffectResult(True)
        return result

    def __contains__(self, effect_type: str) -> bool:
        return effect_type in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)


# Global registries
CARD_EFFECTS = EffectRegistry("card")
RELIC_EFFECTS = EffectRegistry("relic")
POTION_EFFECTS = EffectRegistry("potion")


# =============================================================================
# Decorators
# =============================================================================

def _registering(registry: EffectRegistry, effect_types: Sequence[str]):
    def decorator(func: Handler) -> Handler:
        for effect_type in effect_types:
            registry.register(effect_type, func)
        func._effect_types = tuple(effect_types)
        return func
    return decorator


def card_effect(*effect_types: str):
    """
    Decorator to register a card effect handler.

    Several names may share a handler:
        @card_effect("APPLY_STRENGTH", "GAIN_STRENGTH")
    """
    return _registering(CARD_EFFECTS, effect_types)


def relic_effect(*effect_types: str):
    """Decorator to register a relic action handler."""
    return _registering(RELIC_EFFECTS, effect_types)


def potion_effect(*effect_types: str):
    """Decorator to register a potion effect handler."""
    return _registering(POTION_EFFECTS, effect_types)


# =============================================================================
# Execution
# =============================================================================

def execute_card_effect(effect: CardEffect, ctx: EffectContext) -> EffectResult:
    return CARD_EFFECTS.execute(effect.type, effect, ctx)


def execute_potion_effect(effect: PotionEffect, ctx: EffectContext) -> EffectResult:
    return POTION_EFFECTS.execute(effect.type, effect, ctx)


def execute_relic_effect(effect: RelicEffect, ctx: EffectContext) -> EffectResult:
    """Run one relic action. Passive actions are a successful no-op here."""
    if is_passive_action(effect.action):
        return EffectResult(True, f"{effect.action} is passive")
    return RELIC_EFFECTS.execute(effect.action, effect, ctx)


def execute_relic_effects(relic: Relic, trigger: str, ctx: EffectContext) -> List[EffectResult]:
    """Run every effect of one relic listening on trigger, in order."""
    results = []
    relic_ctx = ctx.with_source(relic=relic)
    for effect in relic.get_effects_for_trigger(trigger):
        results.append(execute_relic_effect(effect, relic_ctx))
    return results


# Import handler modules to register them
from . import cards  # noqa: F401, E402
from . import relics  # noqa: F401, E402
from . import relic_factories  # noqa: F401, E402
from . import potions  # noqa: F401, E402
