"""
Relic Manager - fires relic effects on named triggers.

Relics are triggered in the order the player obtained them, and each
relic's matching effects run in declaration order. Passive relics are
skipped by the dispatcher; their rules are read through the check_*
predicates here by whichever subsystem owns the rule.

The manager also holds "next combat" carry-over bonuses, so it is meant
to live for a whole run and be handed to each CombatManager in turn.
"""

import logging
from typing import Dict, List, Optional, Tuple

from .content.relics import Relic, RelicEffect, normalize_trigger
from .registry import EffectContext, EffectResult, execute_relic_effects
from .registry import relics_passive
from .state.entities import Player

logger = logging.getLogger(__name__)


class RelicManager:
    """Trigger dispatch, carry-over bonuses and passive relic queries."""

    def __init__(self):
        self.pending_energy = 0

    # =========================================================================
    # TRIGGERS
    # =========================================================================

    def trigger_relics(
        self,
        player: Player,
        trigger: str,
        context: Optional[EffectContext] = None,
        **trigger_data,
    ) -> List[EffectResult]:
        """
        Run every owned relic effect listening on trigger.

        Args:
            player: Relic owner
            trigger: Hook name (onCombatStart, ...). Legacy COMBAT_START
                style names are accepted.
            context: Encounter context; None outside combat
            **trigger_data: Extra data for handlers (card, attacker, ...)

        Returns:
            One result per executed effect, each tagged with data["relic_id"]
        """
        trigger = normalize_trigger(trigger)
        base = context if context is not None else EffectContext.for_player(player)
        ctx = base.with_source(
            relic_manager=self,
            trigger_data={**base.trigger_data, **trigger_data},
        )

        results = []
        for relic in list(player.relics):
            for result in execute_relic_effects(relic, trigger, ctx):
                result.data.setdefault("relic_id", relic.id)
                results.append(result)
        if results:
            logger.debug(f"{trigger}: {len(results)} relic effect(s) ran")
        return results

    def get_effects_for_trigger(self, player: Player, trigger: str) -> List[Tuple[Relic, RelicEffect]]:
        """(relic, effect) pairs that would run for trigger, in firing order."""
        return [
            (relic, effect)
            for relic in player.relics
            for effect in relic.get_effects_for_trigger(trigger)
        ]

    # =========================================================================
    # CARRY-OVER
    # =========================================================================

    def add_next_combat_energy(self, amount: int) -> None:
        if amount > 0:
            self.pending_energy += amount

    def consume_bonus_energy(self) -> int:
        """Return the pending next-combat energy and clear it."""
        bonus = self.pending_energy
        self.pending_energy = 0
        return bonus

    # =========================================================================
    # QUERIES
    # =========================================================================

    @staticmethod
    def has_relic(player: Player, relic_id: str) -> bool:
        return player.has_relic(relic_id)

    @staticmethod
    def get_relic(player: Player, relic_id: str) -> Optional[Relic]:
        return player.get_relic(relic_id)

    @staticmethod
    def check_red_skull(player: Player) -> int:
        return relics_passive.check_red_skull(player)

    @staticmethod
    def check_torii(player: Player, hp_loss: int) -> int:
        return relics_passive.check_torii(player, hp_loss)

    @staticmethod
    def check_tungsten_rod(player: Player, hp_loss: int) -> int:
        return relics_passive.check_tungsten_rod(player, hp_loss)

    @staticmethod
    def has_paper_phrog(player: Player) -> bool:
        return relics_passive.has_paper_phrog(player)

    @staticmethod
    def check_ice_cream(player: Player) -> bool:
        return relics_passive.check_ice_cream(player)

    # =========================================================================
    # STATE
    # =========================================================================

    @staticmethod
    def get_counters(player: Player) -> List[int]:
        """Relic counters in relic-list order."""
        return [relic.counter for relic in player.relics]

    @staticmethod
    def load_counters(player: Player, counters: List[int]) -> None:
        for relic, counter in zip(player.relics, counters):
            relic.counter = max(0, counter)

    def get_state(self) -> Dict[str, int]:
        return {"pending_energy": self.pending_energy}

    def load_state(self, state: Dict[str, int]) -> None:
        self.pending_energy = state.get("pending_energy", 0)
