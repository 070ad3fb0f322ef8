"""Factory for counter-based (X_EVERY_N) relic actions."""
from typing import Callable

from . import EffectContext, EffectResult, relic_effect


def counter_relic(action: str, payload: Callable[[EffectContext], int]):
    """
    Register a threshold relic action.

    Pattern: increment counter -> check threshold -> reset to 0 -> payload.
    The relic effect's value is the threshold N; counters live on the relic
    instance and persist across turns and combats.

    Args:
        action: Relic action name (e.g. "STRENGTH_EVERY_N")
        payload: Called with the context when the threshold is reached
    """
    @relic_effect(action)
    def handler(effect, ctx: EffectContext) -> EffectResult:
        relic = ctx.relic
        if relic is None:
            return EffectResult(False, f"{action} needs an owning relic")

        threshold = max(1, effect.value)
        relic.counter += 1
        if relic.counter >= threshold:
            relic.counter = 0
            value = payload(ctx)
            return EffectResult(True, f"{relic.id} fired", value=value, data={"fired": True})
        return EffectResult(True, f"{relic.id} at {relic.counter}/{threshold}",
                            data={"fired": False})

    return handler


def _gain_energy(ctx: EffectContext) -> int:
    return ctx.player.gain_energy(2, ctx.config.max_energy_overflow)


counter_relic("DRAW_EVERY_N", lambda ctx: len(ctx.actions.draw_cards(1)))
counter_relic("DEXTERITY_EVERY_N", lambda ctx: ctx.player.add_status("dexterity", 1))
counter_relic("STRENGTH_EVERY_N", lambda ctx: ctx.player.add_status("strength", 1))
counter_relic("BLOCK_EVERY_N", lambda ctx: ctx.actions.gain_block(ctx.player, 4, raw=True))
counter_relic("DAMAGE_ALL_EVERY_N", lambda ctx: ctx.actions.deal_damage_to_all_enemies(5, raw=True))
counter_relic("ENERGY_EVERY_N", _gain_energy)
