"""
Calculation module - pure numeric rules shared by every combat component.
"""

from .damage import (
    calculate_damage,
    calculate_block,
    calculate_incoming_damage,
    calculate_intent_damage,
    apply_hp_loss,
    poison_tick,
    would_be_lethal,
    WEAK_MULT,
    VULN_MULT,
    VULN_MULT_PAPER_PHROG,
    FRAIL_MULT,
)

__all__ = [
    "calculate_damage",
    "calculate_block",
    "calculate_incoming_damage",
    "calculate_intent_damage",
    "apply_hp_loss",
    "poison_tick",
    "would_be_lethal",
    "WEAK_MULT",
    "VULN_MULT",
    "VULN_MULT_PAPER_PHROG",
    "FRAIL_MULT",
]
