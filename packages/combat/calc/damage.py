"""
Damage Calculator - Single source of truth for damage and block arithmetic.

Design principles:
1. Pure functions - no side effects, no state
2. Every step floors to int before the next one runs
3. Calculation order is part of the balance contract and must not change

Outgoing damage order:
1. Base damage + attacker Strength
2. Attacker Weak: floor(value * 0.75)
3. Defender Vulnerable: floor(value * 1.5)
4. Clamp to >= 0
5. Block absorbs first, remainder is HP loss (see calculate_incoming_damage)

Block order:
1. Base block + Dexterity
2. Frail: floor(value * 0.75)
3. Clamp to >= 0
"""

import math
from typing import Tuple

__all__ = [
    "calculate_damage",
    "calculate_block",
    "calculate_incoming_damage",
    "calculate_intent_damage",
    "apply_hp_loss",
    "poison_tick",
    "would_be_lethal",
    # Constants
    "WEAK_MULT",
    "VULN_MULT",
    "VULN_MULT_PAPER_PHROG",
    "FRAIL_MULT",
]


# =============================================================================
# CONSTANTS
# =============================================================================

# Weak - reduces attack damage dealt by 25%
WEAK_MULT = 0.75

# Vulnerable - increases attack damage received by 50%
VULN_MULT = 1.50
VULN_MULT_PAPER_PHROG = 1.75  # Paper Phrog: enemies take 75% more instead

# Frail - reduces block gained from cards by 25%
FRAIL_MULT = 0.75


# =============================================================================
# OUTGOING DAMAGE
# =============================================================================

def calculate_damage(
    base: int,
    strength: int = 0,
    weak: bool = False,
    vuln: bool = False,
    weak_mult: float = WEAK_MULT,
    vuln_mult: float = VULN_MULT,
) -> int:
    """
    Calculate the damage an attack deals before block.

    Args:
        base: Effect's base damage value
        strength: Attacker's Strength (can be negative)
        weak: True if attacker is Weak
        vuln: True if defender is Vulnerable
        weak_mult: Weak multiplier override
        vuln_mult: Vulnerable multiplier override (Paper Phrog)

    Returns:
        Damage as int (minimum 0)
    """
    damage = base + strength

    # Weak is applied to the attacker's output first
    if weak:
        damage = math.floor(damage * weak_mult)

    if vuln:
        damage = math.floor(damage * vuln_mult)

    return max(0, damage)


def calculate_intent_damage(base: int, strength: int = 0, weak: bool = False,
                            weak_mult: float = WEAK_MULT) -> int:
    """Damage an enemy intent shows, ignoring the player's Vulnerable."""
    return calculate_damage(base, strength=strength, weak=weak, weak_mult=weak_mult)


# =============================================================================
# BLOCK
# =============================================================================

def calculate_block(
    base: int,
    dexterity: int = 0,
    frail: bool = False,
    frail_mult: float = FRAIL_MULT,
) -> int:
    """
    Calculate block gained from a card or enemy move.

    Relic and potion block is "raw" and never goes through this function.

    Args:
        base: Effect's base block value
        dexterity: Dexterity (can be negative)
        frail: True if the gainer is Frail

    Returns:
        Block as int (minimum 0)
    """
    block = base + dexterity

    if frail:
        block = math.floor(block * frail_mult)

    return max(0, block)


# =============================================================================
# INCOMING DAMAGE
# =============================================================================

def calculate_incoming_damage(damage: int, block: int) -> Tuple[int, int]:
    """
    Split one damage instance between block and HP.

    Returns:
        Tuple of (hp_loss, block_remaining)
    """
    damage = max(0, damage)
    if block >= damage:
        return 0, block - damage
    return damage - block, 0


def apply_hp_loss(hp: int, amount: int) -> int:
    """Return HP after losing amount, floored at 0."""
    return max(0, hp - max(0, amount))


def poison_tick(poison: int) -> Tuple[int, int]:
    """
    Resolve one poison tick.

    Returns:
        Tuple of (hp_loss, poison_remaining)
    """
    if poison <= 0:
        return 0, 0
    return poison, poison - 1


def would_be_lethal(damage: int, hp: int, block: int) -> bool:
    """True if a damage instance would reduce hp to 0 through block."""
    hp_loss, _ = calculate_incoming_damage(damage, block)
    return hp_loss >= hp
