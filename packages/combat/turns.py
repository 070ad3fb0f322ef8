"""
Turn Manager - phase state machine and play counters.

Phases:
    TURN_START -> PLAYER_ACTION -> TURN_END -> ENEMY_TURN -> TURN_START ...

The manager only tracks phase and counters. It does not resolve enemy
moves: get_enemy_actions() hands each living enemy's telegraphed move to
the caller one at a time and rolls that enemy's next intent once the
caller asks for the following enemy.
"""

import logging
from enum import Enum
from typing import Any, Dict, Iterator, List, Tuple

from .content.cards import CardType
from .content.enemies import EnemyMove
from .state.entities import Enemy
from .state.rng import Random

logger = logging.getLogger(__name__)


class TurnPhase(Enum):
    TURN_START = "TURN_START"
    PLAYER_ACTION = "PLAYER_ACTION"
    TURN_END = "TURN_END"
    ENEMY_TURN = "ENEMY_TURN"


# Counters cleared by reset(); per-turn ones are also cleared by start_turn()
_TURN_COUNTERS = (
    "cards_played_this_turn",
    "attacks_played_this_turn",
    "skills_played_this_turn",
    "powers_played_this_turn",
)
_COMBAT_COUNTERS = (
    "cards_played_this_combat",
    "attacks_played_this_combat",
    "skills_played_this_combat",
    "powers_played_this_combat",
)


class TurnManager:
    """Phase and counter bookkeeping for one combat."""

    def __init__(self, rng: Random):
        self.rng = rng
        self.reset()

    def reset(self) -> None:
        """Back to the pre-combat state."""
        self.turn = 0
        self.phase = TurnPhase.TURN_START
        for name in _TURN_COUNTERS + _COMBAT_COUNTERS:
            setattr(self, name, 0)
        self.first_attack_played = False
        self.attacks_played_last_turn = 0

        # Per-turn card modifiers
        self.retain_hand = False
        self.play_twice_charges = 0

    # =========================================================================
    # PHASES
    # =========================================================================

    def start_turn(self) -> int:
        """Begin a player turn. Returns the new turn number."""
        self.turn += 1
        self.attacks_played_last_turn = self.attacks_played_this_turn
        for name in _TURN_COUNTERS:
            setattr(self, name, 0)
        self.retain_hand = False
        self.play_twice_charges = 0
        self.phase = TurnPhase.PLAYER_ACTION
        return self.turn

    def end_player_turn(self) -> bool:
        """Leave PLAYER_ACTION for TURN_END (end-of-turn cleanup runs here)."""
        if self.phase != TurnPhase.PLAYER_ACTION:
            logger.debug(f"end_player_turn ignored in phase {self.phase.value}")
            return False
        self.phase = TurnPhase.TURN_END
        return True

    def begin_enemy_turn(self) -> bool:
        """Move from TURN_END to ENEMY_TURN."""
        if self.phase != TurnPhase.TURN_END:
            return False
        self.phase = TurnPhase.ENEMY_TURN
        return True

    def get_enemy_actions(self, enemies: List[Enemy]) -> Iterator[Tuple[Enemy, EnemyMove]]:
        """
        Yield (enemy, move) for every living enemy in roster order.

        The yielded move is the enemy's current intent. Its next intent is
        rolled when iteration resumes, so stopping early (the player died)
        leaves the remaining enemies untouched.
        """
        for enemy in list(enemies):
            if enemy.is_dead:
                continue
            move = enemy.current_intent
            if move is not None:
                yield enemy, move
            if not enemy.is_dead:
                enemy.roll_move(self.rng)

    def end_enemy_turn(self) -> int:
        """Close the enemy turn and start the next player turn."""
        self.phase = TurnPhase.TURN_START
        return self.start_turn()

    # =========================================================================
    # COUNTERS
    # =========================================================================

    def record_card_played(self, card_type: CardType) -> Dict[str, Any]:
        """
        Count a played card.

        Returns:
            Dict with is_first_attack (True exactly once per combat, on the
            first Attack), cards_played_this_turn, cards_played_this_combat
        """
        self.cards_played_this_turn += 1
        self.cards_played_this_combat += 1

        is_first_attack = False
        if card_type == CardType.ATTACK:
            self.attacks_played_this_turn += 1
            self.attacks_played_this_combat += 1
            if not self.first_attack_played:
                self.first_attack_played = True
                is_first_attack = True
        elif card_type == CardType.SKILL:
            self.skills_played_this_turn += 1
            self.skills_played_this_combat += 1
        elif card_type == CardType.POWER:
            self.powers_played_this_turn += 1
            self.powers_played_this_combat += 1

        return {
            "is_first_attack": is_first_attack,
            "cards_played_this_turn": self.cards_played_this_turn,
            "cards_played_this_combat": self.cards_played_this_combat,
        }

    # =========================================================================
    # QUERIES
    # =========================================================================

    @property
    def is_player_turn(self) -> bool:
        return self.phase == TurnPhase.PLAYER_ACTION

    @property
    def is_first_turn(self) -> bool:
        return self.turn == 1

    def get_state(self) -> Dict[str, Any]:
        """Plain snapshot of phase and counters."""
        state = {name: getattr(self, name) for name in _TURN_COUNTERS + _COMBAT_COUNTERS}
        state.update(
            turn=self.turn,
            phase=self.phase.value,
            first_attack_played=self.first_attack_played,
            attacks_played_last_turn=self.attacks_played_last_turn,
            retain_hand=self.retain_hand,
            play_twice_charges=self.play_twice_charges,
        )
        return state

    def load_state(self, state: Dict[str, Any]) -> None:
        """Restore a snapshot produced by get_state()."""
        for name in _TURN_COUNTERS + _COMBAT_COUNTERS:
            setattr(self, name, state.get(name, 0))
        self.turn = state.get("turn", 0)
        self.phase = TurnPhase(state.get("phase", TurnPhase.TURN_START.value))
        self.first_attack_played = state.get("first_attack_played", False)
        self.attacks_played_last_turn = state.get("attacks_played_last_turn", 0)
        self.retain_hand = state.get("retain_hand", False)
        self.play_twice_charges = state.get("play_twice_charges", 0)
