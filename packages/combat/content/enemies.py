"""
Enemy templates.

An EnemyTemplate describes a monster: HP (fixed or rolled from a range)
and a list of weighted EnemyMoves. Each move telegraphs an Intent and
resolves a list of EnemyActions in order when it executes.

The runtime Enemy lives in state/entities.py and is built from a template
with create_enemy(), which copies the move list.
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple
from enum import Enum


class Intent(Enum):
    """What an enemy telegraphs for its next move."""
    ATTACK = "ATTACK"
    ATTACK_BUFF = "ATTACK_BUFF"
    ATTACK_DEBUFF = "ATTACK_DEBUFF"
    ATTACK_DEFEND = "ATTACK_DEFEND"
    BUFF = "BUFF"
    DEBUFF = "DEBUFF"
    DEFEND = "DEFEND"
    DEFEND_BUFF = "DEFEND_BUFF"
    SLEEP = "SLEEP"
    UNKNOWN = "UNKNOWN"


class EnemyType(Enum):
    NORMAL = "NORMAL"
    ELITE = "ELITE"
    BOSS = "BOSS"


@dataclass
class EnemyAction:
    """One step of an enemy move: DAMAGE, APPLY_WEAK, APPLY_BLOCK_SELF, ..."""
    type: str
    value: int = 0
    times: int = 1
    card_id: Optional[str] = None  # for ADD_STATUS_CARD

    def copy(self) -> 'EnemyAction':
        return replace(self)


@dataclass
class EnemyMove:
    """A weighted move in an enemy's move list."""
    id: str
    name: str
    intent: Intent
    actions: List[EnemyAction] = field(default_factory=list)
    weight: int = 1

    @property
    def base_damage(self) -> int:
        """Damage per hit of the first DAMAGE action, -1 if the move does not attack."""
        for action in self.actions:
            if action.type == "DAMAGE":
                return action.value
        return -1

    @property
    def hits(self) -> int:
        for action in self.actions:
            if action.type == "DAMAGE":
                return action.times
        return 0

    def copy(self) -> 'EnemyMove':
        return replace(self, actions=[a.copy() for a in self.actions])


@dataclass
class EnemyTemplate:
    """Catalog record for one monster."""
    id: str
    name: str
    max_hp: int
    moves: List[EnemyMove] = field(default_factory=list)
    enemy_type: EnemyType = EnemyType.NORMAL
    hp_range: Optional[Tuple[int, int]] = None  # rolled at creation if set

    # Starting statuses
    strength: int = 0
    plated_armor: int = 0
    ritual: int = 0
