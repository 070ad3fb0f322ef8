"""
Combat participants.

Combatant carries the numeric model shared by the player and enemies:
HP, block, Strength/Dexterity and duration statuses. Player adds the
run-persistent parts (deck, relics, potion slots, gold) and energy. Enemy
adds a weighted move list and the telegraphed current intent.

HP is kept in [0, max_hp] by every mutator here; nothing outside this
module writes current_hp directly.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, TYPE_CHECKING

from ..calc.damage import (
    calculate_block,
    calculate_incoming_damage,
    calculate_intent_damage,
    FRAIL_MULT,
    WEAK_MULT,
)
from ..config import (
    DEFAULT_ENERGY,
    DEFAULT_GOLD,
    DEFAULT_MAX_HP,
    DEFAULT_POTION_SLOTS,
    MAX_ENERGY_OVERFLOW,
)
from ..content.cards import Card
from ..content.enemies import EnemyMove, EnemyTemplate, EnemyType
from ..content.potions import Potion
from ..content.relics import Relic

if TYPE_CHECKING:
    from .rng import Random


# Duration statuses tick down by 1 at the owner's turn boundary
DURATION_STATUSES = ("weak", "vulnerable", "frail")

# Every status a combatant can carry (saved and reset as a group)
STATUS_FIELDS = (
    "strength", "dexterity",
    "weak", "vulnerable", "frail",
    "poison", "thorns", "plated_armor", "ritual", "regen",
)

# Enemy move history length
MOVE_HISTORY_SIZE = 3


@dataclass(eq=False)
class Combatant:
    """HP/block/status model shared by Player and Enemy."""
    max_hp: int = DEFAULT_MAX_HP
    current_hp: Optional[int] = None
    block: int = 0

    # Additive modifiers
    strength: int = 0
    dexterity: int = 0

    # Duration statuses
    weak: int = 0
    vulnerable: int = 0
    frail: int = 0

    # Stacking statuses
    poison: int = 0
    thorns: int = 0
    plated_armor: int = 0
    ritual: int = 0
    regen: int = 0

    def __post_init__(self):
        if self.current_hp is None:
            self.current_hp = self.max_hp
        self.current_hp = max(0, min(self.current_hp, self.max_hp))

    # ============ QUERIES ============

    @property
    def is_dead(self) -> bool:
        return self.current_hp <= 0

    @property
    def is_weak(self) -> bool:
        return self.weak > 0

    @property
    def is_vulnerable(self) -> bool:
        return self.vulnerable > 0

    @property
    def is_frail(self) -> bool:
        return self.frail > 0

    @property
    def hp_percent(self) -> float:
        if self.max_hp <= 0:
            return 0.0
        return self.current_hp / self.max_hp

    def get_statuses(self) -> Dict[str, int]:
        """All status values by name."""
        return {name: getattr(self, name) for name in STATUS_FIELDS}

    # ============ HP ============

    def take_damage(self, amount: int) -> int:
        """
        Apply one damage instance: block absorbs first, the rest is HP loss.

        Returns:
            HP actually lost
        """
        hp_loss, self.block = calculate_incoming_damage(amount, self.block)
        return self.lose_hp(hp_loss)

    def lose_hp(self, amount: int) -> int:
        """Lose HP directly, ignoring block. Returns HP actually lost."""
        if amount <= 0:
            return 0
        actual = min(amount, self.current_hp)
        self.current_hp -= actual
        return actual

    def heal(self, amount: int) -> int:
        """Heal up to max HP. Returns amount actually healed."""
        if amount <= 0 or self.is_dead:
            return 0
        actual = min(amount, self.max_hp - self.current_hp)
        self.current_hp += actual
        return actual

    def increase_max_hp(self, amount: int) -> None:
        """Raise max HP and heal by the same amount."""
        if amount <= 0:
            return
        self.max_hp += amount
        self.current_hp += amount

    # ============ BLOCK ============

    def gain_block(self, base: int, raw: bool = False, frail_mult: float = FRAIL_MULT) -> int:
        """
        Add block on top of current block.

        Args:
            base: Base block value
            raw: Skip Dexterity and Frail (relic/potion block)

        Returns:
            Block actually gained
        """
        if raw:
            amount = max(0, base)
        else:
            amount = calculate_block(base, self.dexterity, self.is_frail, frail_mult)
        self.block += amount
        return amount

    # ============ STATUSES ============

    def add_status(self, name: str, amount: int) -> int:
        """Stack amount onto a status. Returns the new value."""
        if name not in STATUS_FIELDS:
            raise ValueError(f"Unknown status: {name}")
        value = getattr(self, name) + amount
        # Only Strength/Dexterity may go negative
        if name not in ("strength", "dexterity"):
            value = max(0, value)
        setattr(self, name, value)
        return value

    def merge_status(self, name: str, amount: int) -> int:
        """Keep the larger of current and incoming value (enemy debuffs)."""
        if name not in STATUS_FIELDS:
            raise ValueError(f"Unknown status: {name}")
        value = max(getattr(self, name), amount)
        setattr(self, name, value)
        return value

    def tick_statuses(self) -> None:
        """Decrement duration statuses at the end of the owner's turn."""
        for name in DURATION_STATUSES:
            value = getattr(self, name)
            if value > 0:
                setattr(self, name, value - 1)

    def apply_end_of_turn_powers(self) -> Dict[str, int]:
        """Plated Armor block, Ritual Strength and Regen healing."""
        result = {}
        if self.plated_armor > 0:
            result["block"] = self.gain_block(self.plated_armor, raw=True)
        if self.ritual > 0:
            self.strength += self.ritual
            result["strength"] = self.ritual
        if self.regen > 0:
            result["healed"] = self.heal(self.regen)
            self.regen -= 1
        return result

    def reset_combat_stats(self) -> None:
        """Clear block and every status."""
        self.block = 0
        for name in STATUS_FIELDS:
            setattr(self, name, 0)


@dataclass(eq=False)
class Player(Combatant):
    """
    The player.

    deck, relics, potions and gold persist across combats; a combat only
    touches HP, block, energy and statuses.
    """
    energy: int = 0
    max_energy: int = DEFAULT_ENERGY
    gold: int = DEFAULT_GOLD

    deck: List[Card] = field(default_factory=list)
    relics: List[Relic] = field(default_factory=list)
    potions: List[Optional[Potion]] = field(default_factory=list)
    max_potions: int = DEFAULT_POTION_SLOTS

    def __post_init__(self):
        super().__post_init__()
        if len(self.potions) < self.max_potions:
            self.potions.extend([None] * (self.max_potions - len(self.potions)))

    # ============ ENERGY ============

    def gain_energy(self, amount: int, overflow: int = MAX_ENERGY_OVERFLOW) -> int:
        """Gain energy, capped at max_energy + overflow. Returns amount gained."""
        if amount <= 0:
            return 0
        cap = self.max_energy + overflow
        new_energy = min(self.energy + amount, max(cap, self.energy))
        gained = new_energy - self.energy
        self.energy = new_energy
        return gained

    def lose_energy(self, amount: int) -> int:
        if amount <= 0:
            return 0
        lost = min(amount, self.energy)
        self.energy -= lost
        return lost

    def spend_energy(self, amount: int) -> bool:
        """Spend energy if affordable."""
        if amount > self.energy:
            return False
        self.energy -= max(0, amount)
        return True

    # ============ LIFECYCLE ============

    def revive(self, hp: int) -> int:
        """Bring a dead player back at hp (at least 1). Returns the new HP."""
        self.current_hp = max(1, min(hp, self.max_hp))
        return self.current_hp

    def reset_for_combat(self) -> None:
        """Reset combat-scoped stats at combat start."""
        self.reset_combat_stats()
        self.energy = self.max_energy

    def start_turn(self, keep_energy: bool = False, overflow: int = MAX_ENERGY_OVERFLOW) -> None:
        """Block falls off and energy refills (Ice Cream keeps leftovers, capped by overflow)."""
        self.block = 0
        if keep_energy:
            self.gain_energy(self.max_energy, overflow)
        else:
            self.energy = self.max_energy

    # ============ RELICS ============

    def add_relic(self, relic: Relic) -> Relic:
        """
        Add a copy of relic and fire its onObtain effects once.

        Returns:
            The owned relic instance
        """
        from ..registry import EffectContext, execute_relic_effects

        instance = relic.copy()
        self.relics.append(instance)
        execute_relic_effects(instance, "onObtain", EffectContext.for_player(self))
        return instance

    def has_relic(self, relic_id: str) -> bool:
        return any(r.id == relic_id for r in self.relics)

    def get_relic(self, relic_id: str) -> Optional[Relic]:
        for relic in self.relics:
            if relic.id == relic_id:
                return relic
        return None

    # ============ POTIONS ============

    def add_potion(self, potion: Potion) -> bool:
        """Place a copy in the first empty slot. False if all slots are full."""
        for i, slot in enumerate(self.potions):
            if slot is None:
                self.potions[i] = potion.copy()
                return True
        return False

    def get_potion(self, slot: int) -> Optional[Potion]:
        if 0 <= slot < len(self.potions):
            return self.potions[slot]
        return None

    def remove_potion(self, slot: int) -> Optional[Potion]:
        potion = self.get_potion(slot)
        if potion is not None:
            self.potions[slot] = None
        return potion

    def add_potion_slots(self, count: int) -> None:
        if count <= 0:
            return
        self.max_potions += count
        self.potions.extend([None] * count)


@dataclass(eq=False)
class Enemy(Combatant):
    """One hostile combatant for the duration of a single combat."""
    id: str = ""
    name: str = ""
    enemy_type: EnemyType = EnemyType.NORMAL
    moves: List[EnemyMove] = field(default_factory=list)
    current_intent: Optional[EnemyMove] = None
    move_history: List[str] = field(default_factory=list)

    @property
    def move_index(self) -> int:
        """Index of current_intent in moves, -1 if none."""
        for i, move in enumerate(self.moves):
            if move is self.current_intent:
                return i
        return -1

    def roll_move(self, rng: 'Random') -> Optional[EnemyMove]:
        """
        Pick the next intent by cumulative weight.

        A roll in [0, total_weight) selects the first move whose running
        weight total exceeds it, so ties go to declaration order.
        """
        total = sum(max(0, m.weight) for m in self.moves)
        if total <= 0:
            self.current_intent = None
            return None

        roll = rng.random_int(total - 1)
        cumulative = 0
        chosen = self.moves[-1]
        for move in self.moves:
            cumulative += max(0, move.weight)
            if roll < cumulative:
                chosen = move
                break

        self.current_intent = chosen
        self.move_history.append(chosen.id)
        if len(self.move_history) > MOVE_HISTORY_SIZE:
            self.move_history.pop(0)
        return chosen

    def get_intent_damage(self, weak_mult: float = WEAK_MULT) -> int:
        """Per-hit damage the current intent shows, 0 if it does not attack."""
        if self.current_intent is None or self.current_intent.base_damage < 0:
            return 0
        return calculate_intent_damage(
            self.current_intent.base_damage, self.strength, self.is_weak, weak_mult
        )

    def __repr__(self) -> str:
        return f"Enemy({self.id}, hp={self.current_hp}/{self.max_hp}, block={self.block})"


def create_enemy(template: EnemyTemplate, rng: Optional['Random'] = None) -> Enemy:
    """Build a runtime Enemy from a template, rolling HP if it has a range."""
    max_hp = template.max_hp
    if template.hp_range is not None and rng is not None:
        max_hp = rng.random_int_range(*template.hp_range)

    return Enemy(
        id=template.id,
        name=template.name,
        enemy_type=template.enemy_type,
        max_hp=max_hp,
        moves=[m.copy() for m in template.moves],
        strength=template.strength,
        plated_armor=template.plated_armor,
        ritual=template.ritual,
    )
