"""
Combat Manager - orchestrates one encounter.

Owns the Player and Enemies for the duration of the combat and wires the
TurnManager, CardPileManager, RelicManager and effect registries
together. Every public mutator either fully validates and applies, or
returns False without touching state.

Flow:
    start_combat()
    play_card(card, target) / use_potion(slot, target)   (player turn)
    end_player_turn()        -> cleanup, refill, execute_enemy_turn()
    ...
    phase == ENDED, victory True/False

Usage:
    manager = CombatManager(player, [JAW_WORM], rng=Random(42))
    manager.start_combat()
    manager.play_card(manager.hand[0], manager.get_alive_enemies()[0])
    manager.end_player_turn()
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from .calc.damage import (
    calculate_damage,
    calculate_incoming_damage,
    poison_tick,
    VULN_MULT_PAPER_PHROG,
)
from .config import CombatConfig
from .content.cards import Card, CardType, TargetType
from .content.enemies import EnemyAction, EnemyMove, EnemyTemplate
from .content.potions import Potion
from .events import CombatEvent, CombatLog, EventBus
from .piles import CardPileManager
from .registry import (
    EffectActions,
    EffectContext,
    EffectResult,
    execute_card_effect,
    execute_potion_effect,
)
from .relic_manager import RelicManager
from .state.entities import Combatant, Enemy, Player, create_enemy
from .state.rng import Random
from .turns import TurnManager

logger = logging.getLogger(__name__)

EnemySource = Union[EnemyTemplate, Enemy]

# Relic trigger fired for each card type, after the first-attack check
_TYPE_TRIGGERS = {
    CardType.ATTACK: "onAttackPlayed",
    CardType.SKILL: "onSkillPlayed",
    CardType.POWER: "onPowerPlayed",
}


# =============================================================================
# COMBAT PHASE
# =============================================================================

class CombatPhase(Enum):
    """Current phase of combat."""
    NOT_STARTED = "NOT_STARTED"
    PLAYER_TURN = "PLAYER_TURN"
    ENEMY_TURN = "ENEMY_TURN"
    ENDED = "ENDED"


# =============================================================================
# COMBAT RESULT
# =============================================================================

@dataclass
class CombatResult:
    """Summary of a combat."""
    victory: bool
    turns: int
    hp_remaining: int
    hp_lost: int
    cards_played: int
    damage_dealt: int
    damage_taken: int
    potions_used: int

    cards_played_sequence: List[str] = field(default_factory=list)


# =============================================================================
# ACTIONS FACADE
# =============================================================================

class CombatActions(EffectActions):
    """EffectActions bound to a live CombatManager."""

    def __init__(self, manager: 'CombatManager'):
        self._manager = manager

    def deal_damage_to_enemy(self, enemy: Enemy, amount: int, raw: bool = False) -> int:
        return self._manager._deal_damage_to_enemy(enemy, amount, raw=raw)

    def deal_damage_to_all_enemies(self, amount: int, raw: bool = False) -> int:
        total = 0
        for enemy in self._manager.get_alive_enemies():
            total += self._manager._deal_damage_to_enemy(enemy, amount, raw=raw)
        return total

    def gain_block(self, target: Combatant, amount: int, raw: bool = False) -> int:
        return self._manager._gain_block(target, amount, raw=raw)

    def lose_hp(self, player: Player, amount: int) -> int:
        return self._manager._lose_player_hp(amount, source="hp_loss")

    def draw_cards(self, count: int) -> List[Card]:
        return self._manager.piles.draw_cards(count)

    def discard_random_card(self) -> Optional[Card]:
        card = self._manager.piles.discard_random_card()
        if card is not None:
            self._manager._trigger_relics("onCardDiscarded", card=card)
        return card

    def exhaust_random_card(self) -> Optional[Card]:
        return self._manager.piles.exhaust_random_card()

    def add_card_to_hand(self, card: Card) -> bool:
        return self._manager.piles.add_to_hand(card)

    def add_card_to_discard(self, card: Card) -> bool:
        self._manager.piles.add_to_discard(card)
        return True

    def add_card_to_draw_pile(self, card: Card, position: str = "random") -> bool:
        self._manager.piles.add_to_draw_pile(card, position)
        return True

    def create_card(self, card_id: str) -> Optional[Card]:
        return self._manager.create_card(card_id)

    def get_card_pool(self) -> List[Card]:
        return list(self._manager.card_pool.values())

    def get_alive_enemies(self) -> List[Enemy]:
        return self._manager.get_alive_enemies()

    def get_random_enemy(self) -> Optional[Enemy]:
        return self._manager.get_random_enemy()

    def random_int(self, range_val: int) -> int:
        return self._manager.rng.random_int(range_val)

    def trigger_relics(self, trigger: str, **data) -> List[EffectResult]:
        return self._manager._trigger_relics(trigger, **data)

    def log(self, message: str) -> None:
        logger.debug(message)
        self._manager.combat_log.log(self._manager.turn, "log", message=message)


# =============================================================================
# COMBAT MANAGER
# =============================================================================

class CombatManager:
    """
    One encounter between a player and a group of enemies.

    Handles:
    - Turn flow (player turn, end-of-turn cleanup, enemy turn)
    - Card play and potion use validation and resolution
    - Damage pipeline (Strength, Weak, Vulnerable, block, relic modifiers)
    - Relic triggers and event publication
    """

    def __init__(
        self,
        player: Player,
        enemies: Sequence[EnemySource],
        rng: Optional[Random] = None,
        relic_manager: Optional[RelicManager] = None,
        config: Optional[CombatConfig] = None,
        card_pool: Optional[Sequence[Card]] = None,
        events: Optional[EventBus] = None,
    ):
        """
        Args:
            player: The run's player; deck, relics and potions are read from it
            enemies: Enemy templates (instantiated at start) or ready Enemies
            rng: The single random source for this combat
            relic_manager: Run-scoped relic manager (carries next-combat bonuses)
            config: Rule overrides
            card_pool: Cards effects may generate by id (ADD_TO_HAND, ...)
            events: Bus to publish on; a private one is created if omitted
        """
        self.player = player
        self.rng = rng if rng is not None else Random(0)
        self.relic_manager = relic_manager if relic_manager is not None else RelicManager()
        self.config = config if config is not None else CombatConfig()
        self.card_pool: Dict[str, Card] = {c.id: c for c in (card_pool or [])}
        self.events = events if events is not None else EventBus()

        self._enemy_sources: List[EnemySource] = list(enemies)
        self.enemies: List[Enemy] = []

        self.piles = CardPileManager(self.rng, self.config.max_hand_size, emit=self._on_pile_event)
        self.turns = TurnManager(self.rng)
        self.actions = CombatActions(self)

        # Enemy action dispatch; callers may register more entries
        self.enemy_action_handlers: Dict[str, Callable[[Enemy, EnemyAction], None]] = {
            "DAMAGE": self._enemy_damage,
            "APPLY_WEAK": self._enemy_debuff("weak"),
            "APPLY_VULNERABLE": self._enemy_debuff("vulnerable"),
            "APPLY_FRAIL": self._enemy_debuff("frail"),
            "APPLY_POISON": self._enemy_debuff("poison"),
            "APPLY_BLOCK_SELF": self._enemy_block,
            "APPLY_STRENGTH_SELF": self._enemy_strength,
            "ADD_STATUS_CARD": self._enemy_add_status_card,
        }

        self.phase = CombatPhase.NOT_STARTED
        self.victory: Optional[bool] = None
        self.combat_log = CombatLog()

        # Statistics
        self.initial_hp = player.current_hp
        self.damage_dealt = 0
        self.damage_taken = 0
        self.potions_used = 0
        self.cards_played_sequence: List[str] = []

    # =========================================================================
    # Read-only views
    # =========================================================================

    @property
    def hand(self) -> Tuple[Card, ...]:
        return tuple(self.piles.hand)

    @property
    def draw_pile(self) -> Tuple[Card, ...]:
        return tuple(self.piles.draw_pile)

    @property
    def discard_pile(self) -> Tuple[Card, ...]:
        return tuple(self.piles.discard_pile)

    @property
    def exhaust_pile(self) -> Tuple[Card, ...]:
        return tuple(self.piles.exhaust_pile)

    @property
    def turn(self) -> int:
        return self.turns.turn

    @property
    def is_player_turn(self) -> bool:
        return self.phase == CombatPhase.PLAYER_TURN and self.turns.is_player_turn

    @property
    def combat_ended(self) -> bool:
        return self.phase == CombatPhase.ENDED

    def get_alive_enemies(self) -> List[Enemy]:
        """Get all living enemies in roster order."""
        return [e for e in self.enemies if not e.is_dead]

    def get_random_enemy(self) -> Optional[Enemy]:
        alive = self.get_alive_enemies()
        if not alive:
            return None
        return alive[self.rng.random_int(len(alive) - 1)]

    def create_card(self, card_id: str) -> Optional[Card]:
        """Fresh copy of a card from the card pool."""
        template = self.card_pool.get(card_id)
        return template.copy() if template is not None else None

    # =========================================================================
    # Combat flow
    # =========================================================================

    def start_combat(self) -> bool:
        """Reset the player, build piles and enemies, and open turn 1."""
        if self.phase != CombatPhase.NOT_STARTED:
            return False

        self.player.reset_for_combat()
        self.enemies = [self._instantiate_enemy(source, self.rng) for source in self._enemy_sources]
        self.turns.reset()
        self.piles.initialize_from_deck(self.player.deck)
        self.initial_hp = self.player.current_hp

        bonus = self.relic_manager.consume_bonus_energy()
        if bonus:
            self.player.gain_energy(bonus, self.config.max_energy_overflow)

        for enemy in self.enemies:
            enemy.roll_move(self.rng)

        self.phase = CombatPhase.PLAYER_TURN
        self.turns.start_turn()
        self._emit(CombatEvent.COMBAT_START,
                   player_hp=self.player.current_hp,
                   enemies=[e.id for e in self.enemies])

        self._trigger_relics("onCombatStart")
        if self._check_combat_end():
            return True

        self.piles.draw_to_hand_size(self.config.hand_size)
        self._begin_player_turn_hooks()
        return True

    def end_player_turn(self, run_enemy_turn: bool = True) -> bool:
        """
        End the player's turn.

        Runs end-of-turn relics and powers, ticks player statuses, applies
        hand cleanup and refills the hand, then (by default) the enemy turn.

        Args:
            run_enemy_turn: False leaves the combat in ENEMY_TURN so the
                caller can invoke execute_enemy_turn() later (animation delay)
        """
        if self.phase != CombatPhase.PLAYER_TURN or not self.turns.end_player_turn():
            logger.debug("end_player_turn rejected: not the player's turn")
            return False

        self._trigger_relics("onTurnEnd")
        self.player.apply_end_of_turn_powers()
        self.player.tick_statuses()
        self._tick_player_poison()
        self.piles.end_turn_cleanup(retain_all=self.turns.retain_hand)
        self._emit(CombatEvent.TURN_END, turn=self.turn)

        if self._check_combat_end():
            return True

        self.piles.draw_cards(self.config.hand_size)
        self.turns.begin_enemy_turn()
        self.phase = CombatPhase.ENEMY_TURN

        if run_enemy_turn:
            self.execute_enemy_turn()
        return True

    def execute_enemy_turn(self) -> bool:
        """
        Resolve the enemy turn and open the next player turn.

        Enemies act in roster order, each finishing its whole action list.
        If the player dies, the combat ends in defeat before any further
        state changes.
        """
        if self.phase != CombatPhase.ENEMY_TURN:
            return False

        self._emit(CombatEvent.ENEMY_TURN_START, turn=self.turn)

        for enemy, move in self.turns.get_enemy_actions(self.enemies):
            enemy.block = 0
            self._execute_enemy_move(enemy, move)
            if self._check_combat_end():
                return True

        # Enemy end of turn: powers, status ticks, then poison
        for enemy in self.get_alive_enemies():
            enemy.apply_end_of_turn_powers()
            enemy.tick_statuses()
            self._apply_poison(enemy)

        if self._check_combat_end():
            return True

        self.player.start_turn(
            keep_energy=self.relic_manager.check_ice_cream(self.player),
            overflow=self.config.max_energy_overflow,
        )
        self.turns.end_enemy_turn()
        self.phase = CombatPhase.PLAYER_TURN
        self._begin_player_turn_hooks()
        return True

    def _begin_player_turn_hooks(self) -> None:
        self._emit(CombatEvent.TURN_START, turn=self.turn)
        self._trigger_relics("onTurnStart")
        self._check_combat_end()

    # =========================================================================
    # Card play
    # =========================================================================

    def can_play_card(self, card: Card, target: Optional[Enemy] = None) -> bool:
        """Would play_card accept this card and target?"""
        return self._validate_play(card, target) is None

    def _validate_play(self, card: Card, target: Optional[Enemy]) -> Optional[str]:
        """Reason a play is illegal, or None."""
        if not self.is_player_turn:
            return "not the player's turn"
        if not self.piles.in_hand(card):
            return "card not in hand"
        if not card.is_playable:
            return "card is unplayable"
        if not card.is_x_cost and card.current_cost > self.player.energy:
            return "insufficient energy"
        if not self._valid_target(card.target, target):
            return "invalid target"
        return None

    def _valid_target(self, target_type: TargetType, target: Optional[Enemy]) -> bool:
        if target_type != TargetType.SINGLE_ENEMY:
            return True
        return (
            target is not None
            and any(e is target for e in self.enemies)
            and not target.is_dead
        )

    def play_card(self, card: Card, target: Optional[Enemy] = None) -> bool:
        """
        Play a card from hand.

        Returns:
            False (with no state change) if the play is illegal
        """
        reason = self._validate_play(card, target)
        if reason is not None:
            logger.debug(f"play_card({card.id}) rejected: {reason}")
            return False

        # Spend energy
        if card.is_x_cost:
            energy_spent = self.player.energy
            self.player.energy = 0
        else:
            energy_spent = max(0, card.current_cost)
            self.player.spend_energy(energy_spent)

        self.piles.remove_from_hand(card)
        counters = self.turns.record_card_played(card.card_type)
        self.cards_played_sequence.append(card.id)

        if counters["is_first_attack"]:
            self._trigger_relics("onFirstAttack", card=card)
        type_trigger = _TYPE_TRIGGERS.get(card.card_type)
        if type_trigger:
            self._trigger_relics(type_trigger, card=card)

        ctx = self._build_context(
            target if card.target == TargetType.SINGLE_ENEMY else None,
            card=card,
            energy_spent=energy_spent if card.is_x_cost else None,
        )
        repeats = 1
        if self.turns.play_twice_charges > 0:
            self.turns.play_twice_charges -= 1
            repeats = 2

        results = []
        for _ in range(repeats):
            for effect in card.current_effects:
                results.append(execute_card_effect(effect, ctx))

        self._trigger_relics("onCardPlayed", card=card)

        if card.exhaust:
            self.piles.exhaust_card(card, from_hand=False)
        else:
            self.piles.add_to_discard(card)

        self._emit(CombatEvent.CARD_PLAYED, card=card, target=target,
                   energy_spent=energy_spent, results=results)
        self._check_combat_end()
        return True

    def get_playable_cards(self) -> List[Card]:
        """Cards in hand that can be played against at least one target."""
        alive = self.get_alive_enemies()
        playable = []
        for card in self.piles.hand:
            if card.target == TargetType.SINGLE_ENEMY:
                if any(self.can_play_card(card, e) for e in alive):
                    playable.append(card)
            elif self.can_play_card(card):
                playable.append(card)
        return playable

    # =========================================================================
    # Potions
    # =========================================================================

    def use_potion(self, slot: int, target: Optional[Enemy] = None) -> bool:
        """
        Drink the potion in slot.

        Fails without consuming the potion if the slot is empty or a required
        target is missing. Otherwise the potion is consumed whatever its
        effects return.
        """
        if not self.is_player_turn:
            logger.debug("use_potion rejected: not the player's turn")
            return False

        potion = self.player.get_potion(slot)
        if potion is None:
            logger.debug(f"use_potion rejected: slot {slot} is empty")
            return False
        if potion.requires_target and not self._valid_target(TargetType.SINGLE_ENEMY, target):
            logger.debug(f"use_potion({potion.id}) rejected: invalid target")
            return False

        self.player.remove_potion(slot)
        results = self._drink(potion, target)
        self._emit(CombatEvent.POTION_USED, potion=potion, slot=slot,
                   target=target, results=results)
        self._trigger_relics("onPotionUsed", potion=potion)
        self._check_combat_end()
        return True

    def _drink(self, potion: Potion, target: Optional[Enemy]) -> List[EffectResult]:
        ctx = self._build_context(target if potion.requires_target else None, potion=potion)
        self.potions_used += 1
        return [execute_potion_effect(effect, ctx) for effect in potion.effects]

    def _try_revive(self) -> bool:
        """Use the first revive potion on a dead player."""
        for slot, potion in enumerate(self.player.potions):
            if potion is not None and potion.is_revive:
                self.player.remove_potion(slot)
                results = self._drink(potion, None)
                self._emit(CombatEvent.POTION_USED, potion=potion, slot=slot,
                           target=None, results=results, automatic=True)
                return not self.player.is_dead
        return False

    # =========================================================================
    # Damage / block
    # =========================================================================

    def _deal_damage_to_enemy(self, enemy: Enemy, amount: int, raw: bool = False) -> int:
        """
        Player-side damage to one enemy. Returns HP lost.

        Card damage runs the full pipeline; raw (relic/potion) damage skips
        Strength, Weak and Vulnerable.
        """
        if enemy.is_dead:
            return 0

        if raw:
            damage = max(0, amount)
        else:
            vuln_mult = self.config.vulnerable_multiplier
            if self.relic_manager.has_paper_phrog(self.player):
                vuln_mult = VULN_MULT_PAPER_PHROG
            damage = calculate_damage(
                amount,
                strength=self.player.strength + self.relic_manager.check_red_skull(self.player),
                weak=self.player.is_weak,
                vuln=enemy.is_vulnerable,
                weak_mult=self.config.weak_multiplier,
                vuln_mult=vuln_mult,
            )

        hp_lost = enemy.take_damage(damage)
        self.damage_dealt += hp_lost
        self._emit(CombatEvent.DAMAGE_DEALT, source=self.player, target=enemy,
                   amount=damage, hp_lost=hp_lost)

        if enemy.is_dead:
            self._on_enemy_killed(enemy)
        elif not raw and enemy.thorns > 0:
            self._apply_damage_to_player(enemy.thorns, attacker=None)
        return hp_lost

    def _apply_damage_to_player(self, damage: int, attacker: Optional[Enemy]) -> int:
        """
        One damage instance against the player. Returns HP lost.

        Block absorbs first; Torii applies to attack damage only, then
        Tungsten Rod. The attacker takes Thorns damage back.
        """
        hp_loss, self.player.block = calculate_incoming_damage(damage, self.player.block)
        if attacker is not None:
            hp_loss = self.relic_manager.check_torii(self.player, hp_loss)

        lost = self._lose_player_hp(hp_loss, source=attacker, amount=damage)
        if attacker is not None and self.player.thorns > 0:
            self._deal_damage_to_enemy(attacker, self.player.thorns, raw=True)
        return lost

    def _lose_player_hp(self, hp_loss: int, source: Any, amount: Optional[int] = None) -> int:
        """HP loss past block (attacks, poison, card costs). Tungsten Rod applies."""
        hp_loss = self.relic_manager.check_tungsten_rod(self.player, hp_loss)
        lost = self.player.lose_hp(hp_loss)
        self.damage_taken += lost
        self._emit(CombatEvent.DAMAGE_DEALT, source=source, target=self.player,
                   amount=hp_loss if amount is None else amount, hp_lost=lost)
        if lost > 0:
            attacker = source if isinstance(source, Enemy) else None
            self._trigger_relics("onPlayerDamaged", attacker=attacker, amount=lost)
        return lost

    def _gain_block(self, target: Combatant, amount: int, raw: bool = False) -> int:
        gained = target.gain_block(amount, raw=raw, frail_mult=self.config.frail_multiplier)
        if gained:
            self._emit(CombatEvent.BLOCK_GAINED, target=target, amount=gained)
        return gained

    def _apply_poison(self, enemy: Enemy) -> None:
        damage, enemy.poison = poison_tick(enemy.poison)
        if damage <= 0:
            return
        lost = enemy.lose_hp(damage)
        self._emit(CombatEvent.DAMAGE_DEALT, source="poison", target=enemy,
                   amount=damage, hp_lost=lost)
        if enemy.is_dead:
            self._on_enemy_killed(enemy)

    def _tick_player_poison(self) -> None:
        damage, self.player.poison = poison_tick(self.player.poison)
        if damage > 0:
            self._lose_player_hp(damage, source="poison")

    def _on_enemy_killed(self, enemy: Enemy) -> None:
        self._emit(CombatEvent.ENEMY_KILLED, enemy=enemy)
        self._trigger_relics("onEnemyKilled", enemy=enemy)

    # =========================================================================
    # Enemy actions
    # =========================================================================

    def _execute_enemy_move(self, enemy: Enemy, move: EnemyMove) -> None:
        self._emit(CombatEvent.ENEMY_ACTION, enemy=enemy, move=move)
        for action in move.actions:
            handler = self.enemy_action_handlers.get(action.type)
            if handler is None:
                logger.warning(f"Unknown enemy action type: {action.type}")
                continue
            handler(enemy, action)

    def _enemy_damage(self, enemy: Enemy, action: EnemyAction) -> None:
        for _ in range(max(1, action.times)):
            if enemy.is_dead:
                break
            damage = calculate_damage(
                action.value,
                strength=enemy.strength,
                weak=enemy.is_weak,
                vuln=self.player.is_vulnerable,
                weak_mult=self.config.weak_multiplier,
                vuln_mult=self.config.vulnerable_multiplier,
            )
            self._apply_damage_to_player(damage, attacker=enemy)

    def _enemy_debuff(self, status: str) -> Callable[[Enemy, EnemyAction], None]:
        def apply(enemy: Enemy, action: EnemyAction) -> None:
            self.player.merge_status(status, action.value)
        return apply

    def _enemy_block(self, enemy: Enemy, action: EnemyAction) -> None:
        self._gain_block(enemy, action.value)

    def _enemy_strength(self, enemy: Enemy, action: EnemyAction) -> None:
        enemy.add_status("strength", action.value)

    def _enemy_add_status_card(self, enemy: Enemy, action: EnemyAction) -> None:
        for _ in range(max(1, action.value)):
            card = self.create_card(action.card_id) if action.card_id else None
            if card is None:
                logger.warning(f"{enemy.id}: unknown status card {action.card_id}")
                return
            self.piles.add_to_discard(card)

    # =========================================================================
    # Combat end
    # =========================================================================

    def _check_combat_end(self) -> bool:
        """End the combat if it is decided. Victory takes precedence."""
        if self.phase == CombatPhase.ENDED:
            return True
        if self.enemies and not self.get_alive_enemies():
            self._end_combat(True)
        elif self.player.is_dead and not self._try_revive():
            self._end_combat(False)
        return self.phase == CombatPhase.ENDED

    def _end_combat(self, victory: bool) -> None:
        self.phase = CombatPhase.ENDED
        self.victory = victory
        self._emit(CombatEvent.COMBAT_END, victory=victory)
        if victory:
            self._trigger_relics("onCombatVictory")
        self._trigger_relics("onCombatEnd", victory=victory)
        logger.debug(f"Combat ended on turn {self.turn}: {'victory' if victory else 'defeat'}")

    def get_result(self) -> CombatResult:
        """Get combat result summary."""
        return CombatResult(
            victory=bool(self.victory),
            turns=self.turn,
            hp_remaining=self.player.current_hp,
            hp_lost=max(0, self.initial_hp - self.player.current_hp),
            cards_played=self.turns.cards_played_this_combat,
            damage_dealt=self.damage_dealt,
            damage_taken=self.damage_taken,
            potions_used=self.potions_used,
            cards_played_sequence=list(self.cards_played_sequence),
        )

    # =========================================================================
    # Internals
    # =========================================================================

    def _instantiate_enemy(self, source: EnemySource, rng: Optional[Random]) -> Enemy:
        if isinstance(source, EnemyTemplate):
            return create_enemy(source, rng)
        return source

    def _build_context(self, target: Optional[Enemy] = None, **source: Any) -> EffectContext:
        return EffectContext(
            player=self.player,
            enemies=self.enemies,
            target=target,
            actions=self.actions,
            piles=self.piles,
            turns=self.turns,
            rng=self.rng,
            config=self.config,
            relic_manager=self.relic_manager,
            **source,
        )

    def _trigger_relics(self, trigger: str, **data) -> List[EffectResult]:
        results = self.relic_manager.trigger_relics(
            self.player, trigger, self._build_context(), **data
        )
        for result in results:
            if result.success and result.data.get("fired", True):
                self._emit(CombatEvent.RELIC_TRIGGERED, relic_id=result.data["relic_id"],
                           trigger=trigger, value=result.value)
        return results

    def _emit(self, event: CombatEvent, **data) -> None:
        self.combat_log.log(self.turn, event.value, **data)
        self.events.emit(event, **data)

    def _on_pile_event(self, event: CombatEvent, **data) -> None:
        self._emit(event, **data)
        if event == CombatEvent.SHUFFLE:
            self._trigger_relics("onShuffle")
        elif event == CombatEvent.CARD_EXHAUSTED:
            self._trigger_relics("onCardExhausted", card=data.get("card"))

    def to_record(self) -> Dict[str, Any]:
        """Plain-data snapshot of the combat (see state.snapshot)."""
        from .state.snapshot import snapshot_combat
        return snapshot_combat(self)
