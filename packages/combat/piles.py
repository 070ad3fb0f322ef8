"""
Card Pile Manager - sole owner of card placement during a combat.

Piles:
- draw_pile: the END of the list is the top (cards are drawn with pop())
- hand: capped at max_hand_size; extra draws are silently truncated
- discard_pile: reshuffled into the draw pile when a draw finds it empty
- exhaust_pile: removed for the rest of the combat

Every card instance sits in exactly one pile. Cards are matched by
identity, never equality, so duplicate copies of a card stay distinct.
Running out of cards and a full hand are normal outcomes: operations
truncate or return False, they never raise.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from .config import MAX_HAND_SIZE
from .content.cards import Card
from .events import CombatEvent
from .state.rng import Random

logger = logging.getLogger(__name__)

# Insertion positions for add_to_draw_pile
TOP = "top"
BOTTOM = "bottom"
RANDOM = "random"


def _index_of(pile: List[Card], card: Card) -> int:
    for i, c in enumerate(pile):
        if c is card:
            return i
    return -1


class CardPileManager:
    """Draw / hand / discard / exhaust piles for one combat."""

    def __init__(
        self,
        rng: Random,
        max_hand_size: int = MAX_HAND_SIZE,
        emit: Optional[Callable[..., None]] = None,
    ):
        """
        Args:
            rng: Shared combat RNG (shuffles and random picks)
            max_hand_size: Hand cap
            emit: Called as emit(CombatEvent, **data) for draws, discards,
                exhausts and shuffles
        """
        self.rng = rng
        self.max_hand_size = max_hand_size
        self._emit = emit or (lambda event, **data: None)

        self.draw_pile: List[Card] = []
        self.hand: List[Card] = []
        self.discard_pile: List[Card] = []
        self.exhaust_pile: List[Card] = []
        self.shuffle_count = 0

    # =========================================================================
    # SETUP
    # =========================================================================

    def initialize_from_deck(self, deck: List[Card]) -> None:
        """
        Build the combat piles from a deck.

        Innate cards go straight to hand; the rest are shuffled into the draw
        pile. Innate cards that do not fit in hand go on top of the draw pile.
        """
        self.reset()

        innate: List[Card] = []
        others: List[Card] = []
        for card in deck:
            instance = card.copy()
            (innate if instance.innate else others).append(instance)

        self.rng.shuffle(others)
        self.draw_pile = others

        for card in innate:
            if not self.is_hand_full:
                self.hand.append(card)
            else:
                self.draw_pile.append(card)

    def reset(self) -> None:
        self.draw_pile = []
        self.hand = []
        self.discard_pile = []
        self.exhaust_pile = []
        self.shuffle_count = 0

    def load(self, draw_pile: List[Card], hand: List[Card], discard_pile: List[Card],
             exhaust_pile: List[Card], shuffle_count: int = 0) -> None:
        """Replace every pile wholesale (save restoration)."""
        self.draw_pile = list(draw_pile)
        self.hand = list(hand)
        self.discard_pile = list(discard_pile)
        self.exhaust_pile = list(exhaust_pile)
        self.shuffle_count = shuffle_count

    # =========================================================================
    # DRAWING
    # =========================================================================

    def draw_cards(self, count: int) -> List[Card]:
        """
        Draw up to count cards from the top of the draw pile.

        Reshuffles the discard pile in when the draw pile runs out. Stops
        silently when the hand is full or both piles are empty.

        Returns:
            Cards actually drawn
        """
        drawn = []
        for _ in range(max(0, count)):
            if self.is_hand_full:
                break
            if not self.draw_pile:
                if not self.discard_pile:
                    break
                self.shuffle_discard_into_draw()

            card = self.draw_pile.pop()
            self.hand.append(card)
            drawn.append(card)
            self._emit(CombatEvent.CARD_DRAWN, card=card)

        return drawn

    def draw_specific_card(self, card: Card) -> bool:
        """Move a given card from the draw pile to hand."""
        if self.is_hand_full:
            return False
        idx = _index_of(self.draw_pile, card)
        if idx < 0:
            return False
        self.draw_pile.pop(idx)
        self.hand.append(card)
        self._emit(CombatEvent.CARD_DRAWN, card=card)
        return True

    def draw_to_hand_size(self, size: int) -> List[Card]:
        """Draw until the hand holds size cards (or piles run out)."""
        return self.draw_cards(size - len(self.hand))

    # =========================================================================
    # DISCARDING / EXHAUSTING
    # =========================================================================

    def discard_card(self, card: Card) -> bool:
        """Move a card from hand to the discard pile."""
        idx = _index_of(self.hand, card)
        if idx < 0:
            return False
        return self.discard_card_at_index(idx) is not None

    def discard_card_at_index(self, index: int) -> Optional[Card]:
        if not 0 <= index < len(self.hand):
            return None
        card = self.hand.pop(index)
        self.discard_pile.append(card)
        self._emit(CombatEvent.CARD_DISCARDED, card=card)
        return card

    def discard_random_card(self) -> Optional[Card]:
        if not self.hand:
            return None
        return self.discard_card_at_index(self.rng.random_int(len(self.hand) - 1))

    def discard_hand(self) -> List[Card]:
        """Discard every card in hand except retained ones."""
        discarded = []
        for card in list(self.hand):
            if not card.retain:
                self.discard_card(card)
                discarded.append(card)
        return discarded

    def end_turn_cleanup(self, retain_all: bool = False) -> Tuple[List[Card], List[Card]]:
        """
        End-of-turn hand rules: retain stays, ethereal exhausts, else discards.

        Args:
            retain_all: Keep every non-ethereal card (RETAIN_HAND)

        Returns:
            Tuple of (discarded, exhausted)
        """
        discarded, exhausted = [], []
        for card in list(self.hand):
            if card.retain:
                continue
            if card.ethereal:
                self.exhaust_card(card)
                exhausted.append(card)
            elif not retain_all:
                self.discard_card(card)
                discarded.append(card)
        return discarded, exhausted

    def exhaust_card(self, card: Card, from_hand: bool = True) -> bool:
        """
        Exhaust a card.

        Args:
            card: Card to exhaust
            from_hand: Take it out of hand first. Pass False for a card that
                is already out of every pile (a card being played).
        """
        if from_hand:
            idx = _index_of(self.hand, card)
            if idx < 0:
                return False
            self.hand.pop(idx)
        self.exhaust_pile.append(card)
        self._emit(CombatEvent.CARD_EXHAUSTED, card=card)
        return True

    def exhaust_random_card(self) -> Optional[Card]:
        if not self.hand:
            return None
        card = self.hand[self.rng.random_int(len(self.hand) - 1)]
        self.exhaust_card(card)
        return card

    def remove_from_hand(self, card: Card) -> bool:
        """Take a card out of hand while it resolves. Caller must route it back."""
        idx = _index_of(self.hand, card)
        if idx < 0:
            return False
        self.hand.pop(idx)
        return True

    # =========================================================================
    # ADDING
    # =========================================================================

    def add_to_hand(self, card: Card) -> bool:
        """Add a card to hand. False if the hand is full."""
        if self.is_hand_full:
            logger.debug(f"Hand full, cannot add {card.id}")
            return False
        self.hand.append(card)
        return True

    def add_to_discard(self, card: Card) -> None:
        self.discard_pile.append(card)

    def add_to_draw_pile(self, card: Card, position: str = RANDOM) -> None:
        """Insert a card into the draw pile at top, bottom or a random spot."""
        if position == TOP:
            self.draw_pile.append(card)
        elif position == BOTTOM:
            self.draw_pile.insert(0, card)
        elif position == RANDOM:
            idx = self.rng.random_int(len(self.draw_pile))
            self.draw_pile.insert(idx, card)
        else:
            raise ValueError(f"Unknown draw pile position: {position}")

    # =========================================================================
    # SHUFFLING
    # =========================================================================

    def shuffle_discard_into_draw(self) -> None:
        """Shuffle the discard pile and put it under the current draw pile."""
        cards = self.discard_pile
        self.discard_pile = []
        self.rng.shuffle(cards)
        self.draw_pile = cards + self.draw_pile
        self.shuffle_count += 1
        self._emit(CombatEvent.SHUFFLE, count=len(cards))

    # =========================================================================
    # QUERIES
    # =========================================================================

    @property
    def is_hand_full(self) -> bool:
        return len(self.hand) >= self.max_hand_size

    def in_hand(self, card: Card) -> bool:
        return _index_of(self.hand, card) >= 0

    def peek_draw_pile(self, count: int = 1) -> List[Card]:
        """Top count cards of the draw pile, top first."""
        if count <= 0:
            return []
        return list(reversed(self.draw_pile[-count:]))

    def get_pile_sizes(self) -> Dict[str, int]:
        return {
            "draw": len(self.draw_pile),
            "hand": len(self.hand),
            "discard": len(self.discard_pile),
            "exhaust": len(self.exhaust_pile),
        }

    @property
    def total_cards(self) -> int:
        return sum(self.get_pile_sizes().values())
