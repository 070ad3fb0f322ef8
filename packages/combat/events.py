"""
Combat event notification.

The engine never calls presentation code directly. The CombatManager
publishes CombatEvents on an EventBus; a UI, a stats tracker or a test
subscribes to the events it cares about. Notifications are advisory:
engine state stays the source of truth, and a failing subscriber is
logged without interrupting the combat.

CombatLog keeps every published event as a (turn, event_type, data)
entry for replay and inspection.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Deque, Dict, List, Tuple

from .config import EVENT_HISTORY_LIMIT

logger = logging.getLogger(__name__)


class CombatEvent(Enum):
    """Events published during a combat."""
    COMBAT_START = "combat_start"
    COMBAT_END = "combat_end"
    TURN_START = "turn_start"
    TURN_END = "turn_end"
    ENEMY_TURN_START = "enemy_turn_start"
    ENEMY_ACTION = "enemy_action"

    CARD_PLAYED = "card_played"
    CARD_DRAWN = "card_drawn"
    CARD_DISCARDED = "card_discarded"
    CARD_EXHAUSTED = "card_exhausted"
    SHUFFLE = "shuffle"

    DAMAGE_DEALT = "damage_dealt"
    BLOCK_GAINED = "block_gained"
    POTION_USED = "potion_used"
    RELIC_TRIGGERED = "relic_triggered"
    ENEMY_KILLED = "enemy_killed"


EventHandler = Callable[..., None]


@dataclass
class _Listener:
    handler: EventHandler
    once: bool
    priority: int


class EventBus:
    """
    Publish/subscribe hub for CombatEvents.

    Handlers receive the event payload as keyword arguments. Higher
    priority handlers run first; equal priorities run in subscription
    order.

    Usage:
        bus = EventBus()
        unsubscribe = bus.on(CombatEvent.CARD_PLAYED, lambda card, **_: print(card))
        ...
        unsubscribe()
    """

    def __init__(self, history_limit: int = EVENT_HISTORY_LIMIT):
        self._listeners: Dict[CombatEvent, List[_Listener]] = {}
        self.history: Deque[Tuple[CombatEvent, Dict[str, Any]]] = deque(maxlen=history_limit)

    def on(self, event: CombatEvent, handler: EventHandler, priority: int = 0) -> Callable[[], None]:
        """Subscribe handler to event. Returns an unsubscribe function."""
        return self._add_listener(event, handler, once=False, priority=priority)

    def once(self, event: CombatEvent, handler: EventHandler, priority: int = 0) -> Callable[[], None]:
        """Subscribe handler for the next emission only."""
        return self._add_listener(event, handler, once=True, priority=priority)

    def off(self, event: CombatEvent, handler: EventHandler) -> None:
        """Remove handler from event if subscribed."""
        listeners = self._listeners.get(event, [])
        for listener in listeners:
            if listener.handler == handler:
                self._remove_listener(event, listener)
                return

    def _remove_listener(self, event: CombatEvent, entry: _Listener) -> None:
        listeners = self._listeners.get(event)
        if not listeners:
            return
        for i, listener in enumerate(listeners):
            if listener is entry:
                del listeners[i]
                break
        if not listeners:
            del self._listeners[event]

    def _add_listener(self, event: CombatEvent, handler: EventHandler,
                      once: bool, priority: int) -> Callable[[], None]:
        listeners = self._listeners.setdefault(event, [])
        entry = _Listener(handler=handler, once=once, priority=priority)

        # Insert before the first lower-priority listener
        for i, existing in enumerate(listeners):
            if existing.priority < priority:
                listeners.insert(i, entry)
                break
        else:
            listeners.append(entry)

        return lambda: self._remove_listener(event, entry)

    def emit(self, event: CombatEvent, **data) -> None:
        """Publish event to every subscriber."""
        self.history.append((event, data))

        listeners = self._listeners.get(event)
        if not listeners:
            return

        # Copy so handlers may unsubscribe while we iterate
        for listener in list(listeners):
            if listener.once:
                self._remove_listener(event, listener)
            try:
                listener.handler(**data)
            except Exception:
                logger.exception(f"Error in handler for {event.value}")

    def listener_count(self, event: CombatEvent) -> int:
        return len(self._listeners.get(event, []))

    def clear(self) -> None:
        """Drop every subscription and the history."""
        self._listeners.clear()
        self.history.clear()


@dataclass
class CombatLogEntry:
    """A single combat log entry."""
    turn: int
    event_type: str
    data: Dict[str, Any]


@dataclass
class CombatLog:
    """Combat event log for replay."""
    entries: List[CombatLogEntry] = field(default_factory=list)

    def log(self, turn: int, event_type: str, /, **data):
        """Add a log entry."""
        self.entries.append(CombatLogEntry(turn=turn, event_type=event_type, data=data))

    def get_events(self, event_type: str) -> List[CombatLogEntry]:
        """Get all events of a specific type."""
        return [e for e in self.entries if e.event_type == event_type]
