"""
Event Bus Tests

Subscription, one-shot listeners, priorities and bounded history.
"""

from packages.combat.events import CombatEvent, CombatLog, EventBus


class TestSubscriptions:

    def test_priority_order(self):
        bus = EventBus()
        seen = []
        bus.on(CombatEvent.SHUFFLE, lambda **_: seen.append("low"))
        bus.on(CombatEvent.SHUFFLE, lambda **_: seen.append("high"), priority=5)
        bus.emit(CombatEvent.SHUFFLE)
        assert seen == ["high", "low"]

    def test_unsubscribe(self):
        bus = EventBus()
        seen = []
        unsubscribe = bus.on(CombatEvent.SHUFFLE, lambda **_: seen.append(1))
        unsubscribe()
        bus.emit(CombatEvent.SHUFFLE)
        assert seen == []
        assert bus.listener_count(CombatEvent.SHUFFLE) == 0

    def test_once_fires_one_time(self):
        bus = EventBus()
        seen = []
        bus.once(CombatEvent.SHUFFLE, lambda count: seen.append(count))
        bus.emit(CombatEvent.SHUFFLE, count=3)
        bus.emit(CombatEvent.SHUFFLE, count=4)
        assert seen == [3]

    def test_once_and_on_with_same_handler(self):
        bus = EventBus()
        seen = []

        def record(**_):
            seen.append(1)

        bus.on(CombatEvent.SHUFFLE, record)
        bus.once(CombatEvent.SHUFFLE, record)
        bus.emit(CombatEvent.SHUFFLE)
        bus.emit(CombatEvent.SHUFFLE)
        assert len(seen) == 3
        assert bus.listener_count(CombatEvent.SHUFFLE) == 1

    def test_unsubscribe_removes_only_its_own_entry(self):
        bus = EventBus()
        seen = []

        def record(**_):
            seen.append(1)

        bus.on(CombatEvent.SHUFFLE, record)
        unsubscribe_second = bus.on(CombatEvent.SHUFFLE, record)
        unsubscribe_second()
        bus.emit(CombatEvent.SHUFFLE)
        assert seen == [1]

    def test_off_removes_handler(self):
        bus = EventBus()
        seen = []

        def record(**_):
            seen.append(1)

        bus.on(CombatEvent.SHUFFLE, record)
        bus.off(CombatEvent.SHUFFLE, record)
        bus.off(CombatEvent.SHUFFLE, record)
        bus.emit(CombatEvent.SHUFFLE)
        assert seen == []


class TestHistory:

    def test_history_is_bounded(self):
        bus = EventBus(history_limit=3)
        for count in range(5):
            bus.emit(CombatEvent.SHUFFLE, count=count)
        assert [data["count"] for _, data in bus.history] == [2, 3, 4]

    def test_clear(self):
        bus = EventBus()
        bus.on(CombatEvent.SHUFFLE, lambda **_: None)
        bus.emit(CombatEvent.SHUFFLE)
        bus.clear()
        assert len(bus.history) == 0
        assert bus.listener_count(CombatEvent.SHUFFLE) == 0


class TestCombatLog:

    def test_payload_may_carry_turn(self):
        log = CombatLog()
        log.log(2, "turn_start", turn=2)
        entry = log.get_events("turn_start")[0]
        assert entry.turn == 2
        assert entry.data == {"turn": 2}
