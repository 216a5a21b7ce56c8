"""Tests for the EventBus domain event dispatch system."""

import dataclasses

import pytest

from antsim.events import (
    AntDiedEvent,
    AntSpawnedEvent,
    EventBus,
    EventSink,
    RainEndedEvent,
)


def _died(ant_id: int = 1) -> AntDiedEvent:
    return AntDiedEvent(ant_id=ant_id, role="worker", cause="starvation", x=10.0, y=20.0, elapsed_ms=500.0)


class TestEventBus:
    """Test suite for EventBus functionality."""

    def test_emit_reaches_subscriber(self) -> None:
        """Verify events are delivered to subscribed handlers."""
        bus = EventBus()
        received_events: list = []
        bus.subscribe(AntDiedEvent, received_events.append)

        event = _died(42)
        bus.emit(event)

        assert len(received_events) == 1
        assert received_events[0] is event
        assert received_events[0].ant_id == 42

    def test_no_subscribers_no_crash(self) -> None:
        """Verify emitting with no subscribers is a no-op."""
        bus = EventBus()
        bus.emit(_died())
        assert bus.subscriber_count(AntDiedEvent) == 0
        assert not bus.has_subscribers(AntDiedEvent)

    def test_handlers_only_receive_their_type(self) -> None:
        bus = EventBus()
        deaths: list = []
        rain: list = []
        bus.subscribe(AntDiedEvent, deaths.append)
        bus.subscribe(RainEndedEvent, rain.append)

        bus.emit(_died())

        assert len(deaths) == 1
        assert rain == []

    def test_global_handlers_run_after_typed_handlers(self) -> None:
        bus = EventBus()
        order: list = []
        bus.subscribe_all(lambda event: order.append("all"))
        bus.subscribe(AntDiedEvent, lambda event: order.append("typed"))

        bus.emit(_died())

        assert order == ["typed", "all"]
        assert bus.has_subscribers(RainEndedEvent)

    def test_unsubscribe(self) -> None:
        bus = EventBus()
        received: list = []
        bus.subscribe(AntDiedEvent, received.append)

        assert bus.unsubscribe(AntDiedEvent, received.append)
        assert not bus.unsubscribe(AntDiedEvent, received.append)
        bus.emit(_died())
        assert received == []

    def test_clear_subscribers(self) -> None:
        bus = EventBus()
        bus.subscribe(AntDiedEvent, lambda event: None)
        bus.subscribe_all(lambda event: None)
        bus.clear_subscribers()
        assert not bus.has_subscribers(AntDiedEvent)

    def test_history_is_recorded_and_capped(self) -> None:
        bus = EventBus(record_history=True, max_history=3)
        for ant_id in range(5):
            bus.emit(_died(ant_id))
        bus.emit(RainEndedEvent(elapsed_ms=1.0))

        assert [event.ant_id for event in bus.events_of_type(AntDiedEvent)] == [3, 4]
        assert len(bus.history) == 3

        bus.clear_history()
        assert bus.history == []

    def test_history_off_by_default(self) -> None:
        bus = EventBus()
        bus.emit(_died())
        assert bus.history == []

    def test_bus_is_an_event_sink(self) -> None:
        assert isinstance(EventBus(), EventSink)

    def test_events_are_immutable(self) -> None:
        event = AntSpawnedEvent(ant_id=1, role="nurse", x=0.0, y=0.0, from_brood=True, elapsed_ms=0.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.ant_id = 2
