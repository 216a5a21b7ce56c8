"""Synchronous event bus for simulation events.

The engine reports spawns, deaths, depletions and world events through an
``EventSink``. ``EventBus`` is the default sink: a lightweight,
synchronous pub/sub that hosts (renderers, stats collectors, tests)
subscribe to by event type.

Design goals:
- Zero overhead when no subscribers (single dict lookup)
- Synchronous, so handlers observe the world in a consistent state
- Type-safe dispatch via event type
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class EventSink(Protocol):
    """Anything that can receive simulation events."""

    def emit(self, event: object) -> None: ...


class EventBus:
    """Synchronous event bus for domain events.

    Example:
        bus = EventBus()
        bus.subscribe(AntDiedEvent, handle_death)
        bus.emit(AntDiedEvent(ant_id=42, role="worker", cause="starvation", x=0, y=0, elapsed_ms=100))
    """

    def __init__(self, record_history: bool = False, max_history: int = 1000) -> None:
        self._handlers: dict[type, list[Callable]] = defaultdict(list)
        self._global_handlers: list[Callable[[object], None]] = []
        self._record_history = record_history
        self._max_history = max_history
        self._history: list[object] = []

    def emit(self, event: object) -> None:
        """Emit an event to all registered handlers.

        Handlers are called synchronously in registration order. Handlers
        subscribed to every event run after the type-specific ones.
        """
        if self._record_history:
            self._history.append(event)
            if len(self._history) > self._max_history:
                del self._history[: len(self._history) - self._max_history]

        handlers = self._handlers.get(type(event))
        if handlers:
            for handler in handlers:
                handler(event)
        for handler in self._global_handlers:
            handler(event)

    def subscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        """Register a handler for a specific event type."""
        self._handlers[event_type].append(handler)

    def subscribe_all(self, handler: Callable[[object], None]) -> None:
        """Register a handler that receives every event."""
        self._global_handlers.append(handler)

    def unsubscribe(self, event_type: type[T], handler: Callable[[T], None]) -> bool:
        """Remove a handler for a specific event type.

        Returns:
            True if handler was found and removed, False otherwise
        """
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def clear_subscribers(self) -> None:
        """Remove all registered handlers."""
        self._handlers.clear()
        self._global_handlers.clear()

    def has_subscribers(self, event_type: type) -> bool:
        return bool(self._handlers.get(event_type)) or bool(self._global_handlers)

    def subscriber_count(self, event_type: type) -> int:
        return len(self._handlers.get(event_type, []))

    @property
    def history(self) -> list[object]:
        """Events emitted so far (empty unless ``record_history`` is set)."""
        return list(self._history)

    def events_of_type(self, event_type: type[T]) -> list[T]:
        """Recorded events of one type, oldest first."""
        return [event for event in self._history if isinstance(event, event_type)]

    def clear_history(self) -> None:
        self._history.clear()
