"""Synchronous event bus that publishes class and object lifecycle steps."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, DefaultDict

__all__ = [
    "Event",
    "EventHandler",
    "EventBus",
    "STANDARD_EVENTS",
    "CLASS_DEFINED",
    "CLASS_DESTROYED",
    "OBJECT_CREATED",
    "OBJECT_RENAMED",
    "OBJECT_DESTROYED",
]

CLASS_DEFINED = "class.defined"
CLASS_DESTROYED = "class.destroyed"
OBJECT_CREATED = "object.created"
OBJECT_RENAMED = "object.renamed"
OBJECT_DESTROYED = "object.destroyed"

STANDARD_EVENTS = (
    CLASS_DEFINED,
    CLASS_DESTROYED,
    OBJECT_CREATED,
    OBJECT_RENAMED,
    OBJECT_DESTROYED,
)


@dataclass(frozen=True)
class Event:
    """A lifecycle notification; emitted after the state change is complete."""

    name: str
    payload: dict[str, Any]


EventHandler = Callable[[Event], None]


@dataclass(frozen=True)
class _Subscription:
    priority: int
    order: int
    handler: EventHandler


class EventBus:
    """Delivers events in priority order, then subscription order.

    Handler exceptions propagate to whoever triggered the event.
    """

    def __init__(self) -> None:
        self._subscriptions: DefaultDict[str, list[_Subscription]] = defaultdict(list)
        self._counter = 0

    def on(self, event_name: str, handler: EventHandler, priority: int = 0) -> None:
        self._counter += 1
        self._subscriptions[event_name].append(
            _Subscription(priority=priority, order=self._counter, handler=handler)
        )

    def subscribe(self, handler: EventHandler, *event_names: str, priority: int = 0) -> None:
        """Attach ``handler`` to several events; all standard ones by default."""

        for event_name in event_names or STANDARD_EVENTS:
            self.on(event_name, handler, priority)

    def off(self, event_name: str, handler: EventHandler) -> bool:
        subscriptions = self._subscriptions.get(event_name, [])
        kept = [item for item in subscriptions if item.handler is not handler]
        removed = len(kept) != len(subscriptions)
        self._subscriptions[event_name] = kept
        return removed

    def emit(self, event_name: str, payload: dict[str, Any]) -> Event:
        event = Event(event_name, dict(payload))
        ordered = sorted(
            self._subscriptions.get(event_name, ()),
            key=lambda item: (-item.priority, item.order),
        )
        for subscription in ordered:
            subscription.handler(event)
        return event
