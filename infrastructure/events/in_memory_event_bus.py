# infrastructure/events/in_memory_event_bus.py
from __future__ import annotations

from threading import Lock
from typing import Any, Dict, List, Mapping, Optional, Tuple
from uuid import uuid4

from application.ports.event_bus import EventBusPort, EventCallback, Subscription
from application.ports.logger import LoggerPort, NullLogger
from domain.events import Event


class InMemoryEventBus(EventBusPort):
    """
    Synchronous in-process bus. Callbacks run on the publisher's thread in
    subscription order; exceptions propagate to the publisher.
    """

    def __init__(self, logger: Optional[LoggerPort] = None) -> None:
        self._subscribers: Dict[str, List[Tuple[Subscription, EventCallback]]] = {}
        self._lock = Lock()
        self._logger = logger or NullLogger()

    def subscribe(self, event_name: str, callback: EventCallback) -> Subscription:
        subscription = Subscription(id=uuid4().hex, event_name=event_name)
        with self._lock:
            self._subscribers.setdefault(event_name, []).append((subscription, callback))
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            entries = self._subscribers.get(subscription.event_name, [])
            remaining = [(sub, cb) for sub, cb in entries if sub.id != subscription.id]
            if remaining:
                self._subscribers[subscription.event_name] = remaining
            else:
                self._subscribers.pop(subscription.event_name, None)

    def subscriber_count(self, event_name: str) -> int:
        with self._lock:
            return len(self._subscribers.get(event_name, []))

    def publish(self, event_name: str, payload: Optional[Mapping[str, Any]] = None) -> None:
        event = Event.from_payload(event_name, payload)
        self.publish_event(event)

    def publish_event(self, event: Event) -> None:
        with self._lock:
            callbacks = [cb for _, cb in self._subscribers.get(event.name, [])]

        self._logger.debug("event.publish", event_name=event.name, subscribers=len(callbacks))
        for callback in callbacks:
            callback(event)
