# application/ports/event_bus.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from domain.events import Event

EventCallback = Callable[[Event], None]


@dataclass(frozen=True)
class Subscription:
    id: str
    event_name: str


class EventBusPort(ABC):
    @abstractmethod
    def subscribe(self, event_name: str, callback: EventCallback) -> Subscription:
        ...

    @abstractmethod
    def unsubscribe(self, subscription: Subscription) -> None:
        ...

    @abstractmethod
    def publish(self, event_name: str, payload: Optional[Mapping[str, Any]] = None) -> None:
        """
        Deliver the event to every callback subscribed to ``event_name``.
        """
        ...
