# domain/business_process.py
"""
Business process definition
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, List, Mapping, Optional

from domain.exceptions import ConfigurationError
from domain.steps.base import Step

if TYPE_CHECKING:
    from domain.case import Case
    from domain.events import Event

END = "end"

StartHandler = Callable[["Event"], "Case"]


def _freeze(data: Mapping) -> Mapping:
    return MappingProxyType(dict(data))


@dataclass(frozen=True)
class BusinessProcessDefinition:
    """
    Step registry, transition table and start-event table of one process.

    transitions: from_step -> (event_name -> to_step). ``to_step`` may be END.
    """
    name: str
    case_type: str
    steps: Mapping[str, Step] = field(default_factory=dict)
    start_step: Optional[str] = None
    transitions: Mapping[str, Mapping[str, str]] = field(default_factory=dict)
    start_events: Mapping[str, StartHandler] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "steps", _freeze(self.steps))
        object.__setattr__(
            self,
            "transitions",
            _freeze({src: _freeze(events) for src, events in self.transitions.items()}),
        )
        object.__setattr__(self, "start_events", _freeze(self.start_events))

    def get_step(self, name: str) -> Optional[Step]:
        return self.steps.get(name)

    def next_step(self, from_step: Optional[str], event_name: str) -> Optional[str]:
        if from_step is None:
            return None
        return self.transitions.get(from_step, {}).get(event_name)

    def is_start_event(self, event_name: str) -> bool:
        return event_name in self.start_events

    def start_handler(self, event_name: str) -> StartHandler:
        handler = self.start_events.get(event_name)
        if handler is None:
            raise ConfigurationError(f"No handler defined for start event '{event_name}'")
        return handler

    def event_names(self) -> List[str]:
        names: List[str] = []
        for events in self.transitions.values():
            for event_name in events:
                if event_name not in names:
                    names.append(event_name)
        for event_name in self.start_events:
            if event_name not in names:
                names.append(event_name)
        return names
