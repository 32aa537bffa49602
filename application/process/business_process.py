# application/process/business_process.py
from __future__ import annotations

from threading import Lock
from typing import Callable, Dict, Mapping, Optional

from application.executor.step_runner import StepRunner
from application.ports.case_repository import CaseRepositoryPort
from application.ports.event_bus import EventBusPort, Subscription
from application.ports.logger import LoggerPort, NullLogger
from application.process.builder import BusinessProcessBuilder
from application.process.diagram import process_to_mermaid
from application.process.instance import BusinessProcessInstance
from application.process.step_labels import describe_step
from domain.business_process import BusinessProcessDefinition
from domain.case import Case
from domain.events import Event
from domain.steps.base import Step


class BusinessProcess:
    """
    Drives cases through a process definition by reacting to events.

    Each event name used by the definition gets exactly one subscription on
    the event bus. A start event creates a new case at the start step unless
    an open case of this case type is already bound to its target; any other
    event is applied to every case the repository resolves for it.

        process = BusinessProcess.define(
            "passport",
            "PassportCase",
            configure,
            event_bus=bus,
            cases=repository,
        )
        ...
        process.stop_listening_for_events()
    """

    def __init__(
        self,
        definition: BusinessProcessDefinition,
        event_bus: EventBusPort,
        cases: CaseRepositoryPort,
        step_runner: Optional[StepRunner] = None,
        logger: Optional[LoggerPort] = None,
    ):
        self.definition = definition
        self._event_bus = event_bus
        self._cases = cases
        self._step_runner = step_runner or StepRunner()
        self._logger = (logger or NullLogger()).bind(process=definition.name)
        self._lock = Lock()
        self._subscriptions: Dict[str, Subscription] = {}
        self._listening = False

    @classmethod
    def define(
        cls,
        name: str,
        case_type: str,
        configure: Callable[[BusinessProcessBuilder], None],
        *,
        event_bus: EventBusPort,
        cases: CaseRepositoryPort,
        step_runner: Optional[StepRunner] = None,
        logger: Optional[LoggerPort] = None,
    ) -> "BusinessProcess":
        builder = BusinessProcessBuilder(name, case_type)
        configure(builder)
        process = cls(
            builder.build(),
            event_bus=event_bus,
            cases=cases,
            step_runner=step_runner,
            logger=logger,
        )
        process.start_listening_for_events()
        return process

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def is_listening(self) -> bool:
        with self._lock:
            return self._listening

    @property
    def subscriptions(self) -> Mapping[str, Subscription]:
        with self._lock:
            return dict(self._subscriptions)

    def get_step(self, name: str) -> Optional[Step]:
        return self.definition.get_step(name)

    def start_listening_for_events(self) -> None:
        with self._lock:
            if self._listening:
                self._logger.debug("process.already_listening")
                return

            for event_name in self.definition.event_names():
                self._logger.debug("process.subscribe", event_name=event_name)
                self._subscriptions[event_name] = self._event_bus.subscribe(event_name, self.handle_event)

            self._listening = True

    def stop_listening_for_events(self) -> None:
        with self._lock:
            self._logger.debug("process.stop_listening")
            for event_name, subscription in self._subscriptions.items():
                self._logger.debug("process.unsubscribe", event_name=event_name)
                self._event_bus.unsubscribe(subscription)
            self._subscriptions.clear()
            self._listening = False

    def handle_event(self, event: Event) -> None:
        self._logger.debug("process.handle_event", event_name=event.name, payload=event.payload)

        bound = self._cases.for_event(event, case_type=self.definition.case_type)

        if self.definition.is_start_event(event.name) and not bound:
            case = self.create_case_from_event(event)
            self.instance_for(case).start_from_event(event)
            return

        for case in bound:
            self.instance_for(case).transition_to_next_step(event)

    def create_case_from_event(self, event: Event) -> Case:
        handler = self.definition.start_handler(event.name)
        self._logger.debug("case.create_from_event", event_name=event.name)
        case = handler(event)
        if not case.case_type:
            case.case_type = self.definition.case_type
        # save errors propagate and abort the event
        self._cases.save(case)
        return case

    def instance_for(self, case: Case) -> BusinessProcessInstance:
        return BusinessProcessInstance(
            self.definition,
            case,
            self._cases,
            step_runner=self._step_runner,
            logger=self._logger,
        )

    def describe_step(self, step_name: str, overrides: Optional[Mapping[str, str]] = None) -> str:
        return describe_step(self.definition, step_name, overrides)

    def to_diagram(self) -> str:
        return process_to_mermaid(self.definition)
