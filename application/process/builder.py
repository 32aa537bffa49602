# application/process/builder.py
from __future__ import annotations

from typing import Dict, Optional

from domain.business_process import END, BusinessProcessDefinition, StartHandler
from domain.exceptions import ConfigurationError
from domain.steps.base import Step


class BusinessProcessBuilder:
    """
    Accumulates steps, transitions and start events, then produces an
    immutable BusinessProcessDefinition.

        builder = BusinessProcessBuilder("my_process", "MyCase")
        builder.step("collect_info", StaffTask("Collect Information", task_service))
        builder.step("process_data", SystemProcess("Process Data", process))
        builder.start("collect_info")
        builder.transition("collect_info", "form_submitted", "process_data")
        builder.transition("process_data", "processing_complete", END)
        definition = builder.build()
    """

    def __init__(self, name: str, case_type: str):
        self.name = name
        self.case_type = case_type
        self._steps: Dict[str, Step] = {}
        self._start_step: Optional[str] = None
        self._transitions: Dict[str, Dict[str, str]] = {}
        self._start_events: Dict[str, StartHandler] = {}

    def step(self, name: str, step: Step) -> "BusinessProcessBuilder":
        self._steps[name] = step
        return self

    def start(self, name: str) -> "BusinessProcessBuilder":
        self._start_step = name
        return self

    def transition(self, from_step: str, event_name: str, to_step: str) -> "BusinessProcessBuilder":
        self._transitions.setdefault(from_step, {})[event_name] = to_step
        return self

    def start_on(self, event_name: str, handler: StartHandler) -> "BusinessProcessBuilder":
        self._start_events[event_name] = handler
        return self

    def build(self) -> BusinessProcessDefinition:
        self._check_references()
        return BusinessProcessDefinition(
            name=self.name,
            case_type=self.case_type,
            steps=self._steps,
            start_step=self._start_step,
            transitions=self._transitions,
            start_events=self._start_events,
        )

    def _check_references(self) -> None:
        if self._start_step is not None and self._start_step not in self._steps:
            raise ConfigurationError(
                f"Start step '{self._start_step}' is not a step of process {self.name}"
            )
        if self._start_events and self._start_step is None:
            raise ConfigurationError(f"Process {self.name} has start events but no start step")

        for from_step, events in self._transitions.items():
            if from_step not in self._steps:
                raise ConfigurationError(
                    f"Transition from unknown step '{from_step}' in process {self.name}"
                )
            for event_name, to_step in events.items():
                if to_step != END and to_step not in self._steps:
                    raise ConfigurationError(
                        f"Transition '{from_step}' --{event_name}--> unknown step '{to_step}' in process {self.name}"
                    )
