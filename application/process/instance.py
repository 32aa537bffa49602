# application/process/instance.py
from __future__ import annotations

from typing import Optional

from application.executor.step_runner import StepRunner
from application.ports.case_repository import CaseRepositoryPort
from application.ports.logger import LoggerPort, NullLogger
from domain.business_process import END, BusinessProcessDefinition
from domain.case import Case
from domain.events import Event
from domain.exceptions import ConfigurationError


class BusinessProcessInstance:
    """
    A single case seen through its process definition.

    Transitions are a plain read-modify-write of ``case.current_step``
    followed by ``cases.save``; preventing lost updates when two events hit
    the same case concurrently is left to the repository.
    """

    def __init__(
        self,
        definition: BusinessProcessDefinition,
        case: Case,
        cases: CaseRepositoryPort,
        step_runner: Optional[StepRunner] = None,
        logger: Optional[LoggerPort] = None,
    ):
        self.definition = definition
        self.case = case
        self._cases = cases
        self._step_runner = step_runner or StepRunner()
        self._logger = (logger or NullLogger()).bind(process=definition.name, case_id=case.id)

    @property
    def current_step(self) -> Optional[str]:
        return self.case.current_step

    def start_from_event(self, event: Event) -> None:
        start_step = self.definition.start_step
        if start_step is None:
            raise ConfigurationError(f"Process {self.definition.name} has no start step")

        self._logger.info("case.start", step=start_step, event_name=event.name)
        self._enter(start_step)

    def transition_to_next_step(self, event: Event) -> bool:
        """
        Move the case along the transition for (current step, event).
        Returns False when the case did not move.
        """
        if self.case.is_closed:
            self._logger.debug("transition.skipped_closed", event_name=event.name)
            return False

        from_step = self.case.current_step
        to_step = self.definition.next_step(from_step, event.name)
        if to_step is None:
            self._logger.debug("transition.not_found", step=from_step, event_name=event.name)
            return False

        if to_step == END:
            self.case.close()
            self._cases.save(self.case)
            self._logger.info("case.closed", from_step=from_step, event_name=event.name)
            return True

        self._logger.info("transition", from_step=from_step, to_step=to_step, event_name=event.name)
        self._enter(to_step)
        return True

    def _enter(self, step_name: str) -> None:
        step = self.definition.get_step(step_name)
        if step is None:
            raise ConfigurationError(
                f"Step '{step_name}' is not registered in process {self.definition.name}"
            )

        self.case.move_to(step_name)
        # save before the entry action so that events it publishes see the new step
        self._cases.save(self.case)
        self._step_runner.enter(step_name, step, self.case, self._logger)
