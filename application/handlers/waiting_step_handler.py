# application/handlers/waiting_step_handler.py
from __future__ import annotations

from application.handlers.base import StepHandler
from application.outcome import StepOutcome
from domain.steps.applicant_task import ApplicantTask
from domain.steps.base import Step
from domain.steps.third_party_task import ThirdPartyTask


class WaitingStepHandler(StepHandler):
    """
    Applicant and third-party steps have no entry action: the case simply
    waits at the step until an event moves it on.
    """

    def supports(self, step: Step) -> bool:
        return isinstance(step, (ApplicantTask, ThirdPartyTask))

    def handle(self, step, case, logger) -> StepOutcome:
        logger.debug("step.waiting", case_id=case.id, step_kind=step.kind.value)
        return StepOutcome(ok=True)
