# application/handlers/system_process_handler.py
from __future__ import annotations

from application.handlers.base import StepHandler
from application.outcome import StepOutcome
from domain.steps.base import Step
from domain.steps.system_process import SystemProcess


class SystemProcessHandler(StepHandler):
    def supports(self, step: Step) -> bool:
        return isinstance(step, SystemProcess)

    def handle(self, step, case, logger) -> StepOutcome:
        # errors raised by the action propagate to the event publisher
        result = step.action(case)
        if result is False:
            return StepOutcome(ok=False, error_message=f"System process reported failure: {step.name}")
        return StepOutcome(ok=True, detail=result)
