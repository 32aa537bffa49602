# application/handlers/staff_task_handler.py
from __future__ import annotations

from application.handlers.base import StepHandler
from application.outcome import StepOutcome
from domain.steps.base import Step
from domain.steps.staff_task import StaffTask


class StaffTaskHandler(StepHandler):
    def supports(self, step: Step) -> bool:
        return isinstance(step, StaffTask)

    def handle(self, step, case, logger) -> StepOutcome:
        created = step.task_creator.create_task(case)
        logger.info("staff_task.created", case_id=case.id, task=getattr(created, "id", created))
        return StepOutcome(ok=True, detail=created)
