# domain/steps/staff_task.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from domain.steps.base import Step, StepKind

if TYPE_CHECKING:
    from application.ports.task_creator import TaskCreatorPort


@dataclass(frozen=True)
class StaffTask(Step):
    """
    Human work item. Entering the step asks the task creator to queue
    a work item for the case.
    """

    task_creator: "TaskCreatorPort" = field(compare=False)

    kind: ClassVar[StepKind] = StepKind.STAFF_TASK
