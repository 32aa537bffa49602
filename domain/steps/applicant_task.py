# domain/steps/applicant_task.py
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from domain.steps.base import Step, StepKind


@dataclass(frozen=True)
class ApplicantTask(Step):
    """Work done by the applicant; the case waits for an event."""

    kind: ClassVar[StepKind] = StepKind.APPLICANT_TASK
