# domain/steps/third_party_task.py
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from domain.steps.base import Step, StepKind


@dataclass(frozen=True)
class ThirdPartyTask(Step):
    """Work done outside the agency; the case waits for an event."""

    kind: ClassVar[StepKind] = StepKind.THIRD_PARTY_TASK
