# domain/steps/system_process.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, ClassVar

from domain.steps.base import Step, StepKind

if TYPE_CHECKING:
    from domain.case import Case


@dataclass(frozen=True)
class SystemProcess(Step):
    """Automated step; entering it runs ``action(case)`` immediately."""

    action: Callable[["Case"], None] = field(compare=False)

    kind: ClassVar[StepKind] = StepKind.SYSTEM_PROCESS
