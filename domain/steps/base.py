# domain/steps/base.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class StepKind(str, Enum):
    APPLICANT_TASK = "ApplicantTask"
    STAFF_TASK = "StaffTask"
    SYSTEM_PROCESS = "SystemProcess"
    THIRD_PARTY_TASK = "ThirdPartyTask"

    @property
    def snake_name(self) -> str:
        # ApplicantTask -> applicant_task
        return self.name.lower()


@dataclass(frozen=True)
class Step:
    name: str

    kind: ClassVar[StepKind]
