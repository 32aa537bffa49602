# application/ports/task_creator.py
from __future__ import annotations

from typing import Any, Protocol

from domain.case import Case


class TaskCreatorPort(Protocol):
    def create_task(self, case: Case) -> Any:
        ...
