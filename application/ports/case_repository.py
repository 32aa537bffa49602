# application/ports/case_repository.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from domain.case import Case
from domain.events import Event


class CaseRepositoryPort(ABC):
    """
    Persistence for cases. Implementations serialize writes to a single case;
    the process runtime does a plain read-modify-write on ``current_step``.
    """

    @abstractmethod
    def save(self, case: Case) -> None:
        ...

    @abstractmethod
    def get(self, case_id: str) -> Optional[Case]:
        ...

    @abstractmethod
    def for_event(self, event: Event, case_type: Optional[str] = None) -> List[Case]:
        """
        Open cases the event applies to, resolved from ``event.target`` and
        limited to ``case_type`` when given.
        """
        ...

    @abstractmethod
    def list(self) -> List[Case]:
        ...
