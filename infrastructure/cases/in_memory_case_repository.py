# infrastructure/cases/in_memory_case_repository.py
from __future__ import annotations

from threading import RLock
from typing import Dict, List, Optional

from application.ports.case_repository import CaseRepositoryPort
from domain.case import Case
from domain.events import CaseRefKind, Event


class InMemoryCaseRepository(CaseRepositoryPort):
    def __init__(self) -> None:
        self._cases: Dict[str, Case] = {}
        self._lock = RLock()

    def save(self, case: Case) -> None:
        with self._lock:
            self._cases[case.id] = case

    def get(self, case_id: str) -> Optional[Case]:
        with self._lock:
            return self._cases.get(case_id)

    def for_event(self, event: Event, case_type: Optional[str] = None) -> List[Case]:
        target = event.target
        if target is None:
            return []

        with self._lock:
            if target.kind == CaseRefKind.CASE_ID:
                case = self._cases.get(target.value)
                candidates = [case] if case is not None else []
            else:
                candidates = [
                    case for case in self._cases.values()
                    if case.application_form_id == target.value
                ]
        return [
            case for case in candidates
            if not case.is_closed and (case_type is None or case.case_type == case_type)
        ]

    def list(self) -> List[Case]:
        with self._lock:
            return list(self._cases.values())
