# domain/case.py
"""
Case domain model
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from domain.determination import DecisionMethod, Determination


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CaseStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


@dataclass
class Case:
    """
    Case aggregate. ``current_step`` is the only field the process runtime
    mutates; it is ``None`` until the process starts.
    """
    id: str
    case_type: str = ""
    application_form_id: Optional[str] = None
    current_step: Optional[str] = None
    status: CaseStatus = CaseStatus.OPEN
    facts: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    determinations: List[Determination] = field(default_factory=list)

    @property
    def is_closed(self) -> bool:
        return self.status == CaseStatus.CLOSED

    def move_to(self, step_name: str) -> None:
        self.current_step = step_name
        self.updated_at = _utcnow()

    def close(self) -> None:
        self.status = CaseStatus.CLOSED
        self.updated_at = _utcnow()

    def record_determination(
        self,
        decision_method: DecisionMethod,
        reason: str,
        outcome: str,
        determination_data: Mapping[str, Any],
        determined_at: Optional[datetime] = None,
        determined_by_id: Optional[str] = None,
    ) -> Determination:
        determination = Determination(
            decision_method=decision_method,
            reason=reason,
            outcome=outcome,
            determination_data=determination_data,
            determined_at=determined_at or _utcnow(),
            determined_by_id=determined_by_id,
        )
        self.determinations.append(determination)
        self.updated_at = _utcnow()
        return determination

    def latest_determination(self) -> Optional[Determination]:
        if not self.determinations:
            return None
        return max(self.determinations, key=lambda d: d.determined_at)
