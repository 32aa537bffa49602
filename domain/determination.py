# domain/determination.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional
from uuid import uuid4

from domain.exceptions import ValidationError


class DecisionMethod(str, Enum):
    ATTESTATION = "attestation"
    AUTOMATED = "automated"
    STAFF_REVIEW = "staff_review"


@dataclass(frozen=True)
class Determination:
    """
    A decision recorded against a case.

    Automated determinations have no ``determined_by_id``; staff reviews and
    attestations carry the id of the person who made them.
    """
    decision_method: DecisionMethod
    reason: str
    outcome: str
    determination_data: Mapping[str, Any]
    determined_at: datetime
    determined_by_id: Optional[str] = None
    id: str = field(default_factory=lambda: uuid4().hex)

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "decision_method", DecisionMethod(self.decision_method))
        except ValueError:
            raise ValidationError(f"Unknown decision method: {self.decision_method}")
        if not self.reason:
            raise ValidationError("Determination reason must not be empty")
        if not self.outcome:
            raise ValidationError("Determination outcome must not be empty")
        if self.determination_data is None:
            raise ValidationError("Determination data is required")
        if self.determined_at is None:
            raise ValidationError("Determination time is required")
