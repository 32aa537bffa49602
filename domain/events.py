# domain/events.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from domain.exceptions import ValidationError


class CaseRefKind(str, Enum):
    CASE_ID = "case_id"
    APPLICATION_FORM_ID = "application_form_id"


@dataclass(frozen=True)
class CaseRef:
    """Identifies the case an event is about."""
    kind: CaseRefKind
    value: str

    def __post_init__(self) -> None:
        if not self.value or not str(self.value).strip():
            raise ValidationError(f"{self.kind.value} must not be empty")

    @classmethod
    def case(cls, case_id: str) -> "CaseRef":
        return cls(CaseRefKind.CASE_ID, case_id)

    @classmethod
    def application_form(cls, application_form_id: str) -> "CaseRef":
        return cls(CaseRefKind.APPLICATION_FORM_ID, application_form_id)


@dataclass(frozen=True)
class Event:
    name: str
    payload: Dict[str, Any] = field(default_factory=dict)
    target: Optional[CaseRef] = None

    @classmethod
    def from_payload(cls, name: str, payload: Optional[Mapping[str, Any]] = None) -> "Event":
        data = dict(payload or {})
        keys = [kind for kind in CaseRefKind if data.get(kind.value) is not None]
        if len(keys) > 1:
            raise ValidationError(
                f"Event {name} names both case_id and application_form_id"
            )

        target = None
        if keys:
            kind = keys[0]
            target = CaseRef(kind, str(data[kind.value]))
        return cls(name=name, payload=data, target=target)
