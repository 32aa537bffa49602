# application/process/case_factory.py
from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4

from domain.case import Case
from domain.events import CaseRefKind, Event


@dataclass(frozen=True)
class CaseFromEvent:
    """
    Start-event handler creating a fresh case. When the event targets an
    application form, the new case is linked to it; the payload is kept as
    the case's initial facts.
    """
    case_type: str

    def __call__(self, event: Event) -> Case:
        application_form_id = None
        if event.target is not None and event.target.kind == CaseRefKind.APPLICATION_FORM_ID:
            application_form_id = event.target.value

        facts = {k: v for k, v in event.payload.items() if k not in ("case_id", "application_form_id")}
        return Case(
            id=uuid4().hex,
            case_type=self.case_type,
            application_form_id=application_form_id,
            facts=facts,
        )
