# application/flows/validations.py
"""
Per-page validation rules for records driven by an ApplicationFormFlow.

Each question page of a flow is a validation context; a page is complete when
the record passes every rule registered on that context.

    validations = FlowValidations(paid_leave_flow)
    validations.presence("name", on="name")
    validations.presence("date_of_birth", on="date_of_birth")

    class PaidLeaveApplication(ValidatedRecord):
        validations = validations
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, List, Optional

from domain.exceptions import ConfigurationError
from domain.flows.application_form_flow import ApplicationFormFlow

SUBMIT_CONTEXT = "submit"


@dataclass(frozen=True)
class ValidationRule:
    check: Callable[[Any], bool]
    message: str


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) > 0
    return True


class FlowValidations:
    def __init__(self, flow: ApplicationFormFlow, validate_on_submit: bool = True):
        self.flow = flow
        self.validate_on_submit = validate_on_submit
        self._rules: Dict[str, List[ValidationRule]] = {context: [] for context in flow.contexts}

    @property
    def contexts(self) -> List[str]:
        return list(self._rules)

    def rule(self, on: str, check: Callable[[Any], bool], message: str) -> "FlowValidations":
        if on not in self._rules:
            raise ConfigurationError(f"Unknown validation context for flow {self.flow.name}: {on}")
        self._rules[on].append(ValidationRule(check=check, message=message))
        return self

    def presence(self, field: str, on: str, message: Optional[str] = None) -> "FlowValidations":
        return self.rule(
            on,
            lambda record: _present(getattr(record, field, None)),
            message or f"{field} can't be blank",
        )

    def errors(self, record: Any, context: Optional[str] = None) -> List[str]:
        if context is None:
            return []

        if context == SUBMIT_CONTEXT and self.validate_on_submit:
            contexts = self.contexts
        elif context in self._rules:
            contexts = [context]
        else:
            raise ConfigurationError(f"Unknown validation context for flow {self.flow.name}: {context}")

        messages: List[str] = []
        for name in contexts:
            for rule in self._rules[name]:
                if not rule.check(record):
                    messages.append(rule.message)
        return messages

    def is_valid(self, record: Any, context: Optional[str] = None) -> bool:
        return not self.errors(record, context)


class ValidatedRecord:
    """
    Mixin for form records; subclasses set ``validations``.
    """
    validations: ClassVar[FlowValidations]

    def is_valid(self, context: Optional[str] = None) -> bool:
        return type(self).validations.is_valid(self, context)

    def errors_for(self, context: Optional[str] = None) -> List[str]:
        return type(self).validations.errors(self, context)
