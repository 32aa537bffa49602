# application/process/step_labels.py
from __future__ import annotations

from typing import Dict, Mapping, Optional

from domain.business_process import BusinessProcessDefinition
from domain.steps.base import StepKind


STEP_KIND_LABELS: Dict[StepKind, str] = {
    StepKind.APPLICANT_TASK: "Applicant: {step_name}",
    StepKind.STAFF_TASK: "Staff: {step_name}",
    StepKind.SYSTEM_PROCESS: "System: {step_name}",
    StepKind.THIRD_PARTY_TASK: "Third Party: {step_name}",
}


def humanize(name: str) -> str:
    """collect_info -> Collect info"""
    text = name.replace("_", " ").strip()
    return text[:1].upper() + text[1:]


def describe_step(
    definition: BusinessProcessDefinition,
    step_name: Optional[str],
    overrides: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Display text for the step a case is at.

    An explicit override for the step name wins; otherwise the label falls
    back to the step kind, e.g. ``Staff: Collect info``.
    """
    if step_name is None:
        return ""

    if overrides and step_name in overrides:
        return overrides[step_name]

    step = definition.get_step(step_name)
    if step is None:
        return humanize(step_name)

    return STEP_KIND_LABELS[step.kind].format(step_name=humanize(step_name))
