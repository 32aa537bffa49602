# application/process/diagram.py
"""
Mermaid flowchart export for process definitions and form flows.
"""
from __future__ import annotations

from typing import Any, Dict, List

from domain.business_process import END, BusinessProcessDefinition
from domain.flows.application_form_flow import ApplicationFormFlow
from domain.steps.base import StepKind


STEP_KIND_STYLES: Dict[StepKind, str] = {
    StepKind.APPLICANT_TASK: "fill:#90EE90,stroke:#333,stroke-width:2px;",
    StepKind.STAFF_TASK: "fill:#ffb366,stroke:#333,stroke-width:2px;",
    StepKind.SYSTEM_PROCESS: "fill:#a0d8ef,stroke:#333,stroke-width:2px;",
    StepKind.THIRD_PARTY_TASK: "fill:#c0c0ff,stroke:#333,stroke-width:2px;",
}


def _node_name(name: str) -> str:
    return name.replace(" ", "_")


def process_to_mermaid(definition: BusinessProcessDefinition) -> str:
    lines: List[str] = ["flowchart TD"]

    for name, step in definition.steps.items():
        lines.append(f"  {_node_name(name)}:::{step.kind.value}")

    lines.append("  END((End))")

    for from_step, events in definition.transitions.items():
        for event_name, to_step in events.items():
            # mermaid breaks on a node literally named "end"
            target = "END" if to_step == END else _node_name(to_step)
            lines.append(f"  {_node_name(from_step)} -->|{event_name}| {target}")

    lines.extend(f"classDef {kind.value} {style}" for kind, style in STEP_KIND_STYLES.items())
    return "\n".join(lines)


def _field_labels(field: Any) -> List[str]:
    if isinstance(field, dict):
        labels = []
        for key, nested in field.items():
            if nested:
                inner = "<br>".join(str(item) for item in nested)
                labels.append(
                    '<div style="border: 1px solid black; padding: 4px 8px">'
                    f'<i style="text-decoration: underline">{key}</i><br>{inner}</div>'
                )
            else:
                labels.append(str(key))
        return labels
    return [str(field)]


def flow_to_mermaid(flow: ApplicationFormFlow) -> str:
    lines: List[str] = ["flowchart TD"]

    for task in flow.tasks:
        for page in task.pages:
            fields = [label for field in page.fields for label in _field_labels(field)]
            node_text = "<br>".join([f"<b>{page.name}</b>", *fields])
            lines.append(f"  {page.name}[{node_text}]")

        lines.append(f"  subgraph t_{task.name}[Task: {task.name}]")
        if len(task.pages) == 1:
            lines.append(f"    {task.pages[0].name}")
        for a, b in zip(task.pages, task.pages[1:]):
            lines.append(f"    {a.name} --> {b.name}")
        lines.append("  end")

    for a, b in zip(flow.tasks, flow.tasks[1:]):
        lines.append(f"t_{a.name} --> t_{b.name}")

    return "\n".join(lines)
