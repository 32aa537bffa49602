# infrastructure/definitions/base_loader.py
"""
Build process definitions and form flows from YAML/JSON documents.

Process document:

    kind: process
    name: passport
    case_type: PassportCase
    start: submit_application
    steps:
      - {name: submit_application, kind: applicant_task, title: Submit application}
      - {name: review, kind: staff_task, title: Review, task_type: ReviewTask}
      - {name: verify, kind: system_process, title: Verify, action: "pkg.mod:verify"}
    transitions:
      - {from: submit_application, event: ApplicationSubmitted, to: review}
      - {from: review, event: ReviewTaskCompleted, to: end}
    start_events:
      - {event: ApplicationCreated}

Flow document:

    kind: flow
    name: paid_leave
    end_page: review
    tasks:
      - name: personal_information
        pages:
          - {name: name, fields: [first_name, last_name]}
          - {name: date_of_birth, needed_if: "pkg.mod:is_adult"}
"""
from __future__ import annotations

import importlib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from application.flows.builder import ApplicationFormFlowBuilder
from application.ports.task_creator import TaskCreatorPort
from application.process.builder import BusinessProcessBuilder
from application.process.case_factory import CaseFromEvent
from domain.business_process import BusinessProcessDefinition
from domain.exceptions import ConfigurationError
from domain.flows.application_form_flow import ApplicationFormFlow
from domain.steps import ApplicantTask, StaffTask, Step, StepKind, SystemProcess, ThirdPartyTask

Definition = Union[BusinessProcessDefinition, ApplicationFormFlow]
TaskCreatorFactory = Callable[[str], TaskCreatorPort]


class DefinitionLoadError(Exception):
    pass


def resolve_callable(path: str) -> Callable[..., Any]:
    """``package.module:function`` -> the function"""
    module_name, _, attr = path.partition(":")
    if not module_name or not attr:
        raise DefinitionLoadError(f"Callable must look like 'module:function': {path}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise DefinitionLoadError(f"Cannot import {module_name}: {exc}") from exc

    target = getattr(module, attr, None)
    if not callable(target):
        raise DefinitionLoadError(f"{path} is not callable")
    return target


class DefinitionLoaderBase(ABC):
    def __init__(self, task_creator_factory: Optional[TaskCreatorFactory] = None):
        self._task_creator_factory = task_creator_factory

    @abstractmethod
    def _load_file(self, path: Path) -> Any:
        ...

    def load_from_file(self, path: Union[str, Path]) -> Definition:
        p = Path(path)
        if not p.exists():
            raise DefinitionLoadError(f"Definition file not found: {path}")

        data = self._load_file(p)

        if data is None:
            raise DefinitionLoadError(f"Definition file is empty: {path}")

        if not isinstance(data, dict):
            raise DefinitionLoadError(f"Definition file is invalid: {path}")

        return self.load_from_dict(data)

    def load_from_dict(self, data: Dict[str, Any]) -> Definition:
        kind = data.get("kind", "process")
        try:
            if kind == "process":
                return self._load_process(data)
            if kind == "flow":
                return self._load_flow(data)
        except ConfigurationError as exc:
            raise DefinitionLoadError(str(exc)) from exc
        raise DefinitionLoadError(f"Unknown definition kind: {kind}")

    def _load_process(self, data: Dict[str, Any]) -> BusinessProcessDefinition:
        name = self._require(data, "name")
        case_type = data.get("case_type", "Case")
        builder = BusinessProcessBuilder(name, case_type)

        for step_data in data.get("steps", []):
            step_name = self._require(step_data, "name")
            builder.step(step_name, self._load_step(step_data))

        if data.get("start"):
            builder.start(data["start"])

        for transition in data.get("transitions", []):
            builder.transition(
                self._require(transition, "from"),
                self._require(transition, "event"),
                self._require(transition, "to"),
            )

        for start_event in data.get("start_events", []):
            handler = CaseFromEvent(case_type)
            if start_event.get("handler"):
                handler = resolve_callable(start_event["handler"])
            builder.start_on(self._require(start_event, "event"), handler)

        return builder.build()

    def _load_step(self, data: Dict[str, Any]) -> Step:
        """Build the step variant named by ``kind``."""
        raw_kind = str(data.get("kind", "")).lower()
        title = data.get("title") or data["name"]
        kinds = {kind.snake_name: kind for kind in StepKind}
        kind = kinds.get(raw_kind)

        if kind == StepKind.APPLICANT_TASK:
            return ApplicantTask(title)
        if kind == StepKind.THIRD_PARTY_TASK:
            return ThirdPartyTask(title)
        if kind == StepKind.SYSTEM_PROCESS:
            return SystemProcess(title, action=resolve_callable(self._require(data, "action")))
        if kind == StepKind.STAFF_TASK:
            if self._task_creator_factory is None:
                raise DefinitionLoadError(f"Staff task '{data['name']}' needs a task creator")
            task_type = data.get("task_type", "StaffTask")
            return StaffTask(title, task_creator=self._task_creator_factory(task_type))

        raise DefinitionLoadError(f"Unknown step kind for '{data['name']}': {raw_kind}")

    def _load_flow(self, data: Dict[str, Any]) -> ApplicationFormFlow:
        builder = ApplicationFormFlowBuilder(self._require(data, "name"))

        for task_data in data.get("tasks", []):
            with builder.task(self._require(task_data, "name")) as task:
                for page in self._load_pages(task_data.get("pages", [])):
                    task.question_page(**page)

        if data.get("start_page"):
            builder.start_page(data["start_page"])
        if data.get("end_page"):
            builder.end_page(data["end_page"])

        return builder.build()

    def _load_pages(self, pages_data: List[Any]) -> List[Dict[str, Any]]:
        pages: List[Dict[str, Any]] = []
        for page_data in pages_data:
            # a bare string is a page whose only field is its name
            if isinstance(page_data, str):
                pages.append({"name": page_data})
                continue
            page: Dict[str, Any] = {
                "name": self._require(page_data, "name"),
                "fields": page_data.get("fields"),
            }
            if page_data.get("needed_if"):
                page["needed_if"] = resolve_callable(page_data["needed_if"])
            pages.append(page)
        return pages

    def _require(self, data: Dict[str, Any], key: str) -> Any:
        value = data.get(key)
        if value in (None, ""):
            raise DefinitionLoadError(f"Missing required key '{key}' in {data}")
        return value
