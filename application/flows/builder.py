# application/flows/builder.py
from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence

from application.ports.flow_record import FlowRecord
from domain.exceptions import ConfigurationError
from domain.flows.application_form_flow import ApplicationFormFlow
from domain.flows.question_page import QuestionPage
from domain.flows.task import FlowTask


class TaskBuilder:
    """
    Collects the question pages of one task. Obtained from
    ``ApplicationFormFlowBuilder.task`` and usable as a context manager:

        with flow.task("personal_information") as task:
            task.question_page("name", fields=["first_name", "last_name"])
            task.question_page("date_of_birth")
    """

    def __init__(self, name: str, on_page: Callable[[str], None]):
        self.name = name
        self._pages: List[QuestionPage] = []
        self._on_page = on_page
        self._closed = False

    def question_page(
        self,
        name: str,
        fields: Optional[Sequence[Any]] = None,
        needed_if: Optional[Callable[[FlowRecord], bool]] = None,
    ) -> "TaskBuilder":
        if self._closed:
            raise ConfigurationError(
                f"Question page '{name}' added after task '{self.name}' was closed"
            )
        self._pages.append(QuestionPage(name, fields=tuple(fields or ()), needed_if=needed_if))
        self._on_page(name)
        return self

    def close(self) -> None:
        self._closed = True

    def build(self) -> FlowTask:
        return FlowTask(self.name, tuple(self._pages))

    def __enter__(self) -> "TaskBuilder":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class ApplicationFormFlowBuilder:
    """
    Builds an ApplicationFormFlow. Pages can only be added through the
    TaskBuilder returned by ``task``.
    """

    def __init__(self, name: str):
        self.name = name
        self._tasks: List[TaskBuilder] = []
        self._contexts: List[str] = []
        self._start_pathname: Optional[str] = None
        self._end_pathname: Optional[str] = None

    @property
    def contexts(self) -> List[str]:
        return list(self._contexts)

    def task(self, name: str) -> TaskBuilder:
        for task in self._tasks:
            task.close()
        task = TaskBuilder(name, self._add_context)
        self._tasks.append(task)
        return task

    def start_page(self, pathname: str) -> "ApplicationFormFlowBuilder":
        if self._start_pathname is not None:
            raise ConfigurationError("Start page cannot be configured multiple times")
        self._start_pathname = pathname
        return self

    def end_page(self, pathname: str) -> "ApplicationFormFlowBuilder":
        if self._end_pathname is not None:
            raise ConfigurationError("End page cannot be configured multiple times")
        self._end_pathname = pathname
        return self

    def build(self) -> ApplicationFormFlow:
        return ApplicationFormFlow(
            name=self.name,
            tasks=tuple(task.build() for task in self._tasks),
            start_pathname=self._start_pathname,
            end_pathname=self._end_pathname,
        )

    def _add_context(self, page_name: str) -> None:
        if page_name in self._contexts:
            raise ConfigurationError(f"Question page defined twice: {page_name}")
        self._contexts.append(page_name)
