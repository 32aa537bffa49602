# application/flows/progress.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from application.flows.task_evaluator import TaskEvaluator
from application.ports.flow_record import FlowRecord
from application.ports.route_resolver import RouteResolverPort
from domain.flows.application_form_flow import ApplicationFormFlow
from domain.flows.task import FlowTask


@dataclass(frozen=True)
class TaskStatus:
    name: str
    number: int
    started: bool
    completed: bool
    path: Optional[str]


class FlowProgress:
    """A flow evaluated against one record."""

    def __init__(self, flow: ApplicationFormFlow, record: FlowRecord, routes: RouteResolverPort):
        self.flow = flow
        self.record = record
        self._routes = routes

    def completed(self) -> bool:
        return all(task.completed(self.record) for task in self.flow.tasks)

    def start_path(self) -> str:
        if self.flow.start_pathname:
            return self._routes.named_path(self.flow.start_pathname, self.record)
        return self._routes.record_path(self.record)

    def end_path(self) -> Optional[str]:
        if not self.flow.end_pathname:
            return None
        return self._routes.named_path(self.flow.end_pathname, self.record)

    def task_path(self, task: FlowTask) -> Optional[str]:
        return task.path(self.record, self._routes)

    def evaluator_for(self, action: str) -> Optional[TaskEvaluator]:
        """
        Evaluator for the page behind an edit_/update_ action, or None when
        the action is not one of this flow's pages.
        """
        found = self.flow.find_page(action)
        if found is None:
            return None
        task, page_idx = found
        return TaskEvaluator(task, self.record, page_idx, self._routes)

    def after_update_path(self, action: str) -> str:
        """
        Where a submitted page continues to. Running off the last task leads
        to the end page; running off any other task returns to the start page.
        """
        evaluator = self.evaluator_for(action)
        if evaluator is None:
            return self.start_path()

        next_path = evaluator.next_path()
        if next_path is not None:
            return next_path

        end_path = self.end_path()
        if end_path is not None and evaluator.task is self.flow.tasks[-1]:
            return end_path
        return self.start_path()

    def task_statuses(self) -> List[TaskStatus]:
        return [
            TaskStatus(
                name=task.name,
                number=idx + 1,
                started=task.started(self.record),
                completed=task.completed(self.record),
                path=task.path(self.record, self._routes),
            )
            for idx, task in enumerate(self.flow.tasks)
        ]
