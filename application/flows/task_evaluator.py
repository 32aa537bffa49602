# application/flows/task_evaluator.py
from __future__ import annotations

from typing import List, Optional

from application.ports.flow_record import FlowRecord
from application.ports.route_resolver import RouteResolverPort
from domain.flows.question_page import QuestionPage
from domain.flows.task import FlowTask


class TaskEvaluator:
    """
    Navigation within one task for the page currently shown.

    Previous/next walk the page list and return the first page the record
    still needs, so pages made irrelevant by earlier answers are skipped.
    ``None`` means the scan ran off the task; callers fall back to the flow's
    start or end path.
    """

    def __init__(
        self,
        task: FlowTask,
        record: FlowRecord,
        current_page_index: int,
        routes: RouteResolverPort,
    ):
        if not 0 <= current_page_index < len(task.pages):
            raise IndexError(
                f"Page index {current_page_index} out of range for task {task.name}"
            )
        self.task = task
        self.record = record
        self.current_page_index = current_page_index
        self._routes = routes

    @property
    def pages(self) -> List[QuestionPage]:
        return list(self.task.pages)

    @property
    def current_page(self) -> QuestionPage:
        return self.task.pages[self.current_page_index]

    def started(self) -> bool:
        return self.task.started(self.record)

    def completed(self) -> bool:
        return self.task.completed(self.record)

    def path(self) -> Optional[str]:
        return self.task.path(self.record, self._routes)

    def update_path(self) -> str:
        return self._routes.update_path(self.current_page, self.record)

    def next_page(self) -> Optional[QuestionPage]:
        pages = self.task.pages
        idx = self.current_page_index + 1
        while idx < len(pages):
            if pages[idx].needed(self.record):
                return pages[idx]
            idx += 1
        return None

    def prev_page(self) -> Optional[QuestionPage]:
        pages = self.task.pages
        idx = self.current_page_index - 1
        while idx >= 0:
            if pages[idx].needed(self.record):
                return pages[idx]
            idx -= 1
        return None

    def next_path(self) -> Optional[str]:
        page = self.next_page()
        if page is None:
            return None
        return self._routes.edit_path(page, self.record)

    def prev_path(self) -> Optional[str]:
        page = self.prev_page()
        if page is None:
            return None
        return self._routes.edit_path(page, self.record)
