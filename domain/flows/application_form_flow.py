# domain/flows/application_form_flow.py
"""
Application form flow
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from domain.flows.question_page import QuestionPage
from domain.flows.task import FlowTask


@dataclass(frozen=True)
class ApplicationFormFlow:
    """
    Ordered tasks of a multi-page form plus optional start/end pathnames.
    """
    name: str
    tasks: Tuple[FlowTask, ...] = ()
    start_pathname: Optional[str] = None
    end_pathname: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "tasks", tuple(self.tasks))

    @property
    def contexts(self) -> List[str]:
        return [page.name for page in self.pages()]

    def pages(self) -> List[QuestionPage]:
        return [page for task in self.tasks for page in task.pages]

    def generated_routes(self) -> List[str]:
        routes: List[str] = []
        for page in self.pages():
            routes.extend([page.edit_pathname, page.update_pathname])
        return routes

    def find_page(self, action: str) -> Optional[Tuple[FlowTask, int]]:
        for task in self.tasks:
            for idx, page in enumerate(task.pages):
                if action in (page.edit_pathname, page.update_pathname):
                    return task, idx
        return None

    def get_task(self, name: str) -> Optional[FlowTask]:
        for task in self.tasks:
            if task.name == name:
                return task
        return None

    def task_counter(self, task: FlowTask) -> Optional[int]:
        for idx, candidate in enumerate(self.tasks):
            if candidate is task or candidate.name == task.name:
                return idx
        return None
