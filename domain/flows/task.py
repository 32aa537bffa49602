# domain/flows/task.py
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

from domain.flows.question_page import QuestionPage

if TYPE_CHECKING:
    from application.ports.flow_record import FlowRecord
    from application.ports.route_resolver import RouteResolverPort


@dataclass(frozen=True)
class FlowTask:
    """A named section of a flow made of ordered question pages."""
    name: str
    pages: Tuple[QuestionPage, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "pages", tuple(self.pages))

    def started(self, record: "FlowRecord") -> bool:
        return any(page.completed(record) for page in self.pages)

    def completed(self, record: "FlowRecord") -> bool:
        return all(page.completed(record) for page in self.pages)

    def current_page(self, record: "FlowRecord") -> Optional[QuestionPage]:
        """The first incomplete page while in progress, otherwise the first page."""
        if not self.pages:
            return None

        if not self.started(record) or self.completed(record):
            return self.pages[0]

        for page in self.pages:
            if not page.completed(record):
                return page
        return self.pages[0]

    def path(self, record: "FlowRecord", routes: "RouteResolverPort") -> Optional[str]:
        page = self.current_page(record)
        if page is None:
            return None
        return routes.edit_path(page, record)
