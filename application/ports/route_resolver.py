# application/ports/route_resolver.py
from __future__ import annotations

from abc import ABC, abstractmethod

from application.ports.flow_record import FlowRecord
from domain.flows.question_page import QuestionPage


class RouteResolverPort(ABC):
    @abstractmethod
    def edit_path(self, page: QuestionPage, record: FlowRecord) -> str:
        ...

    @abstractmethod
    def update_path(self, page: QuestionPage, record: FlowRecord) -> str:
        ...

    @abstractmethod
    def record_path(self, record: FlowRecord) -> str:
        """Location of the record itself; the default start path."""
        ...

    @abstractmethod
    def named_path(self, pathname: str, record: FlowRecord) -> str:
        ...
