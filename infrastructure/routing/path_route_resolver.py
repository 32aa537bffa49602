# infrastructure/routing/path_route_resolver.py
from __future__ import annotations

import re

from application.ports.flow_record import FlowRecord
from application.ports.route_resolver import RouteResolverPort
from domain.flows.question_page import QuestionPage

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def underscore(name: str) -> str:
    """PaidLeaveApplication -> paid_leave_application"""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


class PathRouteResolver(RouteResolverPort):
    """
    Builds locations of the form ``{prefix}/{record_type}/{id}/{pathname}``,
    where ``record_type`` is the record's class name in snake case.
    """

    def __init__(self, prefix: str = ""):
        self._prefix = prefix.rstrip("/")

    def record_path(self, record: FlowRecord) -> str:
        return f"{self._prefix}/{underscore(type(record).__name__)}/{record.id}"

    def named_path(self, pathname: str, record: FlowRecord) -> str:
        return f"{self.record_path(record)}/{pathname}"

    def edit_path(self, page: QuestionPage, record: FlowRecord) -> str:
        return self.named_path(page.edit_pathname, record)

    def update_path(self, page: QuestionPage, record: FlowRecord) -> str:
        return self.named_path(page.update_pathname, record)
