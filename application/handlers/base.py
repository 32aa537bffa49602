# application/handlers/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from application.outcome import StepOutcome
from domain.steps.base import Step

if TYPE_CHECKING:
    from application.ports.logger import LoggerPort
    from domain.case import Case


class StepHandler(ABC):
    """Runs the entry action of a step once a case moves onto it."""

    @abstractmethod
    def supports(self, step: Step) -> bool: ...

    @abstractmethod
    def handle(self, step: Step, case: "Case", logger: "LoggerPort") -> StepOutcome: ...
