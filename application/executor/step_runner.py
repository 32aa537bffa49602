# application/executor/step_runner.py
from __future__ import annotations

import time
from typing import Optional

from application.executor.handler_registry import HandlerRegistry
from application.outcome import StepOutcome
from application.ports.logger import LoggerPort
from domain.case import Case
from domain.steps.base import Step


class StepRunner:
    """Runs the entry action of the step a case has just moved onto."""

    def __init__(self, registry: Optional[HandlerRegistry] = None):
        self._registry = registry or HandlerRegistry()

    def enter(self, step_name: str, step: Step, case: Case, logger: LoggerPort) -> StepOutcome:
        handler = self._registry.get_handler(step)

        logger.info(
            "step.enter",
            case_id=case.id,
            step=step_name,
            step_kind=step.kind.value,
        )
        t0 = time.perf_counter()

        outcome: StepOutcome = handler.handle(step, case, logger)

        if outcome is None:
            raise RuntimeError(
                f"Handler returned None: handler={type(handler).__name__}, step={step_name} ({type(step).__name__})"
            )

        logger.info(
            "step.entered",
            case_id=case.id,
            step=step_name,
            ok=outcome.ok,
            elapsed_ms=int((time.perf_counter() - t0) * 1000),
        )
        if not outcome.ok:
            logger.warning("step.entry_failed", case_id=case.id, step=step_name, error=outcome.error_message)
        return outcome
