# application/handlers/__init__.py
from application.handlers.base import StepHandler
from application.handlers.staff_task_handler import StaffTaskHandler
from application.handlers.system_process_handler import SystemProcessHandler
from application.handlers.waiting_step_handler import WaitingStepHandler


def default_handlers():
    return [
        StaffTaskHandler(),
        SystemProcessHandler(),
        WaitingStepHandler(),
    ]


__all__ = [
    "StepHandler",
    "StaffTaskHandler",
    "SystemProcessHandler",
    "WaitingStepHandler",
    "default_handlers",
]
