# application/flows/__init__.py
from application.flows.builder import ApplicationFormFlowBuilder, TaskBuilder
from application.flows.progress import FlowProgress, TaskStatus
from application.flows.task_evaluator import TaskEvaluator
from application.flows.validations import FlowValidations, ValidatedRecord

__all__ = [
    "ApplicationFormFlowBuilder",
    "TaskBuilder",
    "FlowProgress",
    "TaskStatus",
    "TaskEvaluator",
    "FlowValidations",
    "ValidatedRecord",
]
