# domain/flows/__init__.py
from domain.flows.question_page import QuestionPage
from domain.flows.task import FlowTask
from domain.flows.application_form_flow import ApplicationFormFlow

__all__ = [
    "QuestionPage",
    "FlowTask",
    "ApplicationFormFlow",
]
