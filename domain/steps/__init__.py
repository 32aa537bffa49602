from domain.steps.base import Step, StepKind
from domain.steps.applicant_task import ApplicantTask
from domain.steps.staff_task import StaffTask
from domain.steps.system_process import SystemProcess
from domain.steps.third_party_task import ThirdPartyTask

__all__ = [
    "Step",
    "StepKind",
    "ApplicantTask",
    "StaffTask",
    "SystemProcess",
    "ThirdPartyTask",
]
