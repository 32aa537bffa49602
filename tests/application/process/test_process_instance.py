# tests/application/process/test_process_instance.py
import pytest
from application.ports.case_repository import CaseRepositoryPort
from application.process.builder import BusinessProcessBuilder
from application.process.instance import BusinessProcessInstance
from domain.business_process import END
from domain.case import Case, CaseStatus
from domain.events import Event
from domain.exceptions import ConfigurationError
from domain.steps import ApplicantTask, SystemProcess


class FakeCaseRepository(CaseRepositoryPort):
    def __init__(self):
        self.saved = []

    def save(self, case):
        self.saved.append((case.id, case.current_step, case.status))

    def get(self, case_id):
        return None

    def for_event(self, event, case_type=None):
        return []

    def list(self):
        return []


class FailingCaseRepository(FakeCaseRepository):
    def save(self, case):
        raise IOError("disk full")


def _definition(action=None):
    return (
        BusinessProcessBuilder("my_process", "MyCase")
        .step("collect_info", ApplicantTask("Collect Information"))
        .step("process_data", SystemProcess("Process Data", action=action or (lambda case: None)))
        .start("collect_info")
        .transition("collect_info", "form_submitted", "process_data")
        .transition("process_data", "processing_complete", END)
        .build()
    )


class TestBusinessProcessInstance:
    def test_start_from_event_enters_start_step(self):
        cases = FakeCaseRepository()
        instance = BusinessProcessInstance(_definition(), Case(id="c1"), cases)

        instance.start_from_event(Event("application_started"))

        assert instance.current_step == "collect_info"
        assert cases.saved == [("c1", "collect_info", CaseStatus.OPEN)]

    def test_start_without_start_step_raises(self):
        definition = BusinessProcessBuilder("p", "Case").step("a", ApplicantTask("A")).build()
        instance = BusinessProcessInstance(definition, Case(id="c1"), FakeCaseRepository())

        with pytest.raises(ConfigurationError, match="no start step"):
            instance.start_from_event(Event("created"))

    def test_transition_moves_case(self):
        instance = BusinessProcessInstance(_definition(), Case(id="c1", current_step="collect_info"), FakeCaseRepository())

        moved = instance.transition_to_next_step(Event("form_submitted"))

        assert moved is True
        assert instance.current_step == "process_data"

    def test_unknown_event_is_a_no_op(self):
        cases = FakeCaseRepository()
        instance = BusinessProcessInstance(_definition(), Case(id="c1", current_step="collect_info"), cases)

        moved = instance.transition_to_next_step(Event("processing_complete"))

        assert moved is False
        assert instance.current_step == "collect_info"
        assert cases.saved == []

    def test_transition_to_end_closes_case(self):
        cases = FakeCaseRepository()
        case = Case(id="c1", current_step="process_data")
        instance = BusinessProcessInstance(_definition(), case, cases)

        moved = instance.transition_to_next_step(Event("processing_complete"))

        assert moved is True
        assert case.is_closed is True
        assert case.current_step == "process_data"
        assert cases.saved == [("c1", "process_data", CaseStatus.CLOSED)]

    def test_closed_case_never_moves(self):
        case = Case(id="c1", current_step="collect_info", status=CaseStatus.CLOSED)
        instance = BusinessProcessInstance(_definition(), case, FakeCaseRepository())

        assert instance.transition_to_next_step(Event("form_submitted")) is False
        assert case.current_step == "collect_info"

    def test_case_is_saved_before_entry_action_runs(self):
        cases = FakeCaseRepository()
        observed = []
        definition = _definition(action=lambda case: observed.append(list(cases.saved)))
        instance = BusinessProcessInstance(definition, Case(id="c1", current_step="collect_info"), cases)

        instance.transition_to_next_step(Event("form_submitted"))

        assert observed == [[("c1", "process_data", CaseStatus.OPEN)]]

    def test_save_failure_propagates(self):
        instance = BusinessProcessInstance(_definition(), Case(id="c1", current_step="collect_info"), FailingCaseRepository())

        with pytest.raises(IOError, match="disk full"):
            instance.transition_to_next_step(Event("form_submitted"))
