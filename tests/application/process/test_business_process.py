# tests/application/process/test_business_process.py
import threading

import pytest
from application.ports.logger import LoggerPort
from application.process.business_process import BusinessProcess
from domain.business_process import END
from domain.case import Case
from domain.events import Event
from domain.exceptions import ConfigurationError
from domain.steps import StaffTask, SystemProcess
from infrastructure.cases.in_memory_case_repository import InMemoryCaseRepository
from infrastructure.events.in_memory_event_bus import InMemoryEventBus
from infrastructure.tasks.in_memory_staff_work_queue import InMemoryStaffWorkQueue


class FakeTaskService:
    def __init__(self):
        self.created = []

    def create_task(self, case):
        self.created.append(case.id)
        return f"task-{len(self.created)}"


class FailingCaseRepository(InMemoryCaseRepository):
    def save(self, case):
        raise IOError("database unavailable")


class RecordingLogger(LoggerPort):
    def __init__(self, records=None, bound=None):
        self.records = [] if records is None else records
        self.bound = dict(bound or {})

    def _record(self, level, event, fields):
        self.records.append((level, event, {**self.bound, **fields}))

    def debug(self, event, **fields):
        self._record("debug", event, fields)

    def info(self, event, **fields):
        self._record("info", event, fields)

    def warning(self, event, **fields):
        self._record("warning", event, fields)

    def error(self, event, **fields):
        self._record("error", event, fields)

    def bind(self, **fields):
        return RecordingLogger(self.records, {**self.bound, **fields})

    def fields_for(self, event):
        return [fields for _, name, fields in self.records if name == event]


def _configure(task_service, processed):
    def start(event):
        return Case(
            id=f"case-{event.payload['application_form_id']}",
            application_form_id=event.payload["application_form_id"],
        )

    def configure(process):
        process.step("collect_info", StaffTask("Collect Information", task_creator=task_service))
        process.step("process_data", SystemProcess("Process Data", action=lambda case: processed.append(case.id)))
        process.start("collect_info")
        process.transition("collect_info", "form_submitted", "process_data")
        process.transition("process_data", "processing_complete", END)
        process.start_on("application_started", start)

    return configure


@pytest.fixture
def bus():
    return InMemoryEventBus()


@pytest.fixture
def cases():
    return InMemoryCaseRepository()


@pytest.fixture
def task_service():
    return FakeTaskService()


@pytest.fixture
def processed():
    return []


@pytest.fixture
def process(bus, cases, task_service, processed):
    process = BusinessProcess.define(
        "my_process",
        "MyCase",
        _configure(task_service, processed),
        event_bus=bus,
        cases=cases,
    )
    yield process
    process.stop_listening_for_events()


class TestBusinessProcessScenario:
    def test_start_event_creates_case_at_start_step(self, process, bus, cases, task_service):
        bus.publish("application_started", {"application_form_id": "f1"})

        case = cases.get("case-f1")
        assert case is not None
        assert case.case_type == "MyCase"
        assert case.current_step == "collect_info"
        assert task_service.created == ["case-f1"]

    def test_full_lifecycle(self, process, bus, cases, processed):
        bus.publish("application_started", {"application_form_id": "f1"})

        bus.publish("form_submitted", {"application_form_id": "f1"})
        assert cases.get("case-f1").current_step == "process_data"
        assert processed == ["case-f1"]

        bus.publish("processing_complete", {"case_id": "case-f1"})
        assert cases.get("case-f1").is_closed is True

        bus.publish("form_submitted", {"application_form_id": "f1"})
        case = cases.get("case-f1")
        assert case.is_closed is True
        assert case.current_step == "process_data"
        assert processed == ["case-f1"]

    def test_repeating_event_does_not_move_case_further(self, process, bus, cases, processed):
        bus.publish("application_started", {"application_form_id": "f1"})
        bus.publish("form_submitted", {"application_form_id": "f1"})

        bus.publish("form_submitted", {"application_form_id": "f1"})

        assert cases.get("case-f1").current_step == "process_data"
        assert processed == ["case-f1"]

    def test_event_without_target_is_ignored(self, process, bus, cases):
        bus.publish("application_started", {"application_form_id": "f1"})

        bus.publish("form_submitted", {})

        assert cases.get("case-f1").current_step == "collect_info"

    def test_only_targeted_case_moves(self, process, bus, cases):
        bus.publish("application_started", {"application_form_id": "f1"})
        bus.publish("application_started", {"application_form_id": "f2"})

        bus.publish("form_submitted", {"application_form_id": "f2"})

        assert cases.get("case-f1").current_step == "collect_info"
        assert cases.get("case-f2").current_step == "process_data"

    def test_cases_of_other_processes_are_ignored(self, process, bus, cases):
        cases.save(Case(id="other", case_type="OtherCase", current_step="collect_info"))

        bus.publish("form_submitted", {"case_id": "other"})

        assert cases.get("other").current_step == "collect_info"


class TestBusinessProcessListening:
    def test_define_starts_listening(self, process, bus):
        assert process.is_listening is True
        assert set(process.subscriptions) == {"form_submitted", "processing_complete", "application_started"}
        assert bus.subscriber_count("form_submitted") == 1

    def test_start_listening_twice_subscribes_once(self, process, bus):
        process.start_listening_for_events()

        assert len(process.subscriptions) == 3
        assert bus.subscriber_count("form_submitted") == 1

    def test_stop_listening_unsubscribes(self, process, bus, cases):
        process.stop_listening_for_events()

        assert process.is_listening is False
        assert process.subscriptions == {}
        assert bus.subscriber_count("application_started") == 0
        bus.publish("application_started", {"application_form_id": "f1"})
        assert cases.list() == []

    def test_stop_listening_twice_is_harmless(self, process, bus):
        process.stop_listening_for_events()
        process.stop_listening_for_events()

        assert bus.subscriber_count("form_submitted") == 0

    def test_restart_listening(self, process, bus):
        process.stop_listening_for_events()
        process.start_listening_for_events()

        assert bus.subscriber_count("form_submitted") == 1

    def test_concurrent_start_and_stop_leave_consistent_state(self, process, bus):
        def toggle(start):
            for _ in range(50):
                if start:
                    process.start_listening_for_events()
                else:
                    process.stop_listening_for_events()

        threads = [threading.Thread(target=toggle, args=(i % 2 == 0,)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        expected = 1 if process.is_listening else 0
        for event_name in ("form_submitted", "processing_complete", "application_started"):
            assert bus.subscriber_count(event_name) == expected
        assert len(process.subscriptions) == 3 * expected


class TestBusinessProcessErrors:
    def test_start_event_without_handler_raises(self, bus, cases):
        process = BusinessProcess.define(
            "p",
            "MyCase",
            lambda p: p.step("a", StaffTask("A", task_creator=FakeTaskService())).start("a"),
            event_bus=bus,
            cases=cases,
        )

        with pytest.raises(ConfigurationError, match="No handler defined for start event 'x'"):
            process.create_case_from_event(Event("x"))

    def test_save_failure_aborts_event(self, bus, task_service, processed):
        BusinessProcess.define(
            "my_process",
            "MyCase",
            _configure(task_service, processed),
            event_bus=bus,
            cases=FailingCaseRepository(),
        )

        with pytest.raises(IOError, match="database unavailable"):
            bus.publish("application_started", {"application_form_id": "f1"})
        assert task_service.created == []


class TestBusinessProcessHelpers:
    def test_describe_step(self, process):
        assert process.describe_step("collect_info") == "Staff: Collect info"
        assert process.describe_step("process_data", {"process_data": "Crunching"}) == "Crunching"

    def test_to_diagram(self, process):
        diagram = process.to_diagram()
        assert "collect_info -->|form_submitted| process_data" in diagram
        assert "process_data -->|processing_complete| END" in diagram


class TestBusinessProcessStartEvents:
    def test_repeated_start_event_for_bound_form_creates_no_second_case(self, process, bus, cases, task_service):
        bus.publish("application_started", {"application_form_id": "f1"})

        bus.publish("application_started", {"application_form_id": "f1"})

        assert [case.id for case in cases.list()] == ["case-f1"]
        assert cases.get("case-f1").current_step == "collect_info"
        assert task_service.created == ["case-f1"]

    def test_start_event_for_existing_form_moves_bound_case(self, bus, cases, task_service):
        def configure(process):
            process.step("draft", StaffTask("Draft", task_creator=task_service))
            process.step("resubmitted", StaffTask("Resubmitted", task_creator=task_service))
            process.start("draft")
            process.transition("draft", "form_created", "resubmitted")
            process.start_on(
                "form_created",
                lambda event: Case(id="new", application_form_id=event.payload["application_form_id"]),
            )

        BusinessProcess.define("p", "MyCase", configure, event_bus=bus, cases=cases)
        cases.save(Case(id="existing", case_type="MyCase", application_form_id="f1", current_step="draft"))

        bus.publish("form_created", {"application_form_id": "f1"})

        assert cases.get("new") is None
        assert cases.get("existing").current_step == "resubmitted"

    def test_closed_case_does_not_block_new_start(self, process, bus, cases):
        cases.save(Case(id="old", case_type="MyCase", application_form_id="f1", current_step="process_data"))
        cases.get("old").close()

        bus.publish("application_started", {"application_form_id": "f1"})

        assert cases.get("case-f1").current_step == "collect_info"

    def test_start_event_bound_to_other_process_case_still_starts(self, process, bus, cases):
        cases.save(Case(id="other", case_type="OtherCase", application_form_id="f1", current_step="x"))

        bus.publish("application_started", {"application_form_id": "f1"})

        assert cases.get("case-f1").current_step == "collect_info"


class TestBusinessProcessSystemFailures:
    def test_failed_system_process_keeps_case_on_step(self, bus, cases, task_service):
        logger = RecordingLogger()

        def configure(process):
            process.step("collect_info", StaffTask("Collect Information", task_creator=task_service))
            process.step("process_data", SystemProcess("Process Data", action=lambda case: False))
            process.start("collect_info")
            process.transition("collect_info", "form_submitted", "process_data")
            process.transition("process_data", "processing_complete", END)
            process.start_on("application_started", lambda event: Case(id="c1"))

        BusinessProcess.define("p", "MyCase", configure, event_bus=bus, cases=cases, logger=logger)
        bus.publish("application_started", {})

        bus.publish("form_submitted", {"case_id": "c1"})

        assert cases.get("c1").current_step == "process_data"
        assert cases.get("c1").is_closed is False
        failed = logger.fields_for("step.entry_failed")
        assert len(failed) == 1
        assert failed[0]["step"] == "process_data"
        assert failed[0]["error"] == "System process reported failure: Process Data"

        bus.publish("processing_complete", {"case_id": "c1"})
        assert cases.get("c1").is_closed is True


class TestBusinessProcessLogging:
    def test_runtime_logs_event_names(self, bus, cases, task_service, processed):
        logger = RecordingLogger()
        process = BusinessProcess.define(
            "my_process",
            "MyCase",
            _configure(task_service, processed),
            event_bus=bus,
            cases=cases,
            logger=logger,
        )

        bus.publish("application_started", {"application_form_id": "f1"})
        bus.publish("form_submitted", {"application_form_id": "f1"})
        bus.publish("processing_complete", {"case_id": "case-f1"})
        process.stop_listening_for_events()

        subscribed = [fields["event_name"] for fields in logger.fields_for("process.subscribe")]
        assert subscribed == ["form_submitted", "processing_complete", "application_started"]
        assert logger.fields_for("case.start")[0]["event_name"] == "application_started"
        transition = logger.fields_for("transition")[0]
        assert transition["from_step"] == "collect_info"
        assert transition["to_step"] == "process_data"
        assert transition["process"] == "my_process"
        assert logger.fields_for("case.closed")[0]["event_name"] == "processing_complete"
        assert len(logger.fields_for("process.unsubscribe")) == 3


class TestBusinessProcessStaffWork:
    def test_repeated_completion_does_not_skip_next_review(self, bus, cases):
        queue = InMemoryStaffWorkQueue(bus)
        reviews = queue.for_task_type("Review")

        def configure(process):
            process.step("first_review", StaffTask("First review", task_creator=reviews))
            process.step("second_review", StaffTask("Second review", task_creator=reviews))
            process.start("first_review")
            process.transition("first_review", "ReviewCompleted", "second_review")
            process.transition("second_review", "ReviewCompleted", END)
            process.start_on("Created", lambda event: Case(id="c1"))

        BusinessProcess.define("reviews", "MyCase", configure, event_bus=bus, cases=cases)
        bus.publish("Created", {})
        first = queue.pending_for_case("c1")[0]

        queue.complete(first.id)
        queue.complete(first.id)

        case = cases.get("c1")
        assert case.current_step == "second_review"
        assert case.is_closed is False
        assert len(queue.pending_for_case("c1")) == 1
