# tests/application/process/test_case_factory.py
from application.process.case_factory import CaseFromEvent
from domain.events import Event


def test_case_linked_to_application_form():
    event = Event.from_payload("PassportApplicationFormCreated", {"application_form_id": "f1", "country": "JP"})

    case = CaseFromEvent("PassportCase")(event)

    assert case.case_type == "PassportCase"
    assert case.application_form_id == "f1"
    assert case.facts == {"country": "JP"}
    assert case.current_step is None
    assert case.id


def test_case_without_form():
    case = CaseFromEvent("PassportCase")(Event.from_payload("Created", {"case_id": "ignored"}))

    assert case.application_form_id is None
    assert case.facts == {}


def test_each_case_gets_a_new_id():
    factory = CaseFromEvent("PassportCase")
    event = Event.from_payload("Created")

    assert factory(event).id != factory(event).id
