from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from scripts import process_run

PROJECT_ROOT = Path(__file__).parent.parent.parent
PASSPORT = str(PROJECT_ROOT / "definitions" / "passport_process.yaml")
PAID_LEAVE = str(PROJECT_ROOT / "definitions" / "paid_leave_flow.yaml")


def _run(monkeypatch, *argv: str) -> int:
    monkeypatch.setattr(sys, "argv", ["process_run.py", *argv])
    with pytest.raises(SystemExit) as excinfo:
        process_run.main()
    return excinfo.value.code


def test_diagram_for_process(monkeypatch, capsys) -> None:
    # Act
    code = _run(monkeypatch, "diagram", "--file", PASSPORT)

    # Assert
    out = capsys.readouterr().out
    assert code == 0
    assert out.startswith("flowchart TD")
    assert "submit_application -->|PassportApplicationFormSubmitted| review_passport_photo" in out


def test_diagram_for_flow(monkeypatch, capsys) -> None:
    code = _run(monkeypatch, "diagram", "--file", PAID_LEAVE)

    assert code == 0
    assert "subgraph t_leave_details[Task: leave_details]" in capsys.readouterr().out


def test_simulate_moves_case(monkeypatch, capsys) -> None:
    # Arrange
    events = json.dumps(
        [
            {"name": "PassportApplicationFormCreated", "payload": {"application_form_id": "f1"}},
            {"name": "PassportApplicationFormSubmitted", "payload": {"application_form_id": "f1"}},
        ]
    )

    # Act
    code = _run(monkeypatch, "simulate", "--file", PASSPORT, "--events", events)

    # Assert
    out = capsys.readouterr().out
    assert code == 0
    assert "step=submit_application (Applicant: Submit application)" in out
    assert "step=review_passport_photo (Staff: Review passport photo)" in out


def test_simulate_events_file(monkeypatch, capsys, tmp_path: Path) -> None:
    events_file = tmp_path / "events.json"
    events_file.write_text(
        json.dumps([{"name": "PassportApplicationFormCreated", "payload": {"application_form_id": "f1"}}]),
        encoding="utf-8",
    )

    code = _run(monkeypatch, "simulate", "--file", PASSPORT, "--events-file", str(events_file))

    assert code == 0
    assert "[open] step=submit_application" in capsys.readouterr().out


def test_simulate_rejects_flow(monkeypatch, capsys) -> None:
    code = _run(monkeypatch, "simulate", "--file", PAID_LEAVE)

    assert code == 2
    assert "only processes can be simulated" in capsys.readouterr().err


def test_invalid_events_json(monkeypatch, capsys) -> None:
    code = _run(monkeypatch, "simulate", "--file", PASSPORT, "--events", "{not json")

    assert code == 1
    assert "Error: Invalid JSON for --events" in capsys.readouterr().err


def test_events_need_names(monkeypatch, capsys) -> None:
    code = _run(monkeypatch, "simulate", "--file", PASSPORT, "--events", '[{"payload": {}}]')

    assert code == 1
    assert "needs a 'name'" in capsys.readouterr().err


def test_missing_definition(monkeypatch, capsys, tmp_path: Path) -> None:
    code = _run(monkeypatch, "diagram", "--file", str(tmp_path / "missing.yaml"))

    assert code == 1
    assert "Definition file not found" in capsys.readouterr().err
