#!/usr/bin/env python3
"""
Business process command line

Usage:
  python scripts/process_run.py diagram --file <path>
  python scripts/process_run.py simulate --file <path> --events <json>
  python scripts/process_run.py simulate --file <path> --events-file <path>

Examples:
  python scripts/process_run.py diagram --file definitions/passport_process.yaml
  python scripts/process_run.py simulate --file definitions/passport_process.yaml \
      --events '[{"name": "PassportApplicationFormCreated", "payload": {"application_form_id": "f1"}},
                 {"name": "PassportApplicationFormSubmitted", "payload": {"application_form_id": "f1"}}]'
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

from dotenv import load_dotenv

load_dotenv()

from application.process.business_process import BusinessProcess
from application.process.diagram import flow_to_mermaid, process_to_mermaid
from domain.exceptions import DomainError
from domain.flows.application_form_flow import ApplicationFormFlow
from infrastructure.cases.in_memory_case_repository import InMemoryCaseRepository
from infrastructure.definitions.base_loader import DefinitionLoadError
from infrastructure.definitions.loader_registry import DefinitionLoaderRegistry
from infrastructure.events.in_memory_event_bus import InMemoryEventBus
from infrastructure.logging.console_logger import ConsoleLogger
from infrastructure.tasks.in_memory_staff_work_queue import InMemoryStaffWorkQueue


def _parse_events(raw: str, label: str) -> List[Dict[str, Any]]:
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON for {label}: {exc}") from exc
    if not isinstance(parsed, list):
        raise ValueError(f"{label} must be a JSON array")
    for item in parsed:
        if not isinstance(item, dict) or not item.get("name"):
            raise ValueError(f"Every entry of {label} needs a 'name'")
    return parsed


def _load_events(args: argparse.Namespace) -> List[Dict[str, Any]]:
    if args.events_file:
        try:
            content = Path(args.events_file).read_text(encoding="utf-8")
        except OSError as exc:
            raise ValueError(f"Unable to read events file: {exc}") from exc
        return _parse_events(content, "events file")
    if args.events:
        return _parse_events(args.events, "--events")
    return []


def _load_definition(path: str, work_queue: InMemoryStaffWorkQueue):
    registry = DefinitionLoaderRegistry(task_creator_factory=work_queue.for_task_type)
    file_path = Path(path)
    return registry.get_loader(file_path).load_from_file(file_path)


def _print_cases(repository: InMemoryCaseRepository, process: BusinessProcess) -> None:
    for case in repository.list():
        label = process.describe_step(case.current_step) if case.current_step else "-"
        print(f"  case {case.id} [{case.status.value}] step={case.current_step} ({label})")


def run_diagram(args: argparse.Namespace) -> int:
    bus = InMemoryEventBus()
    definition = _load_definition(args.file, InMemoryStaffWorkQueue(bus))
    if isinstance(definition, ApplicationFormFlow):
        print(flow_to_mermaid(definition))
    else:
        print(process_to_mermaid(definition))
    return 0


def run_simulate(args: argparse.Namespace) -> int:
    logger = ConsoleLogger() if args.verbose else None
    bus = InMemoryEventBus(logger=logger)
    repository = InMemoryCaseRepository()
    work_queue = InMemoryStaffWorkQueue(bus)

    definition = _load_definition(args.file, work_queue)
    if isinstance(definition, ApplicationFormFlow):
        print(f"{args.file} is a form flow; only processes can be simulated", file=sys.stderr)
        return 2

    process = BusinessProcess(definition, event_bus=bus, cases=repository, logger=logger)
    process.start_listening_for_events()
    try:
        for event in _load_events(args):
            print(f"> {event['name']} {json.dumps(event.get('payload', {}), ensure_ascii=False)}")
            bus.publish(event["name"], event.get("payload", {}))
            _print_cases(repository, process)
    finally:
        process.stop_listening_for_events()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect and simulate business processes")
    subparsers = parser.add_subparsers(dest="command", required=True)

    diagram = subparsers.add_parser("diagram", help="Print a mermaid diagram of a definition")
    diagram.add_argument("--file", required=True, help="Process or flow definition file")
    diagram.set_defaults(handler=run_diagram)

    simulate = subparsers.add_parser("simulate", help="Publish events through an in-memory process")
    simulate.add_argument("--file", required=True, help="Process definition file")
    simulate.add_argument("--events", help="JSON array of {name, payload}")
    simulate.add_argument("--events-file", help="File containing the JSON array")
    simulate.add_argument("--verbose", action="store_true", help="Print structured logs")
    simulate.set_defaults(handler=run_simulate)

    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    try:
        code = args.handler(args)
    except (ValueError, DefinitionLoadError, DomainError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
