from __future__ import annotations

from pathlib import Path

import pytest

from infrastructure.definitions.base_loader import DefinitionLoadError
from infrastructure.definitions.directory_loader import load_directory
from infrastructure.definitions.loader_registry import DefinitionLoaderRegistry
from infrastructure.events.in_memory_event_bus import InMemoryEventBus
from infrastructure.tasks.in_memory_staff_work_queue import InMemoryStaffWorkQueue

PROJECT_ROOT = Path(__file__).parent.parent.parent


def test_load_bundled_definitions() -> None:
    queue = InMemoryStaffWorkQueue(InMemoryEventBus())
    registry = DefinitionLoaderRegistry(task_creator_factory=queue.for_task_type)

    loaded = load_directory(PROJECT_ROOT / "definitions", registry)

    assert set(loaded.processes) == {"passport"}
    assert set(loaded.flows) == {"paid_leave"}
    assert loaded.sources["passport"].name == "passport_process.yaml"


def test_duplicate_names_are_rejected(tmp_path: Path) -> None:
    (tmp_path / "a.yaml").write_text("kind: flow\nname: same\n", encoding="utf-8")
    (tmp_path / "b.json").write_text('{"kind": "flow", "name": "same"}', encoding="utf-8")

    with pytest.raises(DefinitionLoadError, match="Definition same declared in both"):
        load_directory(tmp_path, DefinitionLoaderRegistry())


def test_empty_directory(tmp_path: Path) -> None:
    loaded = load_directory(tmp_path, DefinitionLoaderRegistry())

    assert loaded.processes == {}
    assert loaded.flows == {}
