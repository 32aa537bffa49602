# infrastructure/tasks/in_memory_staff_work_queue.py
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from threading import Lock
from typing import Dict, List, Optional
from uuid import uuid4

from application.ports.event_bus import EventBusPort
from domain.case import Case
from domain.exceptions import ValidationError


class WorkItemStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"

    @property
    def event_suffix(self) -> str:
        return "".join(part.capitalize() for part in self.value.split("_"))


@dataclass(frozen=True)
class StaffWorkItem:
    id: str
    task_type: str
    case_id: str
    status: WorkItemStatus
    created_at: datetime
    assignee_id: Optional[str] = None
    due_on: Optional[date] = None

    @property
    def is_completed(self) -> bool:
        return self.status == WorkItemStatus.COMPLETED

    def is_overdue(self, today: date) -> bool:
        return self.due_on is not None and not self.is_completed and self.due_on < today


class InMemoryStaffWorkQueue:
    """
    Queue of staff work items created when a case enters a StaffTask step.

    Every status change publishes ``<task_type><Status>`` (for example
    ``ReviewTaskCompleted`` or ``ReviewTaskOnHold``) with the case id so the
    owning process can react. Setting an item to the status it already has
    publishes nothing, so a repeated completion cannot move a case twice.
    """

    def __init__(self, event_bus: EventBusPort, task_type: str = "StaffTask") -> None:
        self._event_bus = event_bus
        self._task_type = task_type
        self._items: Dict[str, StaffWorkItem] = {}
        self._lock = Lock()

    def for_task_type(self, task_type: str, due_in_days: Optional[int] = None) -> "TaskTypeCreator":
        return TaskTypeCreator(self, task_type, due_in_days)

    def create_task(
        self,
        case: Case,
        task_type: Optional[str] = None,
        due_on: Optional[date] = None,
    ) -> StaffWorkItem:
        item = StaffWorkItem(
            id=uuid4().hex,
            task_type=task_type or self._task_type,
            case_id=case.id,
            status=WorkItemStatus.PENDING,
            created_at=datetime.now(timezone.utc),
            due_on=due_on,
        )
        with self._lock:
            self._items[item.id] = item
        return item

    def get(self, item_id: str) -> Optional[StaffWorkItem]:
        with self._lock:
            return self._items.get(item_id)

    def pending_for_case(self, case_id: str) -> List[StaffWorkItem]:
        """Items of the case that are not completed yet, including items on hold."""
        with self._lock:
            return [
                item for item in self._items.values()
                if item.case_id == case_id and not item.is_completed
            ]

    def overdue(self, today: date) -> List[StaffWorkItem]:
        with self._lock:
            items = [item for item in self._items.values() if item.is_overdue(today)]
        return sorted(items, key=lambda i: i.due_on)

    def assign_next(self, assignee_id: str) -> Optional[StaffWorkItem]:
        with self._lock:
            for item in sorted(self._items.values(), key=lambda i: i.created_at):
                if not item.is_completed and item.assignee_id is None:
                    assigned = replace(item, assignee_id=assignee_id)
                    self._items[item.id] = assigned
                    return assigned
        return None

    def assign(self, item_id: str, assignee_id: str) -> StaffWorkItem:
        return self._update(item_id, assignee_id=assignee_id)

    def unassign(self, item_id: str) -> StaffWorkItem:
        return self._update(item_id, assignee_id=None)

    def complete(self, item_id: str) -> StaffWorkItem:
        return self.change_status(item_id, WorkItemStatus.COMPLETED)

    def hold(self, item_id: str) -> StaffWorkItem:
        return self.change_status(item_id, WorkItemStatus.ON_HOLD)

    def reopen(self, item_id: str) -> StaffWorkItem:
        return self.change_status(item_id, WorkItemStatus.PENDING)

    def change_status(self, item_id: str, status: WorkItemStatus) -> StaffWorkItem:
        with self._lock:
            item = self._require(item_id)
            if item.status == status:
                return item
            changed = replace(item, status=status)
            self._items[item_id] = changed

        # published outside the lock; handlers may create new work items
        self._event_bus.publish(
            f"{changed.task_type}{status.event_suffix}",
            {"case_id": changed.case_id, "task_id": changed.id},
        )
        return changed

    def _update(self, item_id: str, **changes) -> StaffWorkItem:
        with self._lock:
            updated = replace(self._require(item_id), **changes)
            self._items[item_id] = updated
        return updated

    def _require(self, item_id: str) -> StaffWorkItem:
        item = self._items.get(item_id)
        if item is None:
            raise ValidationError(f"Work item not found: {item_id}")
        return item


@dataclass(frozen=True)
class TaskTypeCreator:
    """Task creator bound to one task type, for use in a StaffTask step."""
    queue: InMemoryStaffWorkQueue
    task_type: str
    due_in_days: Optional[int] = None

    def create_task(self, case: Case) -> StaffWorkItem:
        due_on = None
        if self.due_in_days is not None:
            due_on = datetime.now(timezone.utc).date() + timedelta(days=self.due_in_days)
        return self.queue.create_task(case, task_type=self.task_type, due_on=due_on)
