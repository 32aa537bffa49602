# domain/flows/question_page.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional, Tuple

if TYPE_CHECKING:
    from application.ports.flow_record import FlowRecord


@dataclass(frozen=True)
class QuestionPage:
    """
    One page of a multi-page form. Completion is never stored: the record is
    asked whether it is valid under the validation context named ``name``.
    """
    name: str
    fields: Tuple[Any, ...] = ()
    needed_if: Optional[Callable[["FlowRecord"], bool]] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.fields:
            object.__setattr__(self, "fields", (self.name,))
        else:
            object.__setattr__(self, "fields", tuple(self.fields))

    def completed(self, record: "FlowRecord") -> bool:
        return bool(record.is_valid(self.name))

    def needed(self, record: "FlowRecord") -> bool:
        return self.needed_if is None or bool(self.needed_if(record))

    @property
    def edit_pathname(self) -> str:
        return f"edit_{self.name}"

    @property
    def update_pathname(self) -> str:
        return f"update_{self.name}"
