# application/ports/flow_record.py
from __future__ import annotations

from typing import Any, Optional, Protocol


class FlowRecord(Protocol):
    id: Any

    def is_valid(self, context: Optional[str] = None) -> bool:
        ...
