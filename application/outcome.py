# application/outcome.py
from dataclasses import dataclass
from typing import Any, Optional

@dataclass(frozen=True)
class StepOutcome:
    ok: bool
    error_message: Optional[str] = None
    detail: Any = None
