# domain/ids.py
from dataclasses import dataclass

from domain.exceptions import ValidationError


@dataclass(frozen=True)
class IdempotencyKey:
    """Client-supplied key that makes publishing an event safe to retry."""
    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValidationError("Idempotency key must not be empty")
