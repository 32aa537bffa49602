# infrastructure/idempotency/in_memory_idempotency_store.py
from __future__ import annotations

from dataclasses import dataclass, field
from threading import Lock
from typing import Set, Tuple

from domain.ids import IdempotencyKey


@dataclass
class InMemoryIdempotencyStore:
    _lock: Lock = field(default_factory=Lock, init=False)
    _keys: Set[Tuple[str, str]] = field(default_factory=set, init=False)

    def register(self, scope: str, key: IdempotencyKey) -> bool:
        with self._lock:
            entry = (scope, key.value)
            if entry in self._keys:
                return False
            self._keys.add(entry)
            return True

    def clear(self) -> None:
        with self._lock:
            self._keys.clear()
