from __future__ import annotations

from domain.ids import IdempotencyKey
from infrastructure.idempotency.in_memory_idempotency_store import InMemoryIdempotencyStore


def test_register_is_scoped() -> None:
    store = InMemoryIdempotencyStore()

    assert store.register("FormSubmitted", IdempotencyKey("k1")) is True
    assert store.register("FormSubmitted", IdempotencyKey("k1")) is False
    assert store.register("FormWithdrawn", IdempotencyKey("k1")) is True


def test_clear() -> None:
    store = InMemoryIdempotencyStore()
    store.register("FormSubmitted", IdempotencyKey("k1"))

    store.clear()

    assert store.register("FormSubmitted", IdempotencyKey("k1")) is True
