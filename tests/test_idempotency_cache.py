from __future__ import annotations

from app.application.dto.subscriptions import CreateSubscriptionOutput, IdempotentSubscription
from app.infrastructure.cache import idempotency_cache
from app.infrastructure.cache.idempotency_cache import InMemoryIdempotencyCache


def _entry(sub_id: str) -> IdempotentSubscription:
    return IdempotentSubscription(
        fingerprint=("fin-gold", "monthly", "cust-1"),
        output=CreateSubscriptionOutput(subscription={"id": sub_id}, total_count=12, replayed=False),
    )


def test_entries_expire_after_ttl(monkeypatch):
    clock = {"now": 100.0}
    monkeypatch.setattr(idempotency_cache.time, "monotonic", lambda: clock["now"])
    cache = InMemoryIdempotencyCache(ttl_seconds=10)

    cache.put(key="k-1", value=_entry("sub_1"))
    clock["now"] = 105.0
    hit = cache.get(key="k-1")
    clock["now"] = 111.0
    miss = cache.get(key="k-1")

    assert hit is not None
    assert hit.output.subscription["id"] == "sub_1"
    assert miss is None


def test_oldest_entry_is_evicted_when_full(monkeypatch):
    clock = {"now": 0.0}
    monkeypatch.setattr(idempotency_cache.time, "monotonic", lambda: clock["now"])
    cache = InMemoryIdempotencyCache(ttl_seconds=60, max_entries=2)

    for index, key in enumerate(["k-1", "k-2", "k-3"]):
        clock["now"] = float(index)
        cache.put(key=key, value=_entry(key))

    assert cache.get(key="k-1") is None
    assert cache.get(key="k-2") is not None
    assert cache.get(key="k-3") is not None


def test_zero_ttl_disables_cache():
    cache = InMemoryIdempotencyCache(ttl_seconds=0)

    cache.put(key="k-1", value=_entry("sub_1"))

    assert cache.get(key="k-1") is None
