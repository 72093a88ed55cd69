from __future__ import annotations

from threading import Lock
import time

from app.application.dto.subscriptions import IdempotentSubscription
from app.application.ports.idempotency_port import IdempotencyPort


class InMemoryIdempotencyCache(IdempotencyPort):
    def __init__(self, ttl_seconds: float = 86400, max_entries: int = 10000):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._entries: dict[str, tuple[float, IdempotentSubscription]] = {}
        self._lock = Lock()

    def get(self, *, key: str) -> IdempotentSubscription | None:
        if self.ttl_seconds <= 0:
            return None
        now = time.monotonic()
        with self._lock:
            cached = self._entries.get(key)
            if cached is None:
                return None
            expires_at, value = cached
            if expires_at <= now:
                self._entries.pop(key, None)
                return None
            return value

    def put(self, *, key: str, value: IdempotentSubscription) -> None:
        if self.ttl_seconds <= 0:
            return
        now = time.monotonic()
        with self._lock:
            if len(self._entries) >= self.max_entries:
                self._evict_expired(now)
            if len(self._entries) >= self.max_entries:
                oldest = min(self._entries, key=lambda k: self._entries[k][0])
                self._entries.pop(oldest, None)
            self._entries[key] = (now + self.ttl_seconds, value)

    def _evict_expired(self, now: float) -> None:
        expired = [key for key, (expires_at, _) in self._entries.items() if expires_at <= now]
        for key in expired:
            self._entries.pop(key, None)
