from __future__ import annotations

from typing import Protocol

from app.application.dto.subscriptions import IdempotentSubscription


class IdempotencyPort(Protocol):
    def get(self, *, key: str) -> IdempotentSubscription | None:
        ...

    def put(self, *, key: str, value: IdempotentSubscription) -> None:
        ...
