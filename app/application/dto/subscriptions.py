from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from app.domain.entities.subscription import SubscriptionRecord


@dataclass(frozen=True)
class GatewaySubscription:
    record: SubscriptionRecord
    raw: dict[str, Any]


@dataclass(frozen=True)
class CreateSubscriptionInput:
    plan_id: str
    interval: str
    customer_id: str | None
    idempotency_key: str | None = None


@dataclass(frozen=True)
class CreateSubscriptionOutput:
    subscription: dict[str, Any]
    total_count: int
    replayed: bool


@dataclass(frozen=True)
class IdempotentSubscription:
    fingerprint: tuple[str, str, str | None]
    output: CreateSubscriptionOutput


@dataclass(frozen=True)
class VerifyPaymentInput:
    payment_id: str | None
    subscription_id: str | None
    signature: str | None


@dataclass(frozen=True)
class VerifyPaymentOutput:
    status: str
    subscription_id: str
    recorded: bool


@dataclass(frozen=True)
class ActiveSubscriptionOutput:
    record: SubscriptionRecord
    subscription: dict[str, Any]
