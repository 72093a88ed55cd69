from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal


SubscriptionStatus = Literal[
    "created",
    "authenticated",
    "active",
    "pending",
    "halted",
    "cancelled",
    "completed",
    "expired",
]


@dataclass(frozen=True)
class SubscriptionRequest:
    plan_id: str
    interval: str
    customer_id: str | None
    idempotency_key: str | None = None


@dataclass(frozen=True)
class SubscriptionRecord:
    """Read-only projection of a gateway subscription."""

    id: str
    plan_id: str
    customer_id: str | None
    status: str
    current_period_start: datetime | None
    current_period_end: datetime | None
    attempt_count: int
    notes: dict[str, str] = field(default_factory=dict)


def is_subscription_active(status: str) -> bool:
    return status == "active"
