from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class PaymentCallback:
    payment_id: str | None
    subscription_id: str | None
    signature: str | None


@dataclass(frozen=True)
class PaymentRecord:
    transaction_id: str
    order_id: str
    email: str
    amount: Decimal
    status: str
    plan_type: str
    payment_id: str | None
    created_at: str | None
    updated_at: str | None
