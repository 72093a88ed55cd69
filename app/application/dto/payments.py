from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class InitiatePaymentInput:
    email: str
    plan_type: str
    amount: int


@dataclass(frozen=True)
class InitiatedPayment:
    transaction_id: str
    order_id: str
    amount_minor_units: int


@dataclass(frozen=True)
class BackendPaymentConfirmation:
    success: bool
    message: str
    expiry_date: str | None
