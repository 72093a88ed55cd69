from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


BillingInterval = Literal["monthly", "yearly"]

BILLING_INTERVALS: tuple[BillingInterval, ...] = ("monthly", "yearly")


@dataclass(frozen=True)
class PlanEntry:
    plan_id: str
    interval: BillingInterval
    amount_minor_units: int
    currency_code: str
