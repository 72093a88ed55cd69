from __future__ import annotations

from app.domain.entities.plan import BillingInterval, PlanEntry
from app.domain.exceptions import InvalidPlanError


# Amounts in paise.
_PRICES: dict[str, dict[BillingInterval, int]] = {
    "fin-silver": {"monthly": 9900, "yearly": 99000},
    "fin-gold": {"monthly": 29900, "yearly": 299000},
    "fin-platinum": {"monthly": 49900, "yearly": 499000},
    "t-fin-silver": {"monthly": 22500, "yearly": 225000},
    "t-fin-gold": {"monthly": 42500, "yearly": 425000},
    "t-fin-platinum": {"monthly": 62500, "yearly": 625000},
}

DEFAULT_CURRENCY = "INR"

PLAN_CATALOG: dict[tuple[str, str], PlanEntry] = {
    (plan_id, interval): PlanEntry(
        plan_id=plan_id,
        interval=interval,
        amount_minor_units=amount,
        currency_code=DEFAULT_CURRENCY,
    )
    for plan_id, by_interval in _PRICES.items()
    for interval, amount in by_interval.items()
}

MONTHLY_BILLING_CYCLES = 12
YEARLY_BILLING_CYCLES = 1


def lookup_plan(plan_id: str, interval: str) -> PlanEntry:
    entry = PLAN_CATALOG.get((plan_id, interval))
    if entry is None:
        raise InvalidPlanError("Invalid plan or interval")
    return entry


def list_plan_entries() -> list[PlanEntry]:
    return sorted(PLAN_CATALOG.values(), key=lambda entry: (entry.plan_id, entry.interval))


def billing_cycle_count(interval: str) -> int:
    if interval == "monthly":
        return MONTHLY_BILLING_CYCLES
    if interval == "yearly":
        return YEARLY_BILLING_CYCLES
    raise InvalidPlanError("Invalid plan or interval")
