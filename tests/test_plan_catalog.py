from __future__ import annotations

import pytest

from app.domain.exceptions import InvalidPlanError
from app.domain.services.plan_catalog import (
    PLAN_CATALOG,
    billing_cycle_count,
    list_plan_entries,
    lookup_plan,
)


def test_lookup_fin_silver_monthly():
    entry = lookup_plan("fin-silver", "monthly")

    assert entry.amount_minor_units == 9900
    assert entry.currency_code == "INR"
    assert billing_cycle_count(entry.interval) == 12


def test_lookup_t_fin_platinum_yearly():
    entry = lookup_plan("t-fin-platinum", "yearly")

    assert entry.amount_minor_units == 625000
    assert billing_cycle_count(entry.interval) == 1


@pytest.mark.parametrize(
    ("plan_id", "interval"),
    [
        ("fin-bronze", "monthly"),
        ("fin-silver", "weekly"),
        ("", ""),
        ("FIN-SILVER", "monthly"),
    ],
)
def test_lookup_rejects_unknown_combinations(plan_id: str, interval: str):
    with pytest.raises(InvalidPlanError):
        lookup_plan(plan_id, interval)


def test_billing_cycles_follow_interval_for_every_entry():
    for entry in PLAN_CATALOG.values():
        expected = 12 if entry.interval == "monthly" else 1
        assert billing_cycle_count(entry.interval) == expected


def test_list_plan_entries_is_sorted_and_complete():
    entries = list_plan_entries()

    assert len(entries) == 12
    keys = [(entry.plan_id, entry.interval) for entry in entries]
    assert keys == sorted(keys)
    assert all(entry.amount_minor_units >= 0 for entry in entries)
