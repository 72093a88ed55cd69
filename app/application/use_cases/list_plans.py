from __future__ import annotations

from app.domain.entities.plan import PlanEntry
from app.domain.services.plan_catalog import billing_cycle_count, list_plan_entries


class ListPlansUseCase:
    def execute(self) -> list[tuple[PlanEntry, int]]:
        return [(entry, billing_cycle_count(entry.interval)) for entry in list_plan_entries()]
