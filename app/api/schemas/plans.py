from __future__ import annotations

from pydantic import BaseModel


class PlanResponse(BaseModel):
    plan_id: str
    interval: str
    amount_minor_units: int
    currency_code: str
    total_count: int


class PlanListResponse(BaseModel):
    plans: list[PlanResponse]
