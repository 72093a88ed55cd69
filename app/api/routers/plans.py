from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.deps import get_list_plans_use_case
from app.api.schemas.plans import PlanListResponse, PlanResponse
from app.application.use_cases.list_plans import ListPlansUseCase


router = APIRouter()


@router.get("/api/plans", response_model=PlanListResponse)
def list_plans(use_case: ListPlansUseCase = Depends(get_list_plans_use_case)):
    return PlanListResponse(
        plans=[
            PlanResponse(
                plan_id=entry.plan_id,
                interval=entry.interval,
                amount_minor_units=entry.amount_minor_units,
                currency_code=entry.currency_code,
                total_count=total_count,
            )
            for entry, total_count in use_case.execute()
        ]
    )
