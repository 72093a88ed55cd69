from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import (
    get_current_session,
    get_initiate_payment_use_case,
    get_payment_history_use_case,
    require_subscription,
)
from app.api.schemas.payments import (
    InitiatePaymentRequest,
    InitiatePaymentResponse,
    PaymentHistoryResponse,
    PaymentRecordResponse,
)
from app.application.dto.payments import InitiatePaymentInput
from app.application.use_cases.get_payment_history import GetPaymentHistoryUseCase
from app.application.use_cases.initiate_payment import InitiatePaymentUseCase
from app.domain.entities.payment import PaymentRecord
from app.domain.entities.user import UserSession
from app.domain.exceptions import UpstreamUnavailableError


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/api/payments", response_model=InitiatePaymentResponse)
def initiate_payment(
    req: InitiatePaymentRequest,
    session: UserSession = Depends(get_current_session),
    use_case: InitiatePaymentUseCase = Depends(get_initiate_payment_use_case),
):
    try:
        output = use_case.execute(
            InitiatePaymentInput(
                email=session.user_id,
                plan_type=req.plan_type,
                amount=req.amount,
            )
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except UpstreamUnavailableError as exc:
        logger.warning("payments_router: initiate_failed user=%s detail=%s", session.user_id, exc)
        raise HTTPException(status_code=500, detail="Failed to initiate payment") from exc

    return InitiatePaymentResponse(
        transaction_id=output.transaction_id,
        order_id=output.order_id,
        amount=output.amount_minor_units,
    )


@router.get("/api/payments/history", response_model=PaymentHistoryResponse)
def payment_history(
    session: UserSession = Depends(get_current_session),
    use_case: GetPaymentHistoryUseCase = Depends(get_payment_history_use_case),
):
    return _history_response(use_case.execute(email=session.user_id))


@router.get("/api/admin/payments/history", response_model=PaymentHistoryResponse)
def customer_payment_history(
    email: str = Query(..., min_length=3, max_length=255),
    session: UserSession = Depends(require_subscription(requires_subscription=False, admin_only=True)),
    use_case: GetPaymentHistoryUseCase = Depends(get_payment_history_use_case),
):
    logger.info("payments_router: admin_history admin=%s customer=%s", session.user_id, email)
    return _history_response(use_case.execute(email=email.strip().lower()))


def _history_response(records: list[PaymentRecord]) -> PaymentHistoryResponse:
    return PaymentHistoryResponse(
        payments=[
            PaymentRecordResponse(
                transaction_id=record.transaction_id,
                order_id=record.order_id,
                email=record.email,
                amount=record.amount,
                status=record.status,
                plan_type=record.plan_type,
                payment_id=record.payment_id,
                created_at=record.created_at,
                updated_at=record.updated_at,
            )
            for record in records
        ]
    )
