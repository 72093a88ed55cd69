from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, HTTPException

from app.api.deps import (
    get_active_subscription_use_case,
    get_create_subscription_use_case,
    get_verify_payment_use_case,
)
from app.api.schemas.subscriptions import (
    CreateSubscriptionRequest,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from app.application.dto.subscriptions import CreateSubscriptionInput, VerifyPaymentInput
from app.application.use_cases.create_subscription import CreateSubscriptionUseCase
from app.application.use_cases.get_active_subscription import GetActiveSubscriptionUseCase
from app.application.use_cases.verify_payment import VerifyPaymentUseCase
from app.domain.exceptions import (
    IdempotencyConflictError,
    InvalidPlanError,
    MalformedCallbackError,
    NoActiveSubscriptionError,
    SignatureMismatchError,
    SubscriptionCreationError,
    UpstreamUnavailableError,
)


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/api/subscriptions")
def create_subscription(
    req: CreateSubscriptionRequest,
    idempotency_key: str | None = Header(default=None, alias="Idempotency-Key"),
    use_case: CreateSubscriptionUseCase = Depends(get_create_subscription_use_case),
):
    try:
        output = use_case.execute(
            CreateSubscriptionInput(
                plan_id=req.plan_id or "",
                interval=req.interval or "",
                customer_id=req.customer_id,
                idempotency_key=idempotency_key or None,
            )
        )
    except InvalidPlanError as exc:
        raise HTTPException(status_code=400, detail="Invalid plan or interval") from exc
    except IdempotencyConflictError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except SubscriptionCreationError as exc:
        raise HTTPException(status_code=500, detail="Failed to create subscription") from exc

    return output.subscription


@router.post("/api/subscriptions/verify", response_model=VerifyPaymentResponse)
def verify_payment(
    req: VerifyPaymentRequest,
    use_case: VerifyPaymentUseCase = Depends(get_verify_payment_use_case),
):
    try:
        output = use_case.execute(
            VerifyPaymentInput(
                payment_id=req.razorpay_payment_id,
                subscription_id=req.razorpay_subscription_id,
                signature=req.razorpay_signature,
            )
        )
    except MalformedCallbackError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except SignatureMismatchError as exc:
        raise HTTPException(status_code=400, detail="Invalid signature") from exc

    return VerifyPaymentResponse(status=output.status)


@router.get("/api/subscriptions/active")
def get_active_subscription(
    x_customer_id: str | None = Header(default=None, alias="x-customer-id"),
    use_case: GetActiveSubscriptionUseCase = Depends(get_active_subscription_use_case),
):
    if not x_customer_id:
        raise HTTPException(status_code=401, detail="Customer ID required")

    try:
        output = use_case.execute(customer_id=x_customer_id)
    except NoActiveSubscriptionError as exc:
        raise HTTPException(status_code=404, detail="No active subscription found") from exc
    except UpstreamUnavailableError as exc:
        logger.warning("subscriptions_router: active_lookup_failed customer=%s detail=%s", x_customer_id, exc)
        raise HTTPException(status_code=500, detail="Failed to fetch subscription") from exc

    return output.subscription
