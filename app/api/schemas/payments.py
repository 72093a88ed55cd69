from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class InitiatePaymentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    plan_type: str = Field(default="test", alias="planType", min_length=1, max_length=64)
    amount: int = Field(default=7, gt=0)


class InitiatePaymentResponse(BaseModel):
    transaction_id: str
    order_id: str
    amount: int


class PaymentRecordResponse(BaseModel):
    transaction_id: str
    order_id: str
    email: str
    amount: Decimal
    status: str
    plan_type: str
    payment_id: str | None
    created_at: str | None
    updated_at: str | None


class PaymentHistoryResponse(BaseModel):
    payments: list[PaymentRecordResponse]
