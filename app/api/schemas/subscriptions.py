from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CreateSubscriptionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    plan_id: str | None = Field(default=None, alias="planId")
    interval: str | None = None
    customer_id: str | None = Field(default=None, alias="customerId")


class VerifyPaymentRequest(BaseModel):
    razorpay_payment_id: str | None = None
    razorpay_subscription_id: str | None = None
    razorpay_signature: str | None = None


class VerifyPaymentResponse(BaseModel):
    status: str
