from __future__ import annotations

from datetime import datetime, timedelta, timezone

from app.application.dto.subscriptions import ActiveSubscriptionOutput
from app.application.ports.payment_gateway_port import PaymentGatewayPort
from app.domain.entities.subscription import is_subscription_active
from app.domain.exceptions import NoActiveSubscriptionError


LOOKBACK = timedelta(days=30)
PAGE_SIZE = 100


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GetActiveSubscriptionUseCase:
    def __init__(self, *, gateway_port: PaymentGatewayPort):
        self._gateway_port = gateway_port

    def execute(self, *, customer_id: str, now: datetime | None = None) -> ActiveSubscriptionOutput:
        now = now or utcnow()
        subscriptions = self._gateway_port.list_subscriptions(
            created_from=now - LOOKBACK,
            count=PAGE_SIZE,
        )
        for item in subscriptions:
            if item.record.customer_id == customer_id and is_subscription_active(item.record.status):
                return ActiveSubscriptionOutput(record=item.record, subscription=item.raw)
        raise NoActiveSubscriptionError("No active subscription found")
