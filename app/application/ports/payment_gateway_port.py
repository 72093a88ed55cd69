from __future__ import annotations

from datetime import datetime
from typing import Protocol

from app.application.dto.subscriptions import GatewaySubscription


class PaymentGatewayPort(Protocol):
    def create_subscription(
        self,
        *,
        plan_id: str,
        total_count: int,
        customer_notify: bool,
        notes: dict[str, str],
    ) -> GatewaySubscription:
        ...

    def list_subscriptions(self, *, created_from: datetime, count: int) -> list[GatewaySubscription]:
        ...
