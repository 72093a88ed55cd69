from __future__ import annotations

import logging

from app.application.dto.subscriptions import (
    CreateSubscriptionInput,
    CreateSubscriptionOutput,
    IdempotentSubscription,
)
from app.application.ports.idempotency_port import IdempotencyPort
from app.application.ports.payment_gateway_port import PaymentGatewayPort
from app.domain.exceptions import (
    IdempotencyConflictError,
    SubscriptionCreationError,
    UpstreamUnavailableError,
)
from app.domain.services.plan_catalog import billing_cycle_count, lookup_plan


logger = logging.getLogger(__name__)


class CreateSubscriptionUseCase:
    def __init__(
        self,
        *,
        gateway_port: PaymentGatewayPort,
        idempotency_port: IdempotencyPort | None = None,
    ):
        self._gateway_port = gateway_port
        self._idempotency_port = idempotency_port

    def execute(self, command: CreateSubscriptionInput) -> CreateSubscriptionOutput:
        plan = lookup_plan(command.plan_id, command.interval)
        fingerprint = (plan.plan_id, plan.interval, command.customer_id)

        if command.idempotency_key and self._idempotency_port is not None:
            previous = self._idempotency_port.get(key=command.idempotency_key)
            if previous is not None:
                if previous.fingerprint != fingerprint:
                    raise IdempotencyConflictError(
                        "Idempotency-Key was already used with different parameters."
                    )
                logger.info(
                    "create_subscription: replay key=%s subscription_id=%s",
                    command.idempotency_key,
                    previous.output.subscription.get("id"),
                )
                return CreateSubscriptionOutput(
                    subscription=previous.output.subscription,
                    total_count=previous.output.total_count,
                    replayed=True,
                )

        total_count = billing_cycle_count(plan.interval)
        notes = {
            "customerId": command.customer_id or "",
            "planId": plan.plan_id,
            "interval": plan.interval,
        }
        try:
            created = self._gateway_port.create_subscription(
                plan_id=plan.plan_id,
                total_count=total_count,
                customer_notify=True,
                notes=notes,
            )
        except UpstreamUnavailableError as exc:
            logger.warning(
                "create_subscription: gateway_failed plan=%s interval=%s customer=%s detail=%s",
                plan.plan_id,
                plan.interval,
                command.customer_id,
                exc,
            )
            raise SubscriptionCreationError("Failed to create subscription") from exc

        output = CreateSubscriptionOutput(
            subscription=created.raw,
            total_count=total_count,
            replayed=False,
        )
        if command.idempotency_key and self._idempotency_port is not None:
            self._idempotency_port.put(
                key=command.idempotency_key,
                value=IdempotentSubscription(fingerprint=fingerprint, output=output),
            )

        logger.info(
            "create_subscription: created subscription_id=%s plan=%s interval=%s total_count=%s",
            created.record.id,
            plan.plan_id,
            plan.interval,
            total_count,
        )
        return output
