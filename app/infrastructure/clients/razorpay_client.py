from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
from typing import Any

import httpx

from app.application.dto.subscriptions import GatewaySubscription
from app.application.ports.payment_gateway_port import PaymentGatewayPort
from app.domain.entities.subscription import SubscriptionRecord
from app.domain.exceptions import UpstreamUnavailableError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RazorpayClientSettings:
    api_base: str
    key_id: str
    key_secret: str
    timeout_seconds: float


class RazorpayClient(PaymentGatewayPort):
    def __init__(self, settings: RazorpayClientSettings, *, transport: httpx.BaseTransport | None = None):
        self._settings = settings
        self._transport = transport

    def create_subscription(
        self,
        *,
        plan_id: str,
        total_count: int,
        customer_notify: bool,
        notes: dict[str, str],
    ) -> GatewaySubscription:
        payload = {
            "plan_id": plan_id,
            "customer_notify": 1 if customer_notify else 0,
            "quantity": 1,
            "total_count": total_count,
            "notes": notes,
        }
        data = self._request("POST", "/subscriptions", json_payload=payload)
        if not data.get("id"):
            raise UpstreamUnavailableError("Razorpay subscription response is incomplete.")
        return GatewaySubscription(record=_to_record(data), raw=data)

    def list_subscriptions(self, *, created_from: datetime, count: int) -> list[GatewaySubscription]:
        params = {"from": int(created_from.timestamp()), "count": count}
        data = self._request("GET", "/subscriptions", params=params)
        items = data.get("items", [])
        if not isinstance(items, list):
            raise UpstreamUnavailableError("Unexpected subscriptions list from Razorpay.")
        return [GatewaySubscription(record=_to_record(item), raw=item) for item in items if isinstance(item, dict)]

    def _request(
        self,
        method: str,
        path: str,
        *,
        json_payload: dict | None = None,
        params: dict | None = None,
    ) -> dict[str, Any]:
        url = f"{self._settings.api_base.rstrip('/')}/{path.lstrip('/')}"
        try:
            with httpx.Client(
                timeout=self._settings.timeout_seconds,
                auth=(self._settings.key_id, self._settings.key_secret),
                transport=self._transport,
            ) as client:
                response = client.request(method, url, json=json_payload, params=params)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "razorpay_client: http_error method=%s path=%s status=%s",
                method,
                path,
                exc.response.status_code,
            )
            raise UpstreamUnavailableError("Razorpay rejected the request.") from exc
        except httpx.HTTPError as exc:
            logger.warning("razorpay_client: transport_error method=%s path=%s detail=%s", method, path, exc)
            raise UpstreamUnavailableError("Failed to contact Razorpay.") from exc
        except ValueError as exc:
            raise UpstreamUnavailableError("Invalid response received from Razorpay.") from exc

        if not isinstance(payload, dict):
            raise UpstreamUnavailableError("Unexpected response format from Razorpay.")
        return payload


def _to_record(data: dict[str, Any]) -> SubscriptionRecord:
    notes = data.get("notes") or {}
    if not isinstance(notes, dict):
        # The API returns an empty list when no notes were attached.
        notes = {}
    try:
        return _build_record(data, notes)
    except (TypeError, ValueError, OverflowError, OSError) as exc:
        logger.warning("razorpay_client: invalid_subscription id=%s detail=%s", data.get("id"), exc)
        raise UpstreamUnavailableError("Unexpected subscription payload from Razorpay.") from exc


def _build_record(data: dict[str, Any], notes: dict[str, Any]) -> SubscriptionRecord:
    return SubscriptionRecord(
        id=str(data.get("id", "")),
        plan_id=str(data.get("plan_id", "")),
        customer_id=str(notes["customerId"]) if notes.get("customerId") else None,
        status=str(data.get("status", "")),
        current_period_start=_to_datetime(data.get("current_start")),
        current_period_end=_to_datetime(data.get("current_end")),
        attempt_count=int(data.get("auth_attempts") or 0),
        notes={str(key): str(value) for key, value in notes.items()},
    )


def _to_datetime(value: int | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(int(value), tz=timezone.utc)
