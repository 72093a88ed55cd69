"""Client for the spreadsheet-script backend.

Every call is a JSON POST to a single URL with an ``action`` discriminator.
Replies follow ``{"success": bool, "message": str, "data": ...}``.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
import logging
from typing import Any

import httpx

from app.application.dto.auth import ValidatedLogin
from app.application.dto.payments import BackendPaymentConfirmation, InitiatedPayment
from app.application.ports.sheets_backend_port import SheetsBackendPort
from app.domain.entities.payment import PaymentRecord
from app.domain.entities.report import Report
from app.domain.exceptions import UpstreamUnavailableError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SheetsBackendClientSettings:
    url: str
    timeout_seconds: float


class SheetsBackendClient(SheetsBackendPort):
    def __init__(self, settings: SheetsBackendClientSettings, *, transport: httpx.BaseTransport | None = None):
        self._settings = settings
        self._transport = transport

    def validate_login(self, *, email: str, password: str) -> ValidatedLogin | None:
        reply = self._call("validateLogin", {"email": email, "password": password})
        if not reply.get("success"):
            return None

        data = _as_dict(reply.get("data"))
        user = _as_dict(data.get("user")) or data
        # Older script versions return the subscription columns flat on the user row.
        subscription = _as_dict(user.get("subscription")) or user
        role = "admin" if str(user.get("role", "")).lower() == "admin" else "user"
        return ValidatedLogin(
            user_id=str(user.get("id") or user.get("email") or email),
            email=str(user.get("email") or email),
            name=_optional_str(user.get("name") or reply.get("clientName")),
            role=role,
            subscription_type=_optional_str(subscription.get("subscriptionType")),
            expires_on=_to_date(subscription.get("expiryOn") or subscription.get("expiryDate")),
        )

    def download_report(self, *, report_type: str) -> Report:
        reply = self._call("downloadReport", {"type": report_type})
        data = self._require_data(reply, action="downloadReport")
        filename = data.get("filename")
        content = data.get("content")
        if not filename or content is None:
            raise UpstreamUnavailableError("Report payload is incomplete.")
        return Report(
            filename=str(filename),
            content=str(content),
            mime_type=str(data.get("mimeType") or "application/octet-stream"),
        )

    def get_logo_image(self) -> str:
        reply = self._call("getLogo", {})
        data = reply.get("data") or {}
        if not reply.get("success") or not isinstance(data, dict):
            return ""
        return str(data.get("logo") or "")

    def verify_payment(self, *, payment_id: str, subscription_id: str) -> BackendPaymentConfirmation:
        reply = self._call(
            "verifyPayment",
            {"paymentId": payment_id, "subscriptionId": subscription_id},
        )
        data = reply.get("data") or {}
        return BackendPaymentConfirmation(
            success=bool(reply.get("success")),
            message=str(reply.get("message") or ""),
            expiry_date=data.get("expiryDate") if isinstance(data, dict) else None,
        )

    def initiate_payment(self, *, email: str, amount: int, plan_type: str) -> InitiatedPayment:
        reply = self._call(
            "initiatePayment",
            {"email": email, "amount": amount, "planType": plan_type},
        )
        data = self._require_data(reply, action="initiatePayment")
        try:
            return InitiatedPayment(
                transaction_id=str(data["transactionId"]),
                order_id=str(data["orderId"]),
                amount_minor_units=int(data["amount"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise UpstreamUnavailableError("initiatePayment response is incomplete.") from exc

    def get_payment_history(self, *, email: str) -> list[PaymentRecord]:
        reply = self._call("getPaymentHistory", {"email": email})
        rows = reply.get("data")
        if not isinstance(rows, list):
            return []
        records = []
        for row in rows:
            if not isinstance(row, dict):
                continue
            record = _to_payment_record(row, email=email)
            if record is not None:
                records.append(record)
        return records

    def _require_data(self, reply: dict[str, Any], *, action: str) -> dict[str, Any]:
        data = reply.get("data")
        if not reply.get("success") or not isinstance(data, dict):
            logger.warning(
                "sheets_backend_client: action_failed action=%s message=%s",
                action,
                reply.get("message"),
            )
            raise UpstreamUnavailableError(f"{action} failed.")
        return data

    def _call(self, action: str, payload: dict[str, Any]) -> dict[str, Any]:
        if not self._settings.url:
            raise UpstreamUnavailableError("Spreadsheet backend URL is not configured.")

        body = {"action": action, **payload}
        try:
            # Apps Script web apps answer POSTs with a redirect to the result.
            with httpx.Client(
                timeout=self._settings.timeout_seconds,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = client.post(self._settings.url, json=body)
                response.raise_for_status()
                reply = response.json()
        except httpx.HTTPError as exc:
            logger.warning("sheets_backend_client: request_failed action=%s detail=%s", action, exc)
            raise UpstreamUnavailableError("Spreadsheet backend is unavailable.") from exc
        except ValueError as exc:
            logger.warning("sheets_backend_client: invalid_json action=%s", action)
            raise UpstreamUnavailableError("Spreadsheet backend returned invalid JSON.") from exc

        if isinstance(reply, list):
            return {"success": True, "data": reply}
        if not isinstance(reply, dict):
            raise UpstreamUnavailableError("Unexpected response from spreadsheet backend.")
        return reply


def _to_date(value: Any) -> date | None:
    if not value:
        return None
    text = str(value)
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        logger.warning("sheets_backend_client: unparseable_expiry value=%s", text)
        return None


def _to_payment_record(row: dict[str, Any], *, email: str) -> PaymentRecord | None:
    amount = _to_amount(row.get("amount"))
    if amount is None:
        logger.warning(
            "sheets_backend_client: skipped_payment_row transaction_id=%s amount=%s",
            row.get("transactionId"),
            row.get("amount"),
        )
        return None
    return PaymentRecord(
        transaction_id=str(row.get("transactionId") or row.get("id") or ""),
        order_id=str(row.get("orderId") or ""),
        email=str(row.get("email") or email),
        amount=amount,
        status=str(row.get("status") or "pending"),
        plan_type=str(row.get("planType") or ""),
        payment_id=_optional_str(row.get("paymentId")),
        created_at=_optional_str(row.get("createdAt")),
        updated_at=_optional_str(row.get("updatedAt")),
    )


def _to_amount(value: Any) -> Decimal | None:
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, bool):
        return None
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}
