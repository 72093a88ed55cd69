"""Authentication of payment gateway callbacks.

The gateway signs ``"<payment_id>|<subscription_id>"`` with the account key
secret using HMAC-SHA256 and sends the hex digest along with the callback.
"""
from __future__ import annotations

import hashlib
import hmac
from enum import Enum

from app.domain.entities.payment import PaymentCallback
from app.domain.exceptions import MalformedCallbackError


class VerificationResult(str, Enum):
    AUTHENTICATED = "authenticated"
    REJECTED = "rejected"


def compute_signature(*, payment_id: str, subscription_id: str, secret: str) -> str:
    message = f"{payment_id}|{subscription_id}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def verify_payment_signature(
    *,
    payment_id: str | None,
    subscription_id: str | None,
    signature: str | None,
    secret: str,
) -> VerificationResult:
    if not payment_id or not subscription_id or not signature:
        raise MalformedCallbackError("Missing payment confirmation fields.")

    expected = compute_signature(
        payment_id=payment_id,
        subscription_id=subscription_id,
        secret=secret,
    )
    if hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8")):
        return VerificationResult.AUTHENTICATED
    return VerificationResult.REJECTED


def verify_callback(callback: PaymentCallback, *, secret: str) -> VerificationResult:
    return verify_payment_signature(
        payment_id=callback.payment_id,
        subscription_id=callback.subscription_id,
        signature=callback.signature,
        secret=secret,
    )
