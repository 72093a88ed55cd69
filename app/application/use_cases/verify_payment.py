from __future__ import annotations

import logging

from app.application.dto.subscriptions import VerifyPaymentInput, VerifyPaymentOutput
from app.application.ports.sheets_backend_port import SheetsBackendPort
from app.domain.exceptions import SignatureMismatchError, UpstreamUnavailableError
from app.domain.services.payment_signature import VerificationResult, verify_payment_signature


logger = logging.getLogger(__name__)


class VerifyPaymentUseCase:
    def __init__(self, *, key_secret: str, sheets_port: SheetsBackendPort | None = None):
        self._key_secret = key_secret
        self._sheets_port = sheets_port

    def execute(self, command: VerifyPaymentInput) -> VerifyPaymentOutput:
        result = verify_payment_signature(
            payment_id=command.payment_id,
            subscription_id=command.subscription_id,
            signature=command.signature,
            secret=self._key_secret,
        )
        if result is not VerificationResult.AUTHENTICATED:
            logger.warning(
                "verify_payment: signature_rejected payment_id=%s subscription_id=%s",
                command.payment_id,
                command.subscription_id,
            )
            raise SignatureMismatchError("Invalid signature")

        # Signature checked above, so both ids are present.
        payment_id = str(command.payment_id)
        subscription_id = str(command.subscription_id)

        recorded = False
        if self._sheets_port is not None:
            try:
                confirmation = self._sheets_port.verify_payment(
                    payment_id=payment_id,
                    subscription_id=subscription_id,
                )
                recorded = confirmation.success
            except UpstreamUnavailableError as exc:
                logger.warning(
                    "verify_payment: record_failed payment_id=%s subscription_id=%s detail=%s",
                    payment_id,
                    subscription_id,
                    exc,
                )

        return VerifyPaymentOutput(
            status="success",
            subscription_id=subscription_id,
            recorded=recorded,
        )
