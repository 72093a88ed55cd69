from __future__ import annotations

import logging

from app.application.ports.sheets_backend_port import SheetsBackendPort
from app.domain.entities.payment import PaymentRecord
from app.domain.exceptions import UpstreamUnavailableError


logger = logging.getLogger(__name__)


class GetPaymentHistoryUseCase:
    def __init__(self, *, sheets_port: SheetsBackendPort):
        self._sheets_port = sheets_port

    def execute(self, *, email: str) -> list[PaymentRecord]:
        try:
            return self._sheets_port.get_payment_history(email=email)
        except UpstreamUnavailableError as exc:
            logger.warning("get_payment_history: upstream_failed email=%s detail=%s", email, exc)
            return []
