from __future__ import annotations

from typing import Protocol

from app.application.dto.auth import ValidatedLogin
from app.application.dto.payments import BackendPaymentConfirmation, InitiatedPayment
from app.domain.entities.payment import PaymentRecord
from app.domain.entities.report import Report


class SheetsBackendPort(Protocol):
    def validate_login(self, *, email: str, password: str) -> ValidatedLogin | None:
        ...

    def download_report(self, *, report_type: str) -> Report:
        ...

    def get_logo_image(self) -> str:
        ...

    def verify_payment(self, *, payment_id: str, subscription_id: str) -> BackendPaymentConfirmation:
        ...

    def initiate_payment(self, *, email: str, amount: int, plan_type: str) -> InitiatedPayment:
        ...

    def get_payment_history(self, *, email: str) -> list[PaymentRecord]:
        ...
