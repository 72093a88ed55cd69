from __future__ import annotations

from app.application.dto.payments import InitiatedPayment, InitiatePaymentInput
from app.application.ports.sheets_backend_port import SheetsBackendPort


class InitiatePaymentUseCase:
    def __init__(self, *, sheets_port: SheetsBackendPort):
        self._sheets_port = sheets_port

    def execute(self, command: InitiatePaymentInput) -> InitiatedPayment:
        if command.amount <= 0:
            raise ValueError("amount must be positive.")
        return self._sheets_port.initiate_payment(
            email=command.email,
            amount=command.amount,
            plan_type=command.plan_type,
        )
