from __future__ import annotations

from datetime import datetime, timezone

from app.application.dto.auth import LoginInput, LoginOutput
from app.application.ports.sheets_backend_port import SheetsBackendPort
from app.application.ports.token_port import TokenPort
from app.domain.entities.user import UserSession
from app.domain.exceptions import InvalidCredentialsError
from app.domain.services.entitlements import is_subscription_current


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class LoginUseCase:
    def __init__(self, *, sheets_port: SheetsBackendPort, token_port: TokenPort):
        self._sheets_port = sheets_port
        self._token_port = token_port

    def execute(self, command: LoginInput) -> LoginOutput:
        email = normalize_email(command.email)
        if not email or not command.password:
            raise InvalidCredentialsError("Invalid email or password")

        validated = self._sheets_port.validate_login(email=email, password=command.password)
        if validated is None:
            raise InvalidCredentialsError("Invalid email or password")

        now = utcnow()
        session = UserSession(
            user_id=validated.user_id,
            role=validated.role,
            subscription_active=is_subscription_current(
                expires_on=validated.expires_on,
                today=now.date(),
                subscription_type=validated.subscription_type,
            ),
            name=validated.name,
        )
        access_token, access_expires_at = self._token_port.create_access_token(session=session, now=now)
        return LoginOutput(
            access_token=access_token,
            access_expires_at=access_expires_at,
            session=session,
        )
