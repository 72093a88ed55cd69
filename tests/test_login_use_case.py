from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from app.application.dto.auth import AccessTokenPayload, LoginInput, ValidatedLogin
from app.application.use_cases.login import LoginUseCase
from app.domain.entities.user import UserSession
from app.domain.exceptions import InvalidCredentialsError


class FakeSheetsPort:
    def __init__(self, validated: ValidatedLogin | None):
        self.validated = validated
        self.calls: list[tuple[str, str]] = []

    def validate_login(self, *, email: str, password: str) -> ValidatedLogin | None:
        self.calls.append((email, password))
        return self.validated


class FakeTokenPort:
    def __init__(self):
        self.sessions: list[UserSession] = []

    def create_access_token(self, *, session: UserSession, now: datetime) -> tuple[str, datetime]:
        self.sessions.append(session)
        return f"access-{session.user_id}", now + timedelta(minutes=60)

    def decode_access_token(self, *, token: str) -> AccessTokenPayload:
        raise NotImplementedError


def _validated(*, role: str = "user", expires_on: date | None = None, subscription_type: str | None = None):
    return ValidatedLogin(
        user_id="user@example.com",
        email="user@example.com",
        name="User",
        role=role,
        subscription_type=subscription_type,
        expires_on=expires_on,
    )


def test_login_normalizes_email_and_issues_token():
    sheets = FakeSheetsPort(_validated(expires_on=date(2099, 12, 31)))
    tokens = FakeTokenPort()
    use_case = LoginUseCase(sheets_port=sheets, token_port=tokens)

    output = use_case.execute(LoginInput(email="  User@Example.com ", password="pw"))

    assert sheets.calls == [("user@example.com", "pw")]
    assert output.access_token == "access-user@example.com"
    assert output.session.subscription_active is True
    assert tokens.sessions == [output.session]


def test_expired_subscription_yields_inactive_session():
    use_case = LoginUseCase(
        sheets_port=FakeSheetsPort(_validated(expires_on=date(2000, 1, 1))),
        token_port=FakeTokenPort(),
    )

    output = use_case.execute(LoginInput(email="user@example.com", password="pw"))

    assert output.session.subscription_active is False
    assert output.session.role == "user"


def test_lifetime_subscription_is_active_without_expiry():
    use_case = LoginUseCase(
        sheets_port=FakeSheetsPort(_validated(role="admin", subscription_type="lifetime")),
        token_port=FakeTokenPort(),
    )

    output = use_case.execute(LoginInput(email="admin@example.com", password="pw"))

    assert output.session.is_admin is True
    assert output.session.subscription_active is True


def test_rejected_credentials_raise():
    use_case = LoginUseCase(sheets_port=FakeSheetsPort(None), token_port=FakeTokenPort())

    with pytest.raises(InvalidCredentialsError):
        use_case.execute(LoginInput(email="user@example.com", password="wrong"))
