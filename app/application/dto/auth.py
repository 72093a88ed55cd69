from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from app.domain.entities.user import UserRole, UserSession


@dataclass(frozen=True)
class LoginInput:
    email: str
    password: str


@dataclass(frozen=True)
class ValidatedLogin:
    user_id: str
    email: str
    name: str | None
    role: UserRole
    subscription_type: str | None
    expires_on: date | None


@dataclass(frozen=True)
class LoginOutput:
    access_token: str
    access_expires_at: datetime
    session: UserSession


@dataclass(frozen=True)
class AccessTokenPayload:
    user_id: str
    role: UserRole
    subscription_active: bool
    name: str | None
