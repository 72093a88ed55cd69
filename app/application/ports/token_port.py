from __future__ import annotations

from datetime import datetime
from typing import Protocol

from app.application.dto.auth import AccessTokenPayload
from app.domain.entities.user import UserSession


class TokenPort(Protocol):
    def create_access_token(self, *, session: UserSession, now: datetime) -> tuple[str, datetime]:
        ...

    def decode_access_token(self, *, token: str) -> AccessTokenPayload:
        ...
