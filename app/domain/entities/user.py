from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


UserRole = Literal["user", "admin"]


@dataclass(frozen=True)
class UserSession:
    user_id: str
    role: UserRole
    subscription_active: bool
    name: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


@dataclass(frozen=True)
class SessionState:
    """Client-held session as seen by the entitlement gate.

    ``resolved`` stays False while the session is still being established;
    ``session`` is None for anonymous visitors.
    """

    resolved: bool
    session: UserSession | None

    @classmethod
    def loading(cls) -> SessionState:
        return cls(resolved=False, session=None)

    @classmethod
    def anonymous(cls) -> SessionState:
        return cls(resolved=True, session=None)

    @classmethod
    def of(cls, session: UserSession) -> SessionState:
        return cls(resolved=True, session=session)
