from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.deps import require_subscription
from app.api.schemas.auth import SessionResponse
from app.domain.entities.user import UserSession


router = APIRouter()


@router.get("/api/me/session", response_model=SessionResponse)
def get_session(session: UserSession = Depends(require_subscription(requires_subscription=False))):
    return SessionResponse(
        user_id=session.user_id,
        name=session.name,
        role=session.role,
        subscription_active=session.subscription_active,
    )
