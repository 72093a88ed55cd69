from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_login_use_case
from app.api.schemas.auth import AuthTokenResponse, LoginRequest, SessionResponse
from app.application.dto.auth import LoginInput
from app.application.use_cases.login import LoginUseCase
from app.domain.exceptions import InvalidCredentialsError, UpstreamUnavailableError


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/api/auth/login", response_model=AuthTokenResponse)
def login(
    req: LoginRequest,
    use_case: LoginUseCase = Depends(get_login_use_case),
):
    try:
        output = use_case.execute(LoginInput(email=req.email, password=req.password))
    except InvalidCredentialsError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    except UpstreamUnavailableError as exc:
        logger.warning("auth_router: login_upstream_failed detail=%s", exc)
        raise HTTPException(
            status_code=500,
            detail="An error occurred during login. Please try again.",
        ) from exc

    return AuthTokenResponse(
        access_token=output.access_token,
        access_expires_at=output.access_expires_at,
        session=SessionResponse(
            user_id=output.session.user_id,
            name=output.session.name,
            role=output.session.role,
            subscription_active=output.session.subscription_active,
        ),
    )
