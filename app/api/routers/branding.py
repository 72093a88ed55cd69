from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.deps import get_logo_use_case
from app.api.schemas.branding import LogoResponse
from app.application.use_cases.get_logo import GetLogoUseCase


router = APIRouter()


@router.get("/api/branding/logo", response_model=LogoResponse)
def get_logo(use_case: GetLogoUseCase = Depends(get_logo_use_case)):
    return LogoResponse(logo=use_case.execute())
