from __future__ import annotations

from functools import lru_cache
import logging
from urllib.parse import urlencode

from fastapi import Depends, Header, HTTPException, Request

from app.application.use_cases.create_subscription import CreateSubscriptionUseCase
from app.application.use_cases.download_report import DownloadReportUseCase
from app.application.use_cases.get_active_subscription import GetActiveSubscriptionUseCase
from app.application.use_cases.get_logo import GetLogoUseCase
from app.application.use_cases.get_payment_history import GetPaymentHistoryUseCase
from app.application.use_cases.initiate_payment import InitiatePaymentUseCase
from app.application.use_cases.list_plans import ListPlansUseCase
from app.application.use_cases.login import LoginUseCase
from app.application.use_cases.resolve_entitlement import ResolveEntitlementUseCase
from app.application.use_cases.verify_payment import VerifyPaymentUseCase
from app.domain.entities.user import SessionState, UserSession
from app.infrastructure.cache.idempotency_cache import InMemoryIdempotencyCache
from app.infrastructure.clients.razorpay_client import RazorpayClient, RazorpayClientSettings
from app.infrastructure.clients.sheets_backend_client import (
    SheetsBackendClient,
    SheetsBackendClientSettings,
)
from app.infrastructure.security.token_service import JwtTokenService
from app.shared.config import get_settings


logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
SUBSCRIBE_PATH = "/subscription"
DASHBOARD_PATH = "/dashboard"
SERVICE_MISCONFIGURED = "Service is not configured."


@lru_cache(maxsize=1)
def _get_razorpay_client() -> RazorpayClient:
    settings = get_settings()
    if not settings.razorpay_key_id or not settings.razorpay_key_secret:
        logger.error("deps: missing_config keys=RAZORPAY_KEY_ID,RAZORPAY_KEY_SECRET")
        raise HTTPException(status_code=500, detail=SERVICE_MISCONFIGURED)
    return RazorpayClient(
        RazorpayClientSettings(
            api_base=settings.razorpay_api_base,
            key_id=settings.razorpay_key_id,
            key_secret=settings.razorpay_key_secret,
            timeout_seconds=settings.gateway_timeout_seconds,
        )
    )


@lru_cache(maxsize=1)
def _get_sheets_backend_client() -> SheetsBackendClient:
    settings = get_settings()
    return SheetsBackendClient(
        SheetsBackendClientSettings(
            url=settings.sheets_backend_url,
            timeout_seconds=settings.sheets_timeout_seconds,
        )
    )


@lru_cache(maxsize=1)
def _get_idempotency_cache() -> InMemoryIdempotencyCache:
    return InMemoryIdempotencyCache(ttl_seconds=get_settings().idempotency_ttl_seconds)


@lru_cache(maxsize=1)
def _get_token_service() -> JwtTokenService:
    settings = get_settings()
    if not settings.jwt_secret:
        logger.error("deps: missing_config keys=JWT_SECRET")
        raise HTTPException(status_code=500, detail=SERVICE_MISCONFIGURED)
    return JwtTokenService(
        jwt_secret=settings.jwt_secret,
        access_ttl_minutes=settings.jwt_access_ttl_minutes,
    )


def get_list_plans_use_case() -> ListPlansUseCase:
    return ListPlansUseCase()


def get_create_subscription_use_case() -> CreateSubscriptionUseCase:
    return CreateSubscriptionUseCase(
        gateway_port=_get_razorpay_client(),
        idempotency_port=_get_idempotency_cache(),
    )


def get_verify_payment_use_case() -> VerifyPaymentUseCase:
    settings = get_settings()
    if not settings.razorpay_key_secret:
        logger.error("deps: missing_config keys=RAZORPAY_KEY_SECRET")
        raise HTTPException(status_code=500, detail=SERVICE_MISCONFIGURED)
    sheets_port = _get_sheets_backend_client() if settings.sheets_backend_url else None
    return VerifyPaymentUseCase(key_secret=settings.razorpay_key_secret, sheets_port=sheets_port)


def get_active_subscription_use_case() -> GetActiveSubscriptionUseCase:
    return GetActiveSubscriptionUseCase(gateway_port=_get_razorpay_client())


def get_resolve_entitlement_use_case() -> ResolveEntitlementUseCase:
    settings = get_settings()
    if not settings.razorpay_key_id or not settings.razorpay_key_secret:
        return ResolveEntitlementUseCase()
    return ResolveEntitlementUseCase(get_active_subscription_use_case=get_active_subscription_use_case())


def get_login_use_case() -> LoginUseCase:
    return LoginUseCase(sheets_port=_get_sheets_backend_client(), token_port=_get_token_service())


def get_initiate_payment_use_case() -> InitiatePaymentUseCase:
    return InitiatePaymentUseCase(sheets_port=_get_sheets_backend_client())


def get_payment_history_use_case() -> GetPaymentHistoryUseCase:
    return GetPaymentHistoryUseCase(sheets_port=_get_sheets_backend_client())


def get_download_report_use_case() -> DownloadReportUseCase:
    return DownloadReportUseCase(sheets_port=_get_sheets_backend_client())


def get_logo_use_case() -> GetLogoUseCase:
    return GetLogoUseCase(sheets_port=_get_sheets_backend_client())


def get_session_state(authorization: str | None = Header(default=None)) -> SessionState:
    if not authorization or not authorization.startswith("Bearer "):
        return SessionState.anonymous()
    token = authorization.replace("Bearer ", "", 1).strip()
    if not token:
        return SessionState.anonymous()

    try:
        payload = _get_token_service().decode_access_token(token=token)
    except ValueError as exc:
        logger.info("deps: invalid_access_token detail=%s", exc)
        return SessionState.anonymous()

    return SessionState.of(
        UserSession(
            user_id=payload.user_id,
            role=payload.role,
            subscription_active=payload.subscription_active,
            name=payload.name,
        )
    )


def get_current_session(state: SessionState = Depends(get_session_state)) -> UserSession:
    if state.session is None:
        raise HTTPException(status_code=401, detail="Authentication required.")
    return state.session


def _requested_location(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def require_subscription(requires_subscription: bool = True, admin_only: bool = False):
    def _dependency(
        request: Request,
        state: SessionState = Depends(get_session_state),
        use_case: ResolveEntitlementUseCase = Depends(get_resolve_entitlement_use_case),
    ) -> UserSession:
        requested = _requested_location(request)
        decision, resolved = use_case.execute(
            state=state,
            requires_subscription=requires_subscription,
            requested_location=requested,
            admin_only=admin_only,
        )
        if decision.outcome == "loading":
            raise HTTPException(
                status_code=503,
                detail="Session is still loading.",
                headers={"Retry-After": "1"},
            )
        if decision.outcome == "redirect_login":
            raise HTTPException(
                status_code=307,
                detail="Login required.",
                headers={"Location": f"{LOGIN_PATH}?{urlencode({'next': requested})}"},
            )
        if decision.outcome == "redirect_dashboard":
            raise HTTPException(
                status_code=307,
                detail="Admin access required.",
                headers={"Location": DASHBOARD_PATH},
            )
        if decision.outcome == "redirect_subscribe":
            raise HTTPException(
                status_code=307,
                detail="Active subscription required.",
                headers={"Location": f"{SUBSCRIBE_PATH}?{urlencode({'next': requested})}"},
            )
        if resolved.session is None:
            raise HTTPException(status_code=401, detail="Authentication required.")
        return resolved.session

    return _dependency
