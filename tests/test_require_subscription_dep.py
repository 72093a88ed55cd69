from __future__ import annotations

import pytest
from fastapi import HTTPException
from starlette.requests import Request

from app.api.deps import require_subscription
from app.application.use_cases.resolve_entitlement import ResolveEntitlementUseCase
from app.domain.entities.user import SessionState, UserSession


def _request(path: str = "/api/reports/daily", query: bytes = b"") -> Request:
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": path,
            "query_string": query,
            "headers": [],
        }
    )


def _session(*, role: str = "user", subscription_active: bool = False) -> SessionState:
    return SessionState.of(
        UserSession(user_id="user@example.com", role=role, subscription_active=subscription_active)
    )


def test_anonymous_user_is_redirected_to_login_with_next():
    dependency = require_subscription()

    with pytest.raises(HTTPException) as exc_info:
        dependency(
            request=_request(query=b"format=pdf"),
            state=SessionState.anonymous(),
            use_case=ResolveEntitlementUseCase(),
        )

    assert exc_info.value.status_code == 307
    assert exc_info.value.headers["Location"] == "/login?next=%2Fapi%2Freports%2Fdaily%3Fformat%3Dpdf"


def test_unsubscribed_user_is_redirected_to_subscribe():
    dependency = require_subscription()

    with pytest.raises(HTTPException) as exc_info:
        dependency(request=_request(), state=_session(), use_case=ResolveEntitlementUseCase())

    assert exc_info.value.status_code == 307
    assert exc_info.value.headers["Location"] == "/subscription?next=%2Fapi%2Freports%2Fdaily"


def test_unresolved_session_is_not_allowed():
    dependency = require_subscription()

    with pytest.raises(HTTPException) as exc_info:
        dependency(request=_request(), state=SessionState.loading(), use_case=ResolveEntitlementUseCase())

    assert exc_info.value.status_code == 503
    assert exc_info.value.headers["Retry-After"] == "1"


def test_admin_bypasses_subscription_requirement():
    dependency = require_subscription()

    session = dependency(
        request=_request(),
        state=_session(role="admin"),
        use_case=ResolveEntitlementUseCase(),
    )

    assert session.is_admin is True


def test_subscriber_is_allowed():
    dependency = require_subscription()

    session = dependency(
        request=_request(),
        state=_session(subscription_active=True),
        use_case=ResolveEntitlementUseCase(),
    )

    assert session.user_id == "user@example.com"


def test_open_route_allows_unsubscribed_user():
    dependency = require_subscription(requires_subscription=False)

    session = dependency(request=_request(path="/api/me/session"), state=_session(), use_case=ResolveEntitlementUseCase())

    assert session.subscription_active is False


def test_admin_only_dependency_redirects_non_admin_to_dashboard():
    dependency = require_subscription(requires_subscription=False, admin_only=True)

    with pytest.raises(HTTPException) as exc_info:
        dependency(
            request=_request(path="/api/admin/payments/history"),
            state=_session(subscription_active=True),
            use_case=ResolveEntitlementUseCase(),
        )

    assert exc_info.value.status_code == 307
    assert exc_info.value.headers["Location"] == "/dashboard"


def test_admin_only_dependency_returns_admin_session():
    dependency = require_subscription(requires_subscription=False, admin_only=True)

    session = dependency(
        request=_request(path="/api/admin/payments/history"),
        state=_session(role="admin"),
        use_case=ResolveEntitlementUseCase(),
    )

    assert session.is_admin is True
