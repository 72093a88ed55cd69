from __future__ import annotations

from datetime import date

from app.domain.entities.entitlement import EntitlementDecision
from app.domain.entities.user import SessionState


LIFETIME_SUBSCRIPTION_TYPE = "lifetime"


def decide_entitlement(
    *,
    state: SessionState,
    requires_subscription: bool,
    requested_location: str | None = None,
    admin_only: bool = False,
) -> EntitlementDecision:
    if not state.resolved:
        return EntitlementDecision(outcome="loading", state="unresolved")

    session = state.session
    if session is None:
        return EntitlementDecision(
            outcome="redirect_login",
            state="unauthenticated",
            return_to=requested_location,
        )

    if session.is_admin:
        return EntitlementDecision(outcome="allow", state="admin_bypass")

    if admin_only:
        return EntitlementDecision(
            outcome="redirect_dashboard",
            state="authenticated_subscribed" if session.subscription_active else "authenticated_no_subscription",
        )

    if not session.subscription_active:
        if requires_subscription:
            return EntitlementDecision(
                outcome="redirect_subscribe",
                state="authenticated_no_subscription",
                return_to=requested_location,
            )
        return EntitlementDecision(outcome="allow", state="authenticated_no_subscription")

    return EntitlementDecision(outcome="allow", state="authenticated_subscribed")


def is_subscription_current(
    *,
    expires_on: date | None,
    today: date,
    subscription_type: str | None = None,
) -> bool:
    if subscription_type == LIFETIME_SUBSCRIPTION_TYPE:
        return True
    if expires_on is None:
        return False
    return expires_on >= today
