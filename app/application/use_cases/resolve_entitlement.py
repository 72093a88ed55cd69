from __future__ import annotations

from dataclasses import replace
import logging

from app.application.use_cases.get_active_subscription import GetActiveSubscriptionUseCase
from app.domain.entities.entitlement import EntitlementDecision
from app.domain.entities.user import SessionState
from app.domain.exceptions import NoActiveSubscriptionError, UpstreamUnavailableError
from app.domain.services.entitlements import decide_entitlement


logger = logging.getLogger(__name__)


class ResolveEntitlementUseCase:
    """Runs the entitlement gate, re-reading the gateway once when the
    cached session says the subscription is inactive.

    The cached flag can lag behind the gateway because payment callbacks
    and the user's return to the site are not ordered.
    """

    def __init__(self, *, get_active_subscription_use_case: GetActiveSubscriptionUseCase | None = None):
        self._get_active_subscription_use_case = get_active_subscription_use_case

    def execute(
        self,
        *,
        state: SessionState,
        requires_subscription: bool,
        requested_location: str | None = None,
        admin_only: bool = False,
    ) -> tuple[EntitlementDecision, SessionState]:
        decision = decide_entitlement(
            state=state,
            requires_subscription=requires_subscription,
            requested_location=requested_location,
            admin_only=admin_only,
        )
        session = state.session
        if (
            decision.outcome != "redirect_subscribe"
            or session is None
            or self._get_active_subscription_use_case is None
        ):
            return decision, state

        try:
            self._get_active_subscription_use_case.execute(customer_id=session.user_id)
        except NoActiveSubscriptionError:
            return decision, state
        except UpstreamUnavailableError as exc:
            logger.warning(
                "resolve_entitlement: refresh_failed user=%s detail=%s",
                session.user_id,
                exc,
            )
            return decision, state

        refreshed = SessionState.of(replace(session, subscription_active=True))
        logger.info("resolve_entitlement: refreshed_active user=%s", session.user_id)
        return (
            decide_entitlement(
                state=refreshed,
                requires_subscription=requires_subscription,
                requested_location=requested_location,
                admin_only=admin_only,
            ),
            refreshed,
        )
