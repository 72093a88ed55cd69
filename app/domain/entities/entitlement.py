from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


GateOutcome = Literal["loading", "redirect_login", "redirect_dashboard", "redirect_subscribe", "allow"]
GateState = Literal[
    "unresolved",
    "unauthenticated",
    "authenticated_no_subscription",
    "authenticated_subscribed",
    "admin_bypass",
]


@dataclass(frozen=True)
class EntitlementDecision:
    outcome: GateOutcome
    state: GateState
    return_to: str | None = None

    @property
    def allowed(self) -> bool:
        return self.outcome == "allow"
