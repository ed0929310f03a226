"""Authentication flow orchestration (application layer)."""

from dataclasses import dataclass
from typing import Iterable, Literal, Optional

from use_cases import route_guard
from utils import session_manager

AuthFlowStatus = Literal["CONTINUE", "STOP"]


@dataclass(frozen=True)
class AuthFlowResult:
    """Result contract for auth flow orchestration."""

    status: AuthFlowStatus
    reason: str
    user_id: Optional[int] = None
    decision: Optional[route_guard.GuardDecision] = None


def ensure_authenticated_session(required_roles: Iterable[str] = ()) -> AuthFlowResult:
    """Run the route guard against the provided session store and return a control-flow status."""
    store = session_manager.get_session_store()
    store.start()

    decision = route_guard.evaluate(store.state, required_roles)
    if decision.outcome != route_guard.GuardOutcome.RENDER:
        return AuthFlowResult(status="STOP", reason=decision.outcome.value, decision=decision)

    return AuthFlowResult(
        status="CONTINUE",
        reason="authenticated",
        user_id=store.state.identity.id,
        decision=decision,
    )
