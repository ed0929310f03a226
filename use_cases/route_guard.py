"""Per-navigation access decision for protected views."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple

from use_cases.session_models import SessionState, SessionStatus

log = logging.getLogger(__name__)


class GuardOutcome(str, Enum):
    LOADING = "loading"
    REDIRECT_LOGIN = "redirect_login"
    ACCESS_DENIED = "access_denied"
    RENDER = "render"


@dataclass(frozen=True)
class GuardDecision:
    outcome: GuardOutcome
    required_roles: Tuple[str, ...] = ()
    error: Optional[str] = None

    @property
    def message(self) -> str:
        if self.outcome == GuardOutcome.ACCESS_DENIED:
            return (
                "You don't have permission to access this page. "
                f"This area requires {' or '.join(self.required_roles)} role."
            )
        if self.outcome == GuardOutcome.LOADING and self.error:
            return f"Could not check your session: {self.error}"
        return ""


def evaluate(state: SessionState, required_roles: Iterable[str] = ()) -> GuardDecision:
    """
    Decide what a protected view should show for the given session state.
    Holds no state of its own; call it again on every run.
    """
    required = tuple(required_roles)

    if state.status == SessionStatus.UNRESOLVED:
        return GuardDecision(GuardOutcome.LOADING, required_roles=required, error=state.error)

    if state.status == SessionStatus.UNAUTHENTICATED or state.identity is None:
        return GuardDecision(GuardOutcome.REDIRECT_LOGIN, required_roles=required)

    if required and state.identity.role not in required:
        log.info(
            f"Access denied: user_id={state.identity.id} role={state.identity.role} "
            f"required={','.join(required)}"
        )
        return GuardDecision(GuardOutcome.ACCESS_DENIED, required_roles=required)

    return GuardDecision(GuardOutcome.RENDER, required_roles=required)
