"""Application layer contracts for orchestrating high-level flows.

Composition (bootstrap, session_store) is imported from its own module, since it
pulls in the infrastructure clients that themselves depend on session_models.
"""

from .auth_flow import AuthFlowResult, AuthFlowStatus, ensure_authenticated_session
from .navigation import ROUTES, Route, RouteSpec, resolve_route, sidebar_routes
from .route_guard import GuardDecision, GuardOutcome, evaluate
from .session_models import (
    ROLES,
    Identity,
    LoginInput,
    RegistrationInput,
    Role,
    SessionState,
    SessionStatus,
)

__all__ = [
    "AuthFlowResult",
    "AuthFlowStatus",
    "GuardDecision",
    "GuardOutcome",
    "Identity",
    "LoginInput",
    "ROLES",
    "ROUTES",
    "RegistrationInput",
    "Role",
    "Route",
    "RouteSpec",
    "SessionState",
    "SessionStatus",
    "ensure_authenticated_session",
    "evaluate",
    "resolve_route",
    "sidebar_routes",
]
