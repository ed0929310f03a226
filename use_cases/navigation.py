"""Route table for the dashboard and role-aware sidebar entries."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from use_cases.session_models import Identity


class Route(str, Enum):
    DASHBOARD = "dashboard"
    AUTH = "auth"
    SUPPLIERS = "suppliers"
    SUPPLIER_NEW = "supplier_new"
    SUPPLIER_DETAIL = "supplier_detail"
    AGREEMENTS = "agreements"
    AGREEMENT_NEW = "agreement_new"
    AGREEMENT_DETAIL = "agreement_detail"
    TICKETS = "tickets"
    TICKET_NEW = "ticket_new"
    TICKET_DETAIL = "ticket_detail"
    CLAIMS = "claims"
    CLAIM_NEW = "claim_new"
    CLAIM_DETAIL = "claim_detail"
    RATINGS = "ratings"
    RATING_NEW = "rating_new"
    RATING_REQUEST = "rating_request"
    RATING_DETAIL = "rating_detail"
    USERS = "users"
    REPORTS = "reports"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class RouteSpec:
    route: Route
    path: str
    label: str
    required_roles: Tuple[str, ...] = ()
    protected: bool = True
    sidebar_section: Optional[str] = None
    icon: str = ""


HOME_PATH = "/"
LOGIN_PATH = "/auth"

ROUTES = {
    Route.DASHBOARD: RouteSpec(Route.DASHBOARD, "/", "Dashboard", sidebar_section="Main", icon="📊"),
    Route.AUTH: RouteSpec(Route.AUTH, "/auth", "Sign in", protected=False),
    Route.SUPPLIERS: RouteSpec(
        Route.SUPPLIERS, "/suppliers", "Suppliers", ("purchasing", "management"), sidebar_section="Main", icon="🏢"
    ),
    Route.SUPPLIER_NEW: RouteSpec(Route.SUPPLIER_NEW, "/suppliers/new", "New supplier", ("purchasing",)),
    Route.SUPPLIER_DETAIL: RouteSpec(Route.SUPPLIER_DETAIL, "/suppliers/:id", "Supplier", ("purchasing",)),
    Route.AGREEMENTS: RouteSpec(
        Route.AGREEMENTS,
        "/agreements",
        "Agreements",
        ("purchasing", "management", "supplier"),
        sidebar_section="Main",
        icon="📑",
    ),
    Route.AGREEMENT_NEW: RouteSpec(Route.AGREEMENT_NEW, "/agreements/new", "New agreement", ("purchasing",)),
    Route.AGREEMENT_DETAIL: RouteSpec(
        Route.AGREEMENT_DETAIL, "/agreements/:id", "Agreement", ("purchasing", "supplier")
    ),
    Route.TICKETS: RouteSpec(
        Route.TICKETS,
        "/tickets",
        "Service Tickets",
        ("purchasing", "operations", "accounting", "management", "supplier"),
        sidebar_section="Main",
        icon="🎫",
    ),
    Route.TICKET_NEW: RouteSpec(Route.TICKET_NEW, "/tickets/new", "New ticket", ("operations", "supplier")),
    Route.TICKET_DETAIL: RouteSpec(Route.TICKET_DETAIL, "/tickets/:id", "Service ticket"),
    Route.CLAIMS: RouteSpec(
        Route.CLAIMS,
        "/claims",
        "Claims",
        ("purchasing", "legal", "management", "supplier"),
        sidebar_section="Main",
        icon="⚠️",
    ),
    Route.CLAIM_NEW: RouteSpec(Route.CLAIM_NEW, "/claims/new", "New claim", ("legal", "operations", "purchasing")),
    Route.CLAIM_DETAIL: RouteSpec(Route.CLAIM_DETAIL, "/claims/:id", "Claim", ("legal", "supplier", "management")),
    Route.RATINGS: RouteSpec(
        Route.RATINGS,
        "/ratings",
        "Supplier Ratings",
        ("purchasing", "operations", "management", "supplier"),
        sidebar_section="Main",
        icon="⭐",
    ),
    Route.RATING_NEW: RouteSpec(Route.RATING_NEW, "/ratings/new", "New rating", ("operations",)),
    Route.RATING_REQUEST: RouteSpec(Route.RATING_REQUEST, "/ratings/request", "Request rating", ("supplier",)),
    Route.RATING_DETAIL: RouteSpec(
        Route.RATING_DETAIL, "/ratings/:id", "Rating", ("operations", "purchasing", "management")
    ),
    Route.USERS: RouteSpec(
        Route.USERS, "/users", "User Management", ("purchasing",), sidebar_section="Administration", icon="👥"
    ),
    Route.REPORTS: RouteSpec(
        Route.REPORTS,
        "/reports",
        "Reports",
        ("purchasing", "management"),
        sidebar_section="Administration",
        icon="📈",
    ),
    Route.NOT_FOUND: RouteSpec(Route.NOT_FOUND, "", "Page not found", protected=False),
}

# Static paths win over the ":id" patterns, e.g. /ratings/request.
_STATIC = {spec.path: spec.route for spec in ROUTES.values() if spec.path and ":" not in spec.path}
_DETAIL = {spec.path.split("/")[1]: spec.route for spec in ROUTES.values() if spec.path.endswith("/:id")}


def normalize_path(path: Optional[str]) -> str:
    if not path:
        return HOME_PATH
    path = "/" + path.strip().strip("/")
    return path


def resolve_route(path: Optional[str]) -> Route:
    path = normalize_path(path)
    if path in _STATIC:
        return _STATIC[path]

    parts = path.strip("/").split("/")
    if len(parts) == 2 and parts[0] in _DETAIL and parts[1]:
        return _DETAIL[parts[0]]
    return Route.NOT_FOUND


def route_param(path: Optional[str]) -> Optional[str]:
    """The ":id" segment of a detail path, if any."""
    path = normalize_path(path)
    if resolve_route(path) not in _DETAIL.values():
        return None
    return path.strip("/").split("/")[1]


def sidebar_routes(identity: Optional[Identity]) -> List[Tuple[str, RouteSpec]]:
    """Sidebar entries the identity may open, as (label, spec) in table order."""
    if identity is None:
        return []
    entries = []
    for spec in ROUTES.values():
        if spec.sidebar_section is None:
            continue
        if spec.required_roles and identity.role not in spec.required_roles:
            continue
        label = spec.label
        if spec.route == Route.RATINGS and identity.role == "supplier":
            label = "Job Ratings"
        entries.append((label, spec))
    return entries
