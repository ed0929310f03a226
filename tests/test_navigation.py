import pytest

from use_cases.navigation import ROUTES, Route, resolve_route, route_param, sidebar_routes
from use_cases.session_models import Identity


def _identity(role):
    return Identity(id=1, username=role, name=role.title(), email=f"{role}@neptune.com", role=role)


@pytest.mark.parametrize(
    "path,route",
    [
        (None, Route.DASHBOARD),
        ("/", Route.DASHBOARD),
        ("auth", Route.AUTH),
        ("/ratings/request", Route.RATING_REQUEST),
        ("/ratings/12", Route.RATING_DETAIL),
        ("/claims/new/", Route.CLAIM_NEW),
        ("/claims/3", Route.CLAIM_DETAIL),
        ("/nowhere", Route.NOT_FOUND),
        ("/claims/3/edit", Route.NOT_FOUND),
    ],
)
def test_resolve_route(path, route):
    assert resolve_route(path) == route


def test_route_param():
    assert route_param("/suppliers/42") == "42"
    assert route_param("/suppliers/new") is None


def test_ticket_detail_has_no_role_restriction():
    assert ROUTES[Route.TICKET_DETAIL].required_roles == ()


def test_sidebar_for_supplier():
    labels = [label for label, _ in sidebar_routes(_identity("supplier"))]
    assert labels == ["Dashboard", "Agreements", "Service Tickets", "Claims", "Job Ratings"]


def test_sidebar_for_purchasing_includes_administration():
    sections = {spec.sidebar_section for _, spec in sidebar_routes(_identity("purchasing"))}
    labels = [label for label, _ in sidebar_routes(_identity("purchasing"))]
    assert sections == {"Main", "Administration"}
    assert "User Management" in labels
    assert "Supplier Ratings" in labels


def test_sidebar_empty_without_identity():
    assert sidebar_routes(None) == []
