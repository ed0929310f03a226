from unittest.mock import MagicMock, patch

import pytest
import streamlit as st

from use_cases.navigation import LOGIN_PATH, ROUTES, Route
from use_cases.route_guard import GuardOutcome
from use_cases.session_models import Identity, SessionState
from utils import session_manager
from views import protected_view

BUYER = Identity(id=2, username="purchasing", name="Purchasing Manager", email="p@neptune.com", role="purchasing")
LAWYER = Identity(id=5, username="legal", name="Legal Manager", email="l@neptune.com", role="legal")


def _provide(state):
    st.session_state.clear()
    store = MagicMock()
    store.state = state
    store.identity = state.identity
    session_manager.provide_session_store(store)
    return store


@pytest.fixture
def mock_st():
    with patch("views.protected_view.st") as mocked:
        mocked.button.return_value = False
        yield mocked


@pytest.fixture
def mock_navigate():
    with patch("utils.session_manager.navigate") as mocked:
        yield mocked


@pytest.fixture
def mock_sidebar():
    with patch("views.layout_view.render_sidebar") as mocked:
        yield mocked


def test_wrong_role_shows_denied_panel_without_page_or_redirect(mock_st, mock_navigate, mock_sidebar):
    _provide(SessionState.authenticated(LAWYER))
    render_page = MagicMock()

    result = protected_view.render_protected(ROUTES[Route.SUPPLIERS], render_page)

    assert result.decision.outcome == GuardOutcome.ACCESS_DENIED
    render_page.assert_not_called()
    mock_navigate.assert_not_called()
    mock_st.error.assert_called_once_with("⛔ Access Denied")
    assert "purchasing or management" in mock_st.write.call_args.args[0]


def test_signed_out_redirects_to_login(mock_st, mock_navigate, mock_sidebar):
    _provide(SessionState.unauthenticated())
    render_page = MagicMock()

    protected_view.render_protected(ROUTES[Route.SUPPLIERS], render_page)

    mock_navigate.assert_called_once_with(LOGIN_PATH)
    render_page.assert_not_called()
    mock_sidebar.assert_not_called()


def test_resolving_session_neither_redirects_nor_renders(mock_st, mock_navigate, mock_sidebar):
    _provide(SessionState.unresolved())
    render_page = MagicMock()

    result = protected_view.render_protected(ROUTES[Route.DASHBOARD], render_page)

    assert result.decision.outcome == GuardOutcome.LOADING
    mock_navigate.assert_not_called()
    render_page.assert_not_called()
    mock_st.info.assert_called_once()


def test_session_check_error_offers_retry(mock_st, mock_navigate, mock_sidebar):
    store = _provide(SessionState.unresolved(error="503: Service Unavailable"))
    mock_st.button.return_value = True

    protected_view.render_protected(ROUTES[Route.DASHBOARD], MagicMock())

    assert "503: Service Unavailable" in mock_st.error.call_args.args[0]
    store.retry_probe.assert_called_once()
    mock_st.rerun.assert_called_once()
    mock_navigate.assert_not_called()


def test_permitted_role_renders_page_with_sidebar(mock_st, mock_navigate, mock_sidebar):
    store = _provide(SessionState.authenticated(BUYER))
    render_page = MagicMock()

    protected_view.render_protected(ROUTES[Route.SUPPLIERS], render_page)

    render_page.assert_called_once_with(BUYER)
    mock_sidebar.assert_called_once_with(store)
    mock_navigate.assert_not_called()
