import streamlit as st

from use_cases import auth_flow
from use_cases.navigation import LOGIN_PATH, RouteSpec
from use_cases.route_guard import GuardOutcome
from utils import session_manager
from views import layout_view


def _render_resolving(store, decision):
    if decision.error:
        st.error(f"🚨 {decision.message}")
        if st.button("Retry", key="retry_probe", type="primary"):
            with st.spinner("Checking session..."):
                store.retry_probe()
            st.rerun()
        return
    st.info("⏳ Checking your session...")


def render_protected(spec: RouteSpec, render_page):
    """
    Route guard in front of a page.
    Loading: spinner (or the probe error with a retry button), no redirect.
    Signed out: redirect to the login view.
    Wrong role: access-denied panel naming the required roles.
    Otherwise: sidebar + the page itself.
    """
    store = session_manager.get_session_store()
    result = auth_flow.ensure_authenticated_session(spec.required_roles)
    decision = result.decision

    if decision.outcome == GuardOutcome.LOADING:
        _render_resolving(store, decision)
        return result

    if decision.outcome == GuardOutcome.REDIRECT_LOGIN:
        session_manager.navigate(LOGIN_PATH)
        return result

    layout_view.render_sidebar(store)

    if decision.outcome == GuardOutcome.ACCESS_DENIED:
        st.error("⛔ Access Denied")
        st.write(decision.message)
        return result

    render_page(store.identity)
    return result
