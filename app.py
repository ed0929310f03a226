from datetime import datetime

import streamlit as st

import auth
from infrastructure.observability import set_sentry_user, setup_observability
setup_observability()

from use_cases import bootstrap
from use_cases.navigation import ROUTES, Route, resolve_route
from utils import session_manager
from views import login_view, pages_view, protected_view

st.set_page_config(page_title="Neptune SCM: Supplier Management", layout="wide", initial_sidebar_state="expanded")

# Health check for the load balancer
if st.query_params.get("health") == "1":
    st.write({"status": "ok", "auth_mode": auth.load_settings().mode, "time": datetime.utcnow().isoformat()})
    st.stop()

# --- STARTUP ORCHESTRATION ---
startup_result = bootstrap.run_startup()
if startup_result.status == "STOP":
    st.stop()

session_manager.flush_notifications()
store = session_manager.get_session_store()

set_sentry_user(store.identity if store.state.is_authenticated else None)

# --- ROUTING ---
route = resolve_route(session_manager.current_path())

if route == Route.AUTH:
    login_view.render_auth_screen()
    st.stop()

if route == Route.NOT_FOUND:
    pages_view.render_not_found()
    st.stop()

spec = ROUTES[route]
protected_view.render_protected(spec, pages_view.page_renderer(route))
