import streamlit as st

from use_cases.navigation import HOME_PATH, ROUTES, Route, route_param, sidebar_routes
from use_cases.session_models import ROLE_LABELS
from utils import session_manager

SECTION_BLURBS = {
    Route.SUPPLIERS: "Supplier master data and company contacts.",
    Route.AGREEMENTS: "Frame agreements and contract terms per supplier.",
    Route.TICKETS: "Service tickets raised against suppliers.",
    Route.CLAIMS: "Claims and their legal review status.",
    Route.RATINGS: "Supplier performance ratings per job.",
    Route.USERS: "Accounts and roles of dashboard users.",
    Route.REPORTS: "Periodic supplier and claims reports.",
}


def render_dashboard(identity):
    st.title(f"📊 Welcome, {identity.name}")
    st.caption(f"{ROLE_LABELS.get(identity.role, identity.role)} · {identity.email}")
    if identity.company_id is not None:
        st.caption(f"Company #{identity.company_id}")

    sections = [(label, spec) for label, spec in sidebar_routes(identity) if spec.route != Route.DASHBOARD]
    if not sections:
        st.info("No sections are available for your role.")
        return

    cols = st.columns(min(len(sections), 3))
    for i, (label, spec) in enumerate(sections):
        with cols[i % len(cols)]:
            st.subheader(f"{spec.icon} {label}")
            st.caption(SECTION_BLURBS.get(spec.route, ""))
            if st.button("Open", key=f"open_{spec.route.value}"):
                session_manager.navigate(spec.path)


def render_section(route: Route, identity):
    spec = ROUTES[route]
    st.title(spec.label)
    param = route_param(session_manager.current_path())
    if param is not None:
        st.caption(f"Record #{param}")
    st.caption(f"Signed in as {identity.username} ({identity.role})")


def render_not_found():
    st.title("404 · Page not found")
    st.write(f"Nothing lives at `{session_manager.current_path()}`.")
    if st.button("Back to dashboard"):
        session_manager.navigate(HOME_PATH)


def page_renderer(route: Route):
    if route == Route.DASHBOARD:
        return render_dashboard
    return lambda identity: render_section(route, identity)
