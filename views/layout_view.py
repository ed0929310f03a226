import streamlit as st

from use_cases.navigation import resolve_route, sidebar_routes
from use_cases.session_models import ROLE_LABELS
from utils import session_manager
from views import role_selector_view


def render_sidebar(store):
    identity = store.identity
    active_route = resolve_route(session_manager.current_path())

    with st.sidebar:
        st.markdown("### 🌊 Neptune Energy")
        st.caption("SCM Supplier Management")

        if store.can_switch_role:
            st.divider()
            role_selector_view.render_role_selector(store)

        section = None
        for label, spec in sidebar_routes(identity):
            if spec.sidebar_section != section:
                section = spec.sidebar_section
                st.divider()
                st.caption(section.upper())
            is_active = active_route == spec.route or session_manager.current_path().startswith(spec.path + "/")
            if st.button(
                f"{spec.icon} {label}",
                key=f"nav_{spec.route.value}",
                type="primary" if is_active else "secondary",
                use_container_width=True,
            ):
                session_manager.navigate(spec.path)

        st.divider()
        if identity is not None:
            col_avatar, col_name = st.columns([1, 4])
            col_avatar.markdown(f"**{identity.initials}**")
            col_name.markdown(f"{identity.name}  \n{ROLE_LABELS.get(identity.role, identity.role)}")
        if st.button("Logout", key="logout_btn", type="secondary", disabled=store.state.is_loading):
            session_manager.logout()


def render_header(title: str):
    st.title(title)
