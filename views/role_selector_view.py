import streamlit as st

from use_cases.session_models import ROLE_LABELS, ROLES

ROLE_SELECT_KEY = "demo_role_select"

ROLE_ICONS = {
    "purchasing": "🧾",
    "operations": "🛠️",
    "accounting": "🧮",
    "legal": "⚖️",
    "management": "🏛️",
    "supplier": "🏭",
}


def _on_role_change(store):
    store.switch_user(st.session_state[ROLE_SELECT_KEY])


def render_role_selector(store):
    """Demo-only role picker. Renders nothing when the store cannot switch roles."""
    if not store.can_switch_role:
        return

    identity = store.identity
    # Keep the widget in sync with logins/registrations made elsewhere.
    st.session_state[ROLE_SELECT_KEY] = identity.role if identity is not None else ROLES[0]

    st.markdown("**Role Selection** · `Demo Mode`")
    st.selectbox(
        "Role",
        options=list(ROLES),
        format_func=lambda r: f"{ROLE_ICONS.get(r, '')} {ROLE_LABELS.get(r, r)}",
        key=ROLE_SELECT_KEY,
        on_change=_on_role_change,
        args=(store,),
        label_visibility="collapsed",
        disabled=identity is None or store.state.is_loading,
    )
    if identity is not None:
        st.caption(f"Current user: **{identity.name}**")
