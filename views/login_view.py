import pandas as pd
import streamlit as st

from use_cases.navigation import HOME_PATH
from use_cases.session_backends import DEMO_ACCOUNTS
from use_cases.session_models import ROLE_LABELS, ROLES, LoginInput, RegistrationInput
from utils import session_manager


def _render_demo_accounts():
    rows = [
        {
            "Account": key,
            "Username": account.identity.username,
            "Password": account.password,
            "Role": account.identity.role,
        }
        for key, account in DEMO_ACCOUNTS.items()
    ]
    with st.expander("Demo accounts", expanded=False):
        st.caption("Demo mode: credentials are checked locally, nothing is sent to the server.")
        st.dataframe(pd.DataFrame(rows), hide_index=True, use_container_width=True)


def _render_login_tab(store):
    with st.form("login_form", clear_on_submit=False):
        username = st.text_input("Username", placeholder="username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in", disabled=store.state.is_loading, use_container_width=True)
        if submitted:
            with st.spinner("Signing in..."):
                result = store.login(LoginInput(username=username, password=password))
            if result.ok:
                session_manager.navigate(HOME_PATH)
            else:
                session_manager.flush_notifications()


def _render_register_tab(store):
    with st.form("register_form", clear_on_submit=False):
        username = st.text_input("Username *")
        name = st.text_input("Full name *")
        email = st.text_input("Email *")
        role = st.selectbox(
            "Role *",
            options=list(ROLES),
            index=ROLES.index("supplier"),
            format_func=lambda r: ROLE_LABELS.get(r, r),
        )
        company_id = st.number_input("Company ID (suppliers only)", min_value=0, step=1, value=0)
        password = st.text_input("Password *", type="password")
        password_confirm = st.text_input("Confirm password *", type="password")
        submitted = st.form_submit_button("Register", disabled=store.state.is_loading, use_container_width=True)
        if submitted:
            registration = RegistrationInput(
                username=username,
                name=name,
                email=email,
                password=password,
                confirm_password=password_confirm,
                role=role,
                company_id=int(company_id) if company_id else None,
            )
            with st.spinner("Creating account..."):
                result = store.register(registration)
            if result.ok:
                session_manager.navigate(HOME_PATH)
            else:
                session_manager.flush_notifications()


def render_auth_screen():
    store = session_manager.get_session_store()
    if store.state.is_authenticated:
        session_manager.navigate(HOME_PATH)
        return

    st.title("🔐 Neptune Energy")
    st.caption("SCM Supplier Management System")

    if store.can_switch_role:
        _render_demo_accounts()

    tab_login, tab_register = st.tabs(["Login", "Register"])
    with tab_login:
        _render_login_tab(store)
    with tab_register:
        _render_register_tab(store)
