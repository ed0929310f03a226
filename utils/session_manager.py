import streamlit as st

from auth import SessionProviderMissingError
from infrastructure.notifications.toast_notifier import TOAST_QUEUE_KEY, ToastNotifier
from use_cases.navigation import HOME_PATH, normalize_path

"""
SESSION STATE CONTRACT

Keys in st.session_state owned by this module:

session_store: SessionStore | None
    the current browser session's identity owner
    default: absent until bootstrap provides it
    owner: use_cases/bootstrap

nav_path: str
    path of the view being rendered ("/", "/claims/3", ...)
    default: ?page= query param or "/"
    owner: session_manager

toast_queue: list[Notification]
    notifications waiting to be shown on the next run
    default: []
    owner: infrastructure/notifications
"""

SESSION_STORE_KEY = "session_store"
NAV_PATH_KEY = "nav_path"
PAGE_QUERY_PARAM = "page"


def init_session_state():
    if NAV_PATH_KEY not in st.session_state:
        st.session_state[NAV_PATH_KEY] = normalize_path(st.query_params.get(PAGE_QUERY_PARAM))
    if TOAST_QUEUE_KEY not in st.session_state:
        st.session_state[TOAST_QUEUE_KEY] = []


def has_session_store() -> bool:
    return st.session_state.get(SESSION_STORE_KEY) is not None


def provide_session_store(store):
    st.session_state[SESSION_STORE_KEY] = store
    return store


def get_session_store():
    store = st.session_state.get(SESSION_STORE_KEY)
    if store is None:
        raise SessionProviderMissingError(
            "get_session_store() was called before bootstrap provided a session store"
        )
    return store


def reset_session_store():
    store = st.session_state.get(SESSION_STORE_KEY)
    if store is not None:
        store.close()
    st.session_state[SESSION_STORE_KEY] = None


def flush_notifications() -> int:
    return ToastNotifier().flush()


def current_path() -> str:
    return st.session_state.get(NAV_PATH_KEY) or HOME_PATH


def set_path(path):
    path = normalize_path(path)
    st.session_state[NAV_PATH_KEY] = path
    st.query_params[PAGE_QUERY_PARAM] = path
    return path


def navigate(path):
    set_path(path)
    st.rerun()


def logout():
    result = get_session_store().logout()
    st.rerun()
    return result
