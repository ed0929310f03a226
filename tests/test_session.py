from unittest.mock import MagicMock, patch

import pytest
import streamlit as st

from auth import SessionProviderMissingError
from utils import session_manager


def test_init_session_state():
    st.session_state.clear()
    session_manager.init_session_state()
    assert session_manager.current_path() == "/"
    assert st.session_state.toast_queue == []


def test_get_session_store_without_provider_fails_fast():
    st.session_state.clear()
    with pytest.raises(SessionProviderMissingError):
        session_manager.get_session_store()


def test_provide_and_reset_session_store():
    st.session_state.clear()
    store = MagicMock()
    session_manager.provide_session_store(store)
    assert session_manager.get_session_store() is store

    session_manager.reset_session_store()
    store.close.assert_called_once()
    assert session_manager.has_session_store() is False


@patch("streamlit.rerun")
def test_logout(mock_rerun):
    st.session_state.clear()
    store = MagicMock()
    session_manager.provide_session_store(store)

    session_manager.logout()

    store.logout.assert_called_once()
    mock_rerun.assert_called_once()


@patch("streamlit.rerun")
@patch("utils.session_manager.set_path")
def test_navigate(mock_set_path, mock_rerun):
    session_manager.navigate("/claims/3")
    mock_set_path.assert_called_once_with("/claims/3")
    mock_rerun.assert_called_once()
