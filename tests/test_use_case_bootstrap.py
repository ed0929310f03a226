from unittest.mock import MagicMock, patch

import auth
from use_cases import bootstrap
from use_cases.session_backends import ApiSessionBackend, DemoSessionBackend
from use_cases.session_models import SessionStatus


def test_build_backend_by_mode() -> None:
    demo = bootstrap.build_backend(auth.AuthSettings(mode="demo", demo_delay_seconds=0.1))
    assert isinstance(demo, DemoSessionBackend)
    assert demo.delay_seconds == 0.1

    api = bootstrap.build_backend(auth.AuthSettings(mode="api", api_base_url="http://api.local", api_timeout_seconds=2))
    assert isinstance(api, ApiSessionBackend)
    assert api.client.base_url == "http://api.local"
    assert api.client.timeout == 2


@patch("use_cases.bootstrap.auth.load_settings", return_value=auth.AuthSettings(mode="demo", demo_delay_seconds=0))
def test_run_startup_provides_store_and_probes_once(mock_settings) -> None:
    bootstrap.session_manager.st.session_state.clear()

    first = bootstrap.run_startup()
    store = bootstrap.session_manager.get_session_store()
    second = bootstrap.run_startup()

    assert first.status == "CONTINUE"
    assert first.planned_steps == ("init_session_state", "load_settings", "provide_session_store_demo", "probe_session")
    assert second.planned_steps == ("init_session_state",)
    assert bootstrap.session_manager.get_session_store() is store
    assert store.state.status == SessionStatus.AUTHENTICATED
    mock_settings.assert_called_once()


def test_run_startup_probe_error_does_not_stop() -> None:
    bootstrap.session_manager.st.session_state.clear()
    store = MagicMock()
    store.started = False
    bootstrap.session_manager.provide_session_store(store)

    result = bootstrap.run_startup()

    assert result.status == "CONTINUE"
    store.start.assert_called_once()
