"""Startup orchestration: settings, session backend selection and the identity probe."""

import logging
from dataclasses import dataclass
from typing import Literal, Tuple

import auth
from infrastructure.api.identity_client import IdentityApiClient
from infrastructure.notifications.toast_notifier import ToastNotifier
from use_cases.session_backends import ApiSessionBackend, DemoSessionBackend, SessionBackend
from use_cases.session_store import SessionStore
from utils import session_manager

log = logging.getLogger(__name__)

StartupStatus = Literal["CONTINUE", "STOP"]


@dataclass(frozen=True)
class StartupResult:
    """Result contract for startup/bootstrap orchestration."""

    status: StartupStatus
    planned_steps: Tuple[str, ...]


def build_backend(settings: auth.AuthSettings) -> SessionBackend:
    if settings.is_demo:
        return DemoSessionBackend(delay_seconds=settings.demo_delay_seconds)
    client = IdentityApiClient(settings.api_base_url, timeout=settings.api_timeout_seconds)
    return ApiSessionBackend(client)


def build_session_store(settings: auth.AuthSettings) -> SessionStore:
    return SessionStore(build_backend(settings), ToastNotifier())


def run_startup() -> StartupResult:
    """Provide a session store for this browser session and run its probe once."""
    executed_steps = []

    session_manager.init_session_state()
    executed_steps.append("init_session_state")

    if not session_manager.has_session_store():
        settings = auth.load_settings()
        executed_steps.append("load_settings")
        store = session_manager.provide_session_store(build_session_store(settings))
        log.info(f"Session store provided (backend: {store.backend.name})")
        executed_steps.append(f"provide_session_store_{store.backend.name}")

    store = session_manager.get_session_store()
    if not store.started:
        store.start()
        executed_steps.append("probe_session")

    return StartupResult(status="CONTINUE", planned_steps=tuple(executed_steps))
