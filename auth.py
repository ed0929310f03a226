import os
import logging
from dataclasses import dataclass
from typing import Optional

import streamlit as st

log = logging.getLogger(__name__)

AUTH_MODES = ("demo", "api")
DEFAULT_AUTH_MODE = "demo"
DEFAULT_API_BASE_URL = "http://localhost:5000"
DEFAULT_API_TIMEOUT_SECONDS = 10.0
DEFAULT_DEMO_DELAY_SECONDS = 0.5


class AuthError(Exception):
    pass


class CredentialValidationError(AuthError):
    """Raised before dispatch when credential input is incomplete or inconsistent."""


class IdentityServiceError(AuthError):
    """Any failure reported by (or while talking to) the identity service."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401


class InvalidCredentialsError(IdentityServiceError):
    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message, status_code=401)


class UnknownRoleError(AuthError):
    pass


class SessionProviderMissingError(RuntimeError):
    """The session store was read before the app provided one."""


@dataclass(frozen=True)
class AuthSettings:
    mode: str = DEFAULT_AUTH_MODE
    api_base_url: str = DEFAULT_API_BASE_URL
    api_timeout_seconds: float = DEFAULT_API_TIMEOUT_SECONDS
    demo_delay_seconds: float = DEFAULT_DEMO_DELAY_SECONDS

    @property
    def is_demo(self) -> bool:
        return self.mode == "demo"


def get_secret(key):
    try:
        return st.secrets.get(key)
    except FileNotFoundError:
        return None


def _setting(key):
    return get_secret(key) or os.getenv(key)


def _float_setting(key, default):
    raw = _setting(key)
    if raw in (None, ""):
        return default
    try:
        value = float(raw)
    except (TypeError, ValueError):
        log.warning(f"Ignoring non-numeric {key}={raw!r}, using {default}")
        return default
    if value < 0:
        log.warning(f"Ignoring negative {key}={raw!r}, using {default}")
        return default
    return value


def load_settings() -> AuthSettings:
    mode = str(_setting("AUTH_MODE") or DEFAULT_AUTH_MODE).strip().lower()
    if mode not in AUTH_MODES:
        log.warning(f"Unknown AUTH_MODE={mode!r}, falling back to {DEFAULT_AUTH_MODE}")
        mode = DEFAULT_AUTH_MODE

    base_url = str(_setting("API_BASE_URL") or DEFAULT_API_BASE_URL).rstrip("/")

    return AuthSettings(
        mode=mode,
        api_base_url=base_url,
        api_timeout_seconds=_float_setting("API_TIMEOUT_SECONDS", DEFAULT_API_TIMEOUT_SECONDS),
        demo_delay_seconds=_float_setting("DEMO_DELAY_SECONDS", DEFAULT_DEMO_DELAY_SECONDS),
    )
