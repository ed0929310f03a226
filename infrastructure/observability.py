"""
Logging and Sentry setup for the dashboard.
Everything is driven by environment variables so the same build runs in
demo and API mode.
"""

import os
import logging
import re
from typing import Any, Dict

log = logging.getLogger(__name__)

SENSITIVE_KEYS = {"password", "confirm_password", "confirmPassword", "cookie", "authorization", "session"}

SESSION_COOKIE_PATTERN = re.compile(r"(connect\.sid=)[^;\s]+")
TOKEN_PATTERN = re.compile(r"[a-zA-Z0-9_\-]{32,}")


def _mask_string(val: str) -> str:
    val = SESSION_COOKIE_PATTERN.sub(r"\1[REDACTED]", val)
    return TOKEN_PATTERN.sub("[REDACTED]", val)


def _scrub(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: ("[REDACTED]" if str(k) in SENSITIVE_KEYS else _scrub(v)) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_scrub(i) for i in obj]
    if isinstance(obj, str):
        return _mask_string(obj)
    return obj


def scrub_event(event: Dict[str, Any], hint: Dict[str, Any]) -> Dict[str, Any]:
    """Sentry before_send hook: drop credentials from frame locals and request data."""
    for exc in event.get("exception", {}).get("values", []):
        for frame in exc.get("stacktrace", {}).get("frames", []):
            if "vars" in frame:
                frame["vars"] = _scrub(frame["vars"])

    request = event.get("request")
    if isinstance(request, dict):
        for key in ("data", "cookies", "headers"):
            if key in request:
                request[key] = _scrub(request[key])
    return event


def setup_observability() -> None:
    """
    Configure root logging (LOG_LEVEL) and Sentry when SENTRY_DSN is set.
    Call once, before the first Streamlit call in app.py.
    """
    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    sentry_dsn = os.getenv("SENTRY_DSN")
    if sentry_dsn:
        try:
            import sentry_sdk
            sentry_env = os.getenv("SENTRY_ENV", "development")

            sentry_sdk.init(
                dsn=sentry_dsn,
                environment=sentry_env,
                traces_sample_rate=float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.2")),
                send_default_pii=False,
                before_send=scrub_event
            )
            log.info(f"Sentry SDK initialized (env: {sentry_env})")
        except ImportError:
            log.warning("SENTRY_DSN provided but sentry-sdk is not installed. Skipping Sentry init.")
    else:
        log.info("SENTRY_DSN not provided. Running without Sentry.")

    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)


def set_sentry_user(identity) -> None:
    """Attach the signed-in identity (id, role, username only) to Sentry events."""
    try:
        import sentry_sdk
    except ImportError:
        return
    if identity is None:
        sentry_sdk.set_user(None)
        return
    sentry_sdk.set_user({"id": identity.id, "role": identity.role, "username": identity.username})
