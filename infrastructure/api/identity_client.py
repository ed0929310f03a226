import logging
from typing import Any, Dict, Optional

import requests

from auth import IdentityServiceError
from use_cases.session_models import Identity

log = logging.getLogger(__name__)


class IdentityApiClient:
    """
    Thin client for the identity service.
    Keeps one requests.Session per instance so the server-side session cookie
    survives between calls.
    """

    def __init__(self, base_url: str, timeout: float = 10.0, http: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = http or requests.Session()

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            return self._http.request(method, url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            log.warning(f"{method} {path} failed: {e}")
            raise IdentityServiceError(f"Network error: {e}") from e

    @staticmethod
    def _raise_for_status(response: requests.Response) -> None:
        if 200 <= response.status_code < 300:
            return
        message = None
        try:
            body = response.json()
            if isinstance(body, dict):
                message = body.get("message")
        except ValueError:
            pass
        if not message:
            message = response.text or response.reason or "Request failed"
        raise IdentityServiceError(f"{response.status_code}: {message}", status_code=response.status_code)

    @staticmethod
    def _identity(response: requests.Response) -> Identity:
        try:
            return Identity.from_payload(response.json())
        except ValueError as e:
            raise IdentityServiceError(f"Malformed identity response: {e}", status_code=response.status_code) from e

    def fetch_current_user(self) -> Optional[Identity]:
        """GET /api/user. A 401 means "nobody is logged in" and maps to None."""
        response = self._request("GET", "/api/user")
        if response.status_code == 401:
            return None
        self._raise_for_status(response)
        return self._identity(response)

    def login(self, username: str, password: str) -> Identity:
        response = self._request("POST", "/api/login", {"username": username, "password": password})
        self._raise_for_status(response)
        return self._identity(response)

    def register(self, payload: Dict[str, Any]) -> Identity:
        response = self._request("POST", "/api/register", payload)
        self._raise_for_status(response)
        return self._identity(response)

    def logout(self) -> None:
        response = self._request("POST", "/api/logout")
        self._raise_for_status(response)

    def close(self) -> None:
        self._http.close()
