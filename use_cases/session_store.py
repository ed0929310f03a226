"""
Session store: the single owner of the current identity.

State only changes through start()/retry_probe() and the credential
operations below. Views read `state` or subscribe to changes.
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Callable, Iterator, List, Optional

from auth import CredentialValidationError, IdentityServiceError, UnknownRoleError
from infrastructure.notifications.toast_notifier import Notification
from use_cases.session_backends import SessionBackend
from use_cases.session_models import Identity, LoginInput, RegistrationInput, SessionState

log = logging.getLogger(__name__)

Observer = Callable[[SessionState], None]


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a credential or role operation."""

    ok: bool
    reason: str
    identity: Optional[Identity] = None


class SessionStore:
    def __init__(self, backend: SessionBackend, notifier):
        self.backend = backend
        self.notifier = notifier
        self._state = SessionState.unresolved()
        self._observers: List[Observer] = []
        self._in_flight = threading.Lock()
        self._closed = False
        self._probed = False

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def identity(self) -> Optional[Identity]:
        return self._state.identity

    @property
    def can_switch_role(self) -> bool:
        return self.backend.supports_role_switch

    @property
    def started(self) -> bool:
        return self._probed

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def close(self) -> None:
        self._closed = True
        self._observers.clear()
        self.backend.close()

    def _set_state(self, new_state: SessionState) -> bool:
        if self._closed:
            log.debug(f"Discarding late session update ({new_state.status.value}) on closed store")
            return False
        self._state = new_state
        for observer in list(self._observers):
            observer(new_state)
        return True

    def _notify(self, title: str, description: str, level: str = "success") -> None:
        if self._closed:
            return
        self.notifier.notify(Notification(title=title, description=description, level=level))

    # --- probe ---

    def start(self) -> SessionState:
        """Run the startup identity probe once. Later calls return the cached state."""
        if self._probed:
            return self._state
        return self._probe()

    def retry_probe(self) -> SessionState:
        return self._probe()

    def _probe(self) -> SessionState:
        with self._exclusive() as acquired:
            if not acquired:
                log.debug("Session probe skipped, another session operation is running")
                return self._state
            self._probed = True
            try:
                identity = self.backend.probe()
            except IdentityServiceError as e:
                log.warning(f"Session probe failed ({self.backend.name}): {e}")
                self._set_state(SessionState.unresolved(error=str(e)))
            else:
                self._apply_probe(identity)
        return self._state

    def _apply_probe(self, identity: Optional[Identity]) -> None:
        if identity is None:
            self._set_state(SessionState.unauthenticated())
        else:
            log.info(f"Session restored for {identity.username} ({identity.role})")
            self._set_state(SessionState.authenticated(identity))

    # --- credential operations ---

    @contextmanager
    def _exclusive(self) -> Iterator[bool]:
        acquired = self._in_flight.acquire(blocking=False)
        if not acquired:
            yield False
            return
        # The loading flag is not a transition, observers are not called for it.
        self._state = replace(self._state, is_loading=True)
        try:
            yield True
        finally:
            self._state = replace(self._state, is_loading=False)
            self._in_flight.release()

    def _busy(self) -> OperationResult:
        self._notify("Please wait", "Another session operation is still running", level="info")
        return OperationResult(ok=False, reason="busy")

    def login(self, login_input: LoginInput) -> OperationResult:
        try:
            login_input.validate()
        except CredentialValidationError as e:
            self._notify("Login failed", str(e), level="error")
            return OperationResult(ok=False, reason="validation_error")

        with self._exclusive() as acquired:
            if not acquired:
                return self._busy()
            try:
                identity = self.backend.login(login_input.username.strip(), login_input.password)
            except IdentityServiceError as e:
                log.info(f"Login rejected for {login_input.username.strip()!r}: {e}")
                self._notify("Login failed", str(e), level="error")
                return OperationResult(ok=False, reason="collaborator_error")

            if not self._set_state(SessionState.authenticated(identity)):
                return OperationResult(ok=False, reason="discarded")
            log.info(f"Login successful: {identity.username} ({identity.role})")
            self._notify("Login successful", f"Welcome back, {identity.name}!")
            return OperationResult(ok=True, reason="logged_in", identity=identity)

    def register(self, registration: RegistrationInput) -> OperationResult:
        try:
            registration.validate()
        except CredentialValidationError as e:
            self._notify("Registration failed", str(e), level="error")
            return OperationResult(ok=False, reason="validation_error")

        with self._exclusive() as acquired:
            if not acquired:
                return self._busy()
            try:
                identity = self.backend.register(registration.to_payload())
            except IdentityServiceError as e:
                log.info(f"Registration rejected for {registration.username.strip()!r}: {e}")
                self._notify("Registration failed", str(e), level="error")
                return OperationResult(ok=False, reason="collaborator_error")

            if not self._set_state(SessionState.authenticated(identity)):
                return OperationResult(ok=False, reason="discarded")
            log.info(f"Registered and logged in: {identity.username} ({identity.role})")
            self._notify("Registration successful", f"Welcome, {identity.name}!")
            return OperationResult(ok=True, reason="registered", identity=identity)

    def logout(self) -> OperationResult:
        with self._exclusive() as acquired:
            if not acquired:
                return self._busy()
            try:
                self.backend.logout()
            except IdentityServiceError as e:
                # The server may still hold the session, so the local identity stays.
                log.warning(f"Logout failed: {e}")
                self._notify("Logout failed", str(e), level="error")
                return OperationResult(ok=False, reason="collaborator_error", identity=self.identity)

            if not self._set_state(SessionState.unauthenticated()):
                return OperationResult(ok=False, reason="discarded")
            self._notify("Logged out", "You have been successfully logged out")
            return OperationResult(ok=True, reason="logged_out")

    def switch_user(self, role: str) -> OperationResult:
        if not self.can_switch_role:
            self._notify("Invalid Role", "Role switching is only available in demo mode", level="error")
            return OperationResult(ok=False, reason="unsupported")

        with self._exclusive() as acquired:
            if not acquired:
                return self._busy()
            try:
                identity = self.backend.switch_role(role)
            except UnknownRoleError:
                self._notify("Invalid Role", "The selected role does not exist", level="error")
                return OperationResult(ok=False, reason="invalid_role", identity=self.identity)

            if not self._set_state(SessionState.authenticated(identity)):
                return OperationResult(ok=False, reason="discarded")
            log.info(f"Demo role switched to {role}: {identity.username}")
            self._notify("Role Changed", f"Now logged in as {identity.name}")
            return OperationResult(ok=True, reason="role_switched", identity=identity)
