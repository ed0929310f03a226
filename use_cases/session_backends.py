"""Interchangeable identity backends behind the session store."""

import logging
import time
from typing import Any, Dict, List, Optional

from auth import IdentityServiceError, InvalidCredentialsError, UnknownRoleError
from infrastructure.api.identity_client import IdentityApiClient
from use_cases.session_models import ROLES, DemoAccount, Identity

log = logging.getLogger(__name__)


class SessionBackend:
    """Contract shared by the networked and the demo backends."""

    name = "base"
    supports_role_switch = False

    def probe(self) -> Optional[Identity]:
        raise NotImplementedError

    def login(self, username: str, password: str) -> Identity:
        raise NotImplementedError

    def register(self, payload: Dict[str, Any]) -> Identity:
        raise NotImplementedError

    def logout(self) -> None:
        raise NotImplementedError

    def switch_role(self, role: str) -> Identity:
        raise NotImplementedError(f"{self.name} backend cannot switch roles")

    def close(self) -> None:
        pass


class ApiSessionBackend(SessionBackend):
    name = "api"

    def __init__(self, client: IdentityApiClient):
        self.client = client

    def probe(self) -> Optional[Identity]:
        return self.client.fetch_current_user()

    def login(self, username: str, password: str) -> Identity:
        return self.client.login(username, password)

    def register(self, payload: Dict[str, Any]) -> Identity:
        return self.client.register(payload)

    def logout(self) -> None:
        self.client.logout()

    def close(self) -> None:
        self.client.close()


def _account(id, username, name, email, role, password, company_id=None) -> DemoAccount:
    return DemoAccount(
        identity=Identity(id=id, username=username, name=name, email=email, role=role, company_id=company_id),
        password=password,
    )


# Keyed by selector name; "admin" is the default account and carries the purchasing role.
DEMO_ACCOUNTS: Dict[str, DemoAccount] = {
    "admin": _account(1, "admin", "System Administrator", "admin@neptune.com", "purchasing", "admin123"),
    "purchasing": _account(2, "purchasing", "Purchasing Manager", "purchasing@neptune.com", "purchasing", "purchasing123"),
    "operations": _account(3, "operations", "Operations Manager", "operations@neptune.com", "operations", "operations123"),
    "accounting": _account(4, "accounting", "Accounting Manager", "accounting@neptune.com", "accounting", "accounting123"),
    "legal": _account(5, "legal", "Legal Manager", "legal@neptune.com", "legal", "legal123"),
    "management": _account(6, "management", "Senior Manager", "management@neptune.com", "management", "management123"),
    "supplier": _account(7, "supplier", "Supplier Representative", "supplier@vendor.com", "supplier", "supplier123", company_id=1),
}

DEFAULT_DEMO_ACCOUNT = "admin"


class DemoSessionBackend(SessionBackend):
    """
    In-memory backend for demos and UI tests.
    Credentials are matched in plaintext against DEMO_ACCOUNTS; every call
    except probe() waits `delay_seconds` so loading states still show up.
    """

    name = "demo"
    supports_role_switch = True

    def __init__(self, delay_seconds: float = 0.5, accounts: Optional[Dict[str, DemoAccount]] = None):
        self.delay_seconds = delay_seconds
        self.accounts = dict(accounts if accounts is not None else DEMO_ACCOUNTS)
        self._registered: List[DemoAccount] = []

    def _simulate_latency(self) -> None:
        if self.delay_seconds > 0:
            time.sleep(self.delay_seconds)

    def probe(self) -> Optional[Identity]:
        default = self.accounts.get(DEFAULT_DEMO_ACCOUNT)
        return default.identity if default else None

    def login(self, username: str, password: str) -> Identity:
        self._simulate_latency()
        for account in list(self.accounts.values()) + self._registered:
            if account.identity.username == username and account.password == password:
                return account.identity
        raise InvalidCredentialsError()

    def register(self, payload: Dict[str, Any]) -> Identity:
        self._simulate_latency()
        existing = list(self.accounts.values()) + self._registered
        if any(a.identity.username == payload["username"] for a in existing):
            raise IdentityServiceError("Username already exists", status_code=400)
        if (payload.get("companyId") is None) == (payload["role"] == "supplier"):
            raise IdentityServiceError("Company ID is required for supplier accounts only", status_code=400)
        known = [a.identity.id for a in existing]
        identity = Identity(
            id=max(known, default=9) + 1,
            username=payload["username"],
            name=payload["name"],
            email=payload["email"],
            role=payload["role"],
            company_id=payload.get("companyId"),
        )
        self._registered.append(DemoAccount(identity=identity, password=payload["password"]))
        log.info(f"Demo account registered: {identity.username} ({identity.role})")
        return identity

    def logout(self) -> None:
        self._simulate_latency()

    def switch_role(self, role: str) -> Identity:
        if role not in ROLES or role not in self.accounts:
            raise UnknownRoleError(f"The selected role does not exist: {role!r}")
        self._simulate_latency()
        return self.accounts[role].identity
