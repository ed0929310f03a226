"""Session DTOs shared across application layers."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Literal, Mapping, Optional, Tuple

from auth import CredentialValidationError

Role = Literal["purchasing", "operations", "accounting", "legal", "management", "supplier"]

ROLES: Tuple[str, ...] = ("purchasing", "operations", "accounting", "legal", "management", "supplier")

ROLE_LABELS = {
    "purchasing": "Purchasing Manager",
    "operations": "Operations Manager",
    "accounting": "Accounting Manager",
    "legal": "Legal Manager",
    "management": "Senior Management",
    "supplier": "Supplier Representative",
}

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _integral(value: Any, field: str) -> int:
    # bool is an int subclass.
    if isinstance(value, bool):
        raise ValueError(f"{field} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value)
    raise ValueError(f"{field} must be an integer, got {value!r}")


def _text(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string, got {type(value).__name__}")
    return value


class SessionStatus(str, Enum):
    UNRESOLVED = "unresolved"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


@dataclass(frozen=True)
class Identity:
    id: int
    username: str
    name: str
    email: str
    role: Role
    company_id: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Identity":
        """Build from the identity service JSON. Raises ValueError on anything unexpected."""
        if not isinstance(payload, Mapping):
            raise ValueError(f"expected an object, got {type(payload).__name__}")
        try:
            identity_id = _integral(payload["id"], "id")
            username = _text(payload["username"], "username")
            name = _text(payload["name"], "name")
            email = _text(payload["email"], "email")
            role = payload["role"]
            company_id = payload.get("companyId")
            if company_id is not None:
                company_id = _integral(company_id, "companyId")
        except KeyError as e:
            raise ValueError(f"missing field {e.args[0]!r}") from e
        except (TypeError, ValueError) as e:
            raise ValueError(f"bad field value: {e}") from e

        if not username:
            raise ValueError("empty username")
        if role not in ROLES:
            raise ValueError(f"unknown role {role!r}")

        return cls(
            id=identity_id,
            username=username,
            name=name,
            email=email,
            role=role,
            company_id=company_id,
        )

    @property
    def initials(self) -> str:
        return "".join(part[0] for part in self.name.split() if part).upper()[:2]


@dataclass(frozen=True)
class DemoAccount:
    """Demo-only record pairing an identity with its plaintext secret."""

    identity: Identity
    password: str


@dataclass(frozen=True)
class SessionState:
    status: SessionStatus
    identity: Optional[Identity] = None
    error: Optional[str] = None
    is_loading: bool = False

    @classmethod
    def unresolved(cls, error: Optional[str] = None) -> "SessionState":
        return cls(status=SessionStatus.UNRESOLVED, error=error)

    @classmethod
    def authenticated(cls, identity: Identity) -> "SessionState":
        return cls(status=SessionStatus.AUTHENTICATED, identity=identity)

    @classmethod
    def unauthenticated(cls) -> "SessionState":
        return cls(status=SessionStatus.UNAUTHENTICATED)

    @property
    def is_resolved(self) -> bool:
        return self.status != SessionStatus.UNRESOLVED

    @property
    def is_authenticated(self) -> bool:
        return self.status == SessionStatus.AUTHENTICATED


@dataclass(frozen=True)
class LoginInput:
    username: str
    password: str

    def validate(self) -> None:
        if not self.username.strip():
            raise CredentialValidationError("Username is required")
        if not self.password:
            raise CredentialValidationError("Password is required")


@dataclass(frozen=True)
class RegistrationInput:
    username: str
    name: str
    email: str
    password: str
    confirm_password: str
    role: str = "supplier"
    company_id: Optional[int] = None

    def validate(self) -> None:
        if len(self.username.strip()) < 3:
            raise CredentialValidationError("Username must be at least 3 characters")
        if not self.name.strip():
            raise CredentialValidationError("Name is required")
        if not _EMAIL_RE.match(self.email.strip()):
            raise CredentialValidationError("Please enter a valid email")
        if len(self.password) < 6:
            raise CredentialValidationError("Password must be at least 6 characters")
        if not self.confirm_password:
            raise CredentialValidationError("Confirm password is required")
        if self.password != self.confirm_password:
            raise CredentialValidationError("Passwords don't match")
        if self.role not in ROLES:
            raise CredentialValidationError(f"Unknown role: {self.role}")
        if self.company_id is not None and self.role != "supplier":
            raise CredentialValidationError("Company ID is only allowed for supplier accounts")

    def to_payload(self) -> Dict[str, Any]:
        """Wire payload for the identity service; the confirmation never leaves the client."""
        payload: Dict[str, Any] = {
            "username": self.username.strip(),
            "name": self.name.strip(),
            "email": self.email.strip(),
            "password": self.password,
            "role": self.role,
        }
        if self.company_id is not None:
            payload["companyId"] = self.company_id
        return payload
