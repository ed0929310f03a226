from unittest.mock import MagicMock, patch

import pytest

from auth import IdentityServiceError, InvalidCredentialsError, UnknownRoleError
from use_cases.session_backends import DEMO_ACCOUNTS, DemoSessionBackend
from use_cases.session_models import ROLES, LoginInput, RegistrationInput, SessionStatus
from use_cases.session_store import SessionStore


@pytest.fixture
def notifier():
    return MagicMock()


@pytest.fixture
def demo_store(notifier):
    store = SessionStore(DemoSessionBackend(delay_seconds=0), notifier)
    store.start()
    return store


def test_demo_accounts_company_only_for_suppliers():
    for account in DEMO_ACCOUNTS.values():
        assert account.identity.role in ROLES
        assert (account.identity.company_id is not None) == (account.identity.role == "supplier")


@patch("use_cases.session_backends.time.sleep")
def test_demo_store_is_authenticated_as_admin_without_delay(mock_sleep, notifier):
    store = SessionStore(DemoSessionBackend(delay_seconds=0.5), notifier)
    state = store.start()

    assert state.status == SessionStatus.AUTHENTICATED
    assert state.identity.username == "admin"
    assert state.identity.role == "purchasing"
    mock_sleep.assert_not_called()
    assert store.can_switch_role is True


@patch("use_cases.session_backends.time.sleep")
def test_switch_user_applies_after_delay_and_notifies_once(mock_sleep, notifier):
    store = SessionStore(DemoSessionBackend(delay_seconds=0.5), notifier)
    store.start()

    result = store.switch_user("operations")

    mock_sleep.assert_called_once_with(0.5)
    assert result.ok is True
    assert store.identity.role == "operations"
    role_changes = [c.args[0] for c in notifier.notify.call_args_list if c.args[0].title == "Role Changed"]
    assert len(role_changes) == 1
    assert role_changes[0].description == "Now logged in as Operations Manager"


@pytest.mark.parametrize("role", ["admin", "ceo", "", "Legal", "supplier "])
def test_switch_user_unknown_role_leaves_identity(demo_store, notifier, role):
    before = demo_store.identity

    result = demo_store.switch_user(role)

    assert result.ok is False
    assert result.reason == "invalid_role"
    assert demo_store.identity == before
    assert notifier.notify.call_args.args[0].title == "Invalid Role"


def test_switch_role_rejects_before_waiting():
    backend = DemoSessionBackend(delay_seconds=0.5)
    with patch("use_cases.session_backends.time.sleep") as mock_sleep:
        with pytest.raises(UnknownRoleError):
            backend.switch_role("ceo")
    mock_sleep.assert_not_called()


def test_demo_login_plaintext_match(demo_store):
    demo_store.logout()
    result = demo_store.login(LoginInput("legal", "legal123"))
    assert result.ok is True
    assert demo_store.identity.role == "legal"


def test_demo_login_wrong_password(demo_store, notifier):
    result = demo_store.login(LoginInput("legal", "legal124"))
    assert result.ok is False
    assert notifier.notify.call_args.args[0].description == "Invalid username or password"
    with pytest.raises(InvalidCredentialsError):
        DemoSessionBackend(delay_seconds=0).login("legal", "nope")


def test_demo_register_then_login_again(demo_store):
    registration = RegistrationInput(
        username="acme",
        name="Acme Rep",
        email="rep@acme.com",
        password="acme123",
        confirm_password="acme123",
        role="supplier",
        company_id=4,
    )
    result = demo_store.register(registration)
    assert result.ok is True
    assert result.identity.id == 8
    assert result.identity.company_id == 4

    demo_store.logout()
    assert demo_store.state.status == SessionStatus.UNAUTHENTICATED
    assert demo_store.login(LoginInput("acme", "acme123")).identity == result.identity


def test_demo_register_duplicate_username():
    backend = DemoSessionBackend(delay_seconds=0)
    payload = {"username": "legal", "name": "Dup", "email": "d@x.com", "password": "secret1", "role": "legal"}
    with pytest.raises(IdentityServiceError) as excinfo:
        backend.register(payload)
    assert excinfo.value.status_code == 400


def test_demo_register_rejects_company_on_non_supplier(demo_store, notifier):
    registration = RegistrationInput(
        username="counsel",
        name="Outside Counsel",
        email="counsel@neptune.com",
        password="counsel123",
        confirm_password="counsel123",
        role="legal",
        company_id=4,
    )
    result = demo_store.register(registration)

    assert result.ok is False
    assert result.reason == "validation_error"
    assert demo_store.login(LoginInput("counsel", "counsel123")).ok is False


@pytest.mark.parametrize(
    "payload",
    [
        {"role": "legal", "companyId": 4},
        {"role": "supplier"},
    ],
)
def test_demo_backend_keeps_company_only_on_suppliers(payload):
    backend = DemoSessionBackend(delay_seconds=0)
    with pytest.raises(IdentityServiceError) as excinfo:
        backend.register(dict(payload, username="newbie", name="New", email="n@x.com", password="newbie1"))
    assert excinfo.value.status_code == 400
