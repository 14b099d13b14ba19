"""
Auth tests: password strength, the AuthService flows on SQLite, and the
supabase adapter driven through a fake client.
"""

import uuid
from types import SimpleNamespace

import pytest
from sqlalchemy.orm import Session

from test_fixtures import db_session, create_user  # noqa: F401
from adapters import supabase_adapter
from app.exceptions import (
    ExternalServiceError,
    ServiceValidationError,
    UnauthorizedError,
)
from domain.enums import NextStep, PasswordStrength, UserRole
from domain.models import User
from services.auth_service import AuthService


# =============================================================================
# FAKE SUPABASE CLIENT
# =============================================================================


class FakeAuth:
    def __init__(self, user_id, fail=None):
        self.user_id = user_id
        self.fail = fail or set()
        self.calls = []

    def _response(self, email="sarah@example.com"):
        user = SimpleNamespace(id=self.user_id, email=email)
        session = SimpleNamespace(
            access_token="access-token",
            refresh_token="refresh-token",
            expires_at=1700003600,
            user=user,
        )
        return SimpleNamespace(user=user, session=session)

    def _record(self, name, *args):
        self.calls.append((name, args))
        if name in self.fail:
            raise Exception(f"{name} failed")

    def sign_up(self, credentials):
        self._record("sign_up", credentials)
        return self._response(credentials["email"])

    def sign_in_with_password(self, credentials):
        self._record("sign_in_with_password", credentials)
        return self._response(credentials["email"])

    def set_session(self, access_token, refresh_token):
        self._record("set_session", access_token, refresh_token)
        return self._response()

    def sign_out(self):
        self._record("sign_out")

    def get_user(self, jwt):
        self._record("get_user", jwt)
        return SimpleNamespace(user=SimpleNamespace(id=self.user_id, email="sarah@example.com"))

    def reset_password_for_email(self, email, options):
        self._record("reset_password_for_email", email, options)

    def verify_otp(self, params):
        self._record("verify_otp", params)
        return self._response(params["email"])

    def update_user(self, attributes):
        self._record("update_user", attributes)


@pytest.fixture
def fake_auth(monkeypatch):
    auth = FakeAuth(uuid.uuid4())
    monkeypatch.setattr(
        supabase_adapter, "create_client", lambda url, key: SimpleNamespace(auth=auth)
    )
    return auth


# =============================================================================
# PASSWORD STRENGTH
# =============================================================================


@pytest.mark.parametrize(
    "password, expected",
    [
        ("", PasswordStrength.WEAK),
        ("Ab1!", PasswordStrength.WEAK),
        ("abcdef", PasswordStrength.MEDIUM),
        ("Abcdef12", PasswordStrength.MEDIUM),
        ("Abcdef1!", PasswordStrength.STRONG),
    ],
)
def test_password_strength(password, expected):
    assert AuthService.password_strength(password) == expected


# =============================================================================
# SIGN UP / LOGIN
# =============================================================================


def test_sign_up_creates_users_row(db_session: Session, fake_auth):
    user = AuthService.sign_up(db_session, " sarah@example.com ", "Secret1!", "Secret1!")

    assert user.id == fake_auth.user_id
    assert user.email == "sarah@example.com"
    assert user.role == UserRole.USER.value
    assert fake_auth.calls[0] == (
        "sign_up",
        ({"email": "sarah@example.com", "password": "Secret1!"},),
    )


@pytest.mark.parametrize(
    "email, password, confirm, message",
    [
        ("", "pw", "pw", "Please enter an email."),
        ("a@b.c", "", "", "Please enter a password."),
        ("a@b.c", "pw1", "pw2", "Passwords do not match."),
    ],
)
def test_sign_up_validation(db_session: Session, fake_auth, email, password, confirm, message):
    with pytest.raises(ServiceValidationError) as exc:
        AuthService.sign_up(db_session, email, password, confirm)
    assert exc.value.message == message
    assert fake_auth.calls == []


def test_login_without_onboarding_goes_to_onboarding(db_session: Session, fake_auth):
    create_user(db_session, id=fake_auth.user_id, email="sarah@example.com", weight=None)

    result = AuthService.login(db_session, "sarah@example.com", "pw", remember_me=True)

    assert result["next_step"] == NextStep.ONBOARDING
    assert result["access_token"] == "access-token"
    assert result["remember_me"] is True


def test_login_admin_goes_to_admin_home(db_session: Session, fake_auth):
    create_user(db_session, id=fake_auth.user_id, role=UserRole.SUPER_ADMIN.value)
    result = AuthService.login(db_session, "admin@example.com", "pw")
    assert result["next_step"] == NextStep.ADMIN_HOME
    assert result["role"] == 3


def test_login_regular_user_goes_home(db_session: Session, fake_auth):
    create_user(db_session, id=fake_auth.user_id)
    assert AuthService.login(db_session, "m@example.com", "pw")["next_step"] == NextStep.HOME


def test_login_requires_both_fields(db_session: Session, fake_auth):
    with pytest.raises(ServiceValidationError) as exc:
        AuthService.login(db_session, "sarah@example.com", "")
    assert exc.value.message == "Please enter both email and password."


def test_login_wrong_password(db_session: Session, fake_auth):
    fake_auth.fail.add("sign_in_with_password")
    with pytest.raises(UnauthorizedError) as exc:
        AuthService.login(db_session, "sarah@example.com", "wrong")
    assert exc.value.message == "Incorrect email or password. Please try again."


def test_current_user_needs_users_row(db_session: Session, fake_auth):
    with pytest.raises(UnauthorizedError):
        AuthService.current_user(db_session, "token")

    create_user(db_session, id=fake_auth.user_id)
    user = AuthService.current_user(db_session, "token")
    assert isinstance(user, User)
    assert ("get_user", ("token",)) in fake_auth.calls


def test_current_user_with_invalid_token(db_session: Session, fake_auth):
    fake_auth.fail.add("get_user")
    with pytest.raises(UnauthorizedError) as exc:
        AuthService.current_user(db_session, "expired")
    assert exc.value.message == "Invalid or expired token"


# =============================================================================
# SESSIONS AND PASSWORD RECOVERY
# =============================================================================


def test_restore_session_uses_set_session(db_session: Session, fake_auth):
    create_user(db_session, id=fake_auth.user_id)
    result = AuthService.restore_session(db_session, "a", "r")
    assert fake_auth.calls[0] == ("set_session", ("a", "r"))
    assert result["next_step"] == NextStep.HOME


def test_logout_failure_is_upstream_error(fake_auth):
    fake_auth.fail.add("sign_out")
    with pytest.raises(ExternalServiceError):
        AuthService.logout("a", "r")


def test_password_reset_flow(fake_auth, monkeypatch):
    monkeypatch.setattr(
        "services.auth_service.settings.password_reset_redirect_url",
        "fitnesshub://reset",
    )
    AuthService.request_password_reset("sarah@example.com")
    recovery = AuthService.verify_reset_code("sarah@example.com", "123456")
    AuthService.reset_password(
        recovery["access_token"], recovery["refresh_token"], "NewPass1!", "NewPass1!"
    )

    names = [name for name, _ in fake_auth.calls]
    assert names == [
        "reset_password_for_email",
        "verify_otp",
        "set_session",
        "update_user",
    ]
    assert fake_auth.calls[0][1] == ("sarah@example.com", {"redirect_to": "fitnesshub://reset"})
    assert fake_auth.calls[1][1][0]["type"] == "recovery"
    assert fake_auth.calls[3][1] == ({"password": "NewPass1!"},)


def test_reset_password_mismatch(fake_auth):
    with pytest.raises(ServiceValidationError) as exc:
        AuthService.reset_password("a", "r", "NewPass1!", "Other1!")
    assert exc.value.message == "Passwords do not match."
    assert fake_auth.calls == []


def test_unconfigured_auth_provider(monkeypatch):
    monkeypatch.setattr("adapters.supabase_adapter.settings.supabase_key", "")
    with pytest.raises(ExternalServiceError):
        supabase_adapter.get_auth_user("token")
