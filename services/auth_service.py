"""
Authentication flows on top of the hosted auth provider.
"""

from typing import Any, Dict
from uuid import UUID
import logging
import re

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from adapters import supabase_adapter
from app.config import settings
from app.exceptions import ConflictError, ServiceValidationError, UnauthorizedError
from domain.enums import NextStep, PasswordStrength, UserRole
from domain.helpers import is_blank
from domain.models import User
from repositories import UserRepository

logger = logging.getLogger("fitnesshub.auth")

_SPECIAL_CHAR = re.compile(r"[^A-Za-z0-9]")


class AuthService:
    """Sign up, sign in and password recovery"""

    @staticmethod
    def password_strength(password: str) -> PasswordStrength:
        if len(password or "") < 6:
            return PasswordStrength.WEAK
        has_upper = any(c.isupper() for c in password)
        has_digit = any(c.isdigit() for c in password)
        has_special = bool(_SPECIAL_CHAR.search(password))
        if has_upper and has_digit and has_special:
            return PasswordStrength.STRONG
        return PasswordStrength.MEDIUM

    @staticmethod
    def next_step(user: User) -> NextStep:
        """Incomplete onboarding wins over the admin landing page"""
        if user.weight is None or user.height is None:
            return NextStep.ONBOARDING
        if user.is_admin:
            return NextStep.ADMIN_HOME
        return NextStep.HOME

    @staticmethod
    def sign_up(db: Session, email: str, password: str, confirm_password: str) -> User:
        email = (email or "").strip()
        if not email:
            raise ServiceValidationError("Please enter an email.")
        if not password:
            raise ServiceValidationError("Please enter a password.")
        if password != confirm_password:
            raise ServiceValidationError("Passwords do not match.")

        user_repo = UserRepository(db)
        if user_repo.get_by_email(email):
            raise ConflictError("Email already exists. Please log in.")

        account = supabase_adapter.sign_up(email, password)
        user = User(id=UUID(account["user_id"]), email=email, role=UserRole.USER.value)
        try:
            user_repo.add(user)
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.error(f"sign_up_insert_failed email={email} error={str(e)}")
            raise ConflictError("Email already exists. Please log in.")

        db.refresh(user)
        logger.info(f"user_signed_up user_id={user.id}")
        return user

    @staticmethod
    def _session_response(db: Session, session: Dict[str, Any], remember_me: bool) -> Dict[str, Any]:
        if not session.get("user_id"):
            raise UnauthorizedError("Your session has expired. Please log in again.")
        user = UserRepository(db).get_by_id(UUID(session["user_id"]))
        if user is None:
            logger.warning(f"login_without_profile user_id={session['user_id']}")
            raise UnauthorizedError("No profile found for this account.")
        return {
            **session,
            "role": user.role,
            "next_step": AuthService.next_step(user),
            "remember_me": remember_me,
        }

    @staticmethod
    def login(db: Session, email: str, password: str, remember_me: bool = False) -> Dict[str, Any]:
        email = (email or "").strip()
        if not email or not password:
            raise ServiceValidationError("Please enter both email and password.")

        session = supabase_adapter.sign_in(email, password)
        response = AuthService._session_response(db, session, remember_me)
        logger.info(
            f"user_logged_in user_id={response['user_id']} next_step={response['next_step'].value}"
        )
        return response

    @staticmethod
    def restore_session(db: Session, access_token: str, refresh_token: str) -> Dict[str, Any]:
        session = supabase_adapter.restore_session(access_token, refresh_token)
        return AuthService._session_response(db, session, remember_me=True)

    @staticmethod
    def logout(access_token: str, refresh_token: str) -> None:
        supabase_adapter.sign_out(access_token, refresh_token)

    @staticmethod
    def request_password_reset(email: str) -> None:
        email = (email or "").strip()
        if not email:
            raise ServiceValidationError("Please enter your email address.")
        supabase_adapter.send_password_reset(email, settings.password_reset_redirect_url)

    @staticmethod
    def verify_reset_code(email: str, token: str) -> Dict[str, Any]:
        if is_blank(email) or is_blank(token):
            raise ServiceValidationError("Please enter the verification code sent to your email.")
        return supabase_adapter.verify_recovery_code(email.strip(), token.strip())

    @staticmethod
    def reset_password(
        access_token: str, refresh_token: str, new_password: str, confirm_password: str
    ) -> None:
        if not new_password:
            raise ServiceValidationError("Please enter a new password.")
        if new_password != confirm_password:
            raise ServiceValidationError("Passwords do not match.")
        supabase_adapter.update_password(access_token, refresh_token, new_password)
        logger.info("password_reset_completed")

    @staticmethod
    def authenticate(access_token: str) -> Dict[str, Any]:
        """Resolve a bearer token to the auth account ({user_id, email})"""
        if not access_token:
            raise UnauthorizedError("Missing bearer token")
        return supabase_adapter.get_auth_user(access_token)

    @staticmethod
    def current_user(db: Session, access_token: str) -> User:
        """Resolve a bearer token to the caller's users row"""
        account = AuthService.authenticate(access_token)
        user = UserRepository(db).get_by_id(UUID(account["user_id"]))
        if user is None:
            raise UnauthorizedError("No profile found for this account.")
        return user
