"""Supabase auth adapter.

Every call builds its own client so that sessions set for one request never
leak into another one; the server never persists sessions itself, the app
keeps the refresh token when the user ticks "remember me".
"""

from typing import Any, Dict, Optional
import logging

from supabase import create_client

from app.config import settings
from app.exceptions import (
    ExternalServiceError,
    ServiceValidationError,
    UnauthorizedError,
)

logger = logging.getLogger("fitnesshub.supabase")


# ------------------ Connection ------------------
def _new_client():
    """Create a client from settings; raises ExternalServiceError when unconfigured."""
    if not settings.supabase_url or not settings.supabase_key:
        raise ExternalServiceError("Authentication service is not configured")
    return create_client(settings.supabase_url, settings.supabase_key)


def _error_message(exc: Exception) -> str:
    return getattr(exc, "message", None) or str(exc)


def _session_payload(response: Any) -> Dict[str, Any]:
    """Flatten an AuthResponse into what the API returns to the app."""
    user = getattr(response, "user", None)
    session = getattr(response, "session", None)
    if user is None and session is not None:
        user = getattr(session, "user", None)
    return {
        "user_id": str(user.id) if user is not None else None,
        "email": getattr(user, "email", None),
        "access_token": getattr(session, "access_token", None),
        "refresh_token": getattr(session, "refresh_token", None),
        "expires_at": getattr(session, "expires_at", None),
    }


# ------------------ Accounts ------------------
def sign_up(email: str, password: str) -> Dict[str, Any]:
    client = _new_client()
    try:
        response = client.auth.sign_up({"email": email, "password": password})
    except Exception as exc:
        logger.warning(f"sign_up_failed email={email} error={_error_message(exc)}")
        raise ServiceValidationError(_error_message(exc)) from exc

    payload = _session_payload(response)
    if not payload["user_id"]:
        raise ExternalServiceError("Sign up did not return a user")
    logger.info(f"sign_up_ok user_id={payload['user_id']}")
    return payload


def sign_in(email: str, password: str) -> Dict[str, Any]:
    client = _new_client()
    try:
        response = client.auth.sign_in_with_password(
            {"email": email, "password": password}
        )
    except Exception as exc:
        logger.info(f"sign_in_failed email={email} error={_error_message(exc)}")
        raise UnauthorizedError(
            "Incorrect email or password. Please try again."
        ) from exc

    payload = _session_payload(response)
    if not payload["user_id"] or not payload["access_token"]:
        raise UnauthorizedError("Incorrect email or password. Please try again.")
    return payload


def restore_session(access_token: str, refresh_token: str) -> Dict[str, Any]:
    client = _new_client()
    try:
        response = client.auth.set_session(access_token, refresh_token)
    except Exception as exc:
        logger.info(f"session_restore_failed error={_error_message(exc)}")
        raise UnauthorizedError("Your session has expired. Please log in again.") from exc
    return _session_payload(response)


def sign_out(access_token: str, refresh_token: str) -> None:
    client = _new_client()
    try:
        client.auth.set_session(access_token, refresh_token)
        client.auth.sign_out()
    except Exception as exc:
        logger.warning(f"sign_out_failed error={_error_message(exc)}")
        raise ExternalServiceError("Logout failed. Please try again.") from exc


def get_auth_user(access_token: str) -> Dict[str, Any]:
    """Resolve a bearer token to the auth user (id and email)."""
    client = _new_client()
    try:
        response = client.auth.get_user(access_token)
    except Exception as exc:
        raise UnauthorizedError("Invalid or expired token") from exc

    user = getattr(response, "user", None) if response is not None else None
    if user is None:
        raise UnauthorizedError("Invalid or expired token")
    return {"user_id": str(user.id), "email": getattr(user, "email", None)}


# ------------------ Password recovery ------------------
def send_password_reset(email: str, redirect_to: Optional[str] = None) -> None:
    client = _new_client()
    options = {"redirect_to": redirect_to} if redirect_to else {}
    try:
        client.auth.reset_password_for_email(email, options)
    except Exception as exc:
        logger.warning(f"password_reset_failed email={email} error={_error_message(exc)}")
        raise ServiceValidationError(_error_message(exc)) from exc
    logger.info(f"password_reset_sent email={email}")


def verify_recovery_code(email: str, token: str) -> Dict[str, Any]:
    client = _new_client()
    try:
        response = client.auth.verify_otp(
            {"email": email, "token": token, "type": "recovery"}
        )
    except Exception as exc:
        raise ServiceValidationError("Invalid or expired verification code.") from exc

    payload = _session_payload(response)
    if not payload["access_token"]:
        raise ServiceValidationError("Invalid or expired verification code.")
    return payload


def update_password(access_token: str, refresh_token: str, new_password: str) -> None:
    client = _new_client()
    try:
        client.auth.set_session(access_token, refresh_token)
        client.auth.update_user({"password": new_password})
    except Exception as exc:
        logger.warning(f"password_update_failed error={_error_message(exc)}")
        raise ServiceValidationError(_error_message(exc)) from exc
