"""Account routes: sign up, sign in, session restore and password recovery"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db
from domain.schemas.auth_schemas import (
    SignUpRequest,
    SignUpResponse,
    LoginRequest,
    SessionRestoreRequest,
    AuthSessionResponse,
    PasswordStrengthRequest,
    PasswordStrengthResponse,
    PasswordResetRequest,
    VerifyResetCodeRequest,
    RecoverySessionResponse,
    NewPasswordRequest,
)
from services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger("fitnesshub.api.auth")


@router.post(
    "/sign-up", response_model=SignUpResponse, status_code=status.HTTP_201_CREATED
)
def sign_up(payload: SignUpRequest, db: Session = Depends(get_db)):
    user = AuthService.sign_up(
        db, payload.email, payload.password, payload.confirm_password
    )
    return SignUpResponse(user_id=user.id, email=user.email)


@router.post("/password-strength", response_model=PasswordStrengthResponse)
def password_strength(payload: PasswordStrengthRequest):
    """Strength meter shown while the user types a new password"""
    return PasswordStrengthResponse(
        strength=AuthService.password_strength(payload.password)
    )


@router.post("/login", response_model=AuthSessionResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    return AuthService.login(db, payload.email, payload.password, payload.remember_me)


@router.post("/session", response_model=AuthSessionResponse)
def restore_session(payload: SessionRestoreRequest, db: Session = Depends(get_db)):
    """Resume a remembered session from stored tokens"""
    return AuthService.restore_session(db, payload.access_token, payload.refresh_token)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(payload: SessionRestoreRequest):
    AuthService.logout(payload.access_token, payload.refresh_token)


@router.post("/password-reset", status_code=status.HTTP_202_ACCEPTED)
def request_password_reset(payload: PasswordResetRequest):
    AuthService.request_password_reset(payload.email)
    return {"status": "ok", "message": "If the email exists, a reset code was sent."}


@router.post("/password-reset/verify", response_model=RecoverySessionResponse)
def verify_reset_code(payload: VerifyResetCodeRequest):
    return AuthService.verify_reset_code(payload.email, payload.token)


@router.post("/password-reset/confirm")
def reset_password(payload: NewPasswordRequest):
    AuthService.reset_password(
        payload.access_token,
        payload.refresh_token,
        payload.new_password,
        payload.confirm_password,
    )
    return {"status": "ok", "message": "Password updated. Please log in."}
