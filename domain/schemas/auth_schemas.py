from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID

from domain.enums import NextStep, PasswordStrength


class SignUpRequest(BaseModel):
    """Schema for creating an account; presence checks happen in AuthService"""

    email: str = ""
    password: str = ""
    confirm_password: str = ""


class SignUpResponse(BaseModel):
    user_id: UUID
    email: str
    message: str = "Account created. Please check your email to confirm it."


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""
    remember_me: bool = Field(
        default=False, description="Client keeps the refresh token when true"
    )


class SessionRestoreRequest(BaseModel):
    access_token: str = Field(..., min_length=1)
    refresh_token: str = Field(..., min_length=1)


class AuthSessionResponse(BaseModel):
    """Tokens for the app plus where it should navigate next"""

    user_id: UUID
    email: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None
    role: int
    next_step: NextStep
    remember_me: bool = False


class PasswordStrengthRequest(BaseModel):
    password: str = ""


class PasswordStrengthResponse(BaseModel):
    strength: PasswordStrength


class PasswordResetRequest(BaseModel):
    email: str = ""


class VerifyResetCodeRequest(BaseModel):
    email: str = ""
    token: str = ""


class RecoverySessionResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None


class NewPasswordRequest(BaseModel):
    access_token: str = Field(..., min_length=1)
    refresh_token: str = Field(..., min_length=1)
    new_password: str = ""
    confirm_password: str = ""
