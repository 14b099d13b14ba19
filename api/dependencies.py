"""
API dependencies for dependency injection
"""

from typing import Any, Dict, Generator, Optional
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.exceptions import ForbiddenError, UnauthorizedError
from domain.models import User, get_db_session
from services.auth_service import AuthService


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def get_access_token(authorization: Optional[str] = Header(default=None)) -> str:
    """Extract the token from an `Authorization: Bearer <token>` header"""
    if not authorization:
        raise UnauthorizedError("Missing bearer token")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError("Invalid authorization header")
    return token.strip()


def get_auth_account(access_token: str = Depends(get_access_token)) -> Dict[str, Any]:
    """Auth account of the caller; used before a users row exists (onboarding)"""
    return AuthService.authenticate(access_token)


def get_current_user(
    access_token: str = Depends(get_access_token), db: Session = Depends(get_db)
) -> User:
    return AuthService.current_user(db, access_token)


def require_admin(user: User = Depends(get_current_user)) -> User:
    """Only Admin and Super Admin roles may use the back-office routes"""
    if not user.is_admin:
        raise ForbiddenError("Admin access required")
    return user
