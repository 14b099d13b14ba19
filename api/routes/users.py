"""Public user pages"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from uuid import UUID

from api.dependencies import get_current_user, get_db
from domain.models import User
from domain.schemas.profile_schemas import PublicProfileResponse
from services.profile_service import ProfileService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/{user_id}", response_model=PublicProfileResponse)
def public_profile(
    user_id: UUID,
    _: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Another user's public moments grid and approved articles"""
    return ProfileService.public_profile(db, user_id)
