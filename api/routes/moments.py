"""Community moments: feed, likes, comments and reports"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_current_user, get_db
from domain.models import User
from domain.schemas.community_schemas import (
    MomentCreate,
    MomentResponse,
    PrivacyUpdate,
    LikeToggleResponse,
    CommentCreate,
    CommentResponse,
    ReportCreate,
    ReportResponse,
)
from services.moment_service import MomentService

router = APIRouter(prefix="/moments", tags=["Moments"])
logger = logging.getLogger("fitnesshub.api.moments")


@router.get("", response_model=List[MomentResponse])
def feed(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return MomentService.feed(db, user)


@router.post("", response_model=MomentResponse, status_code=status.HTTP_201_CREATED)
def add_moment(
    payload: MomentCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MomentService.add_moment(db, user, payload)


@router.get("/mine", response_model=List[MomentResponse])
def my_moments(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """The caller's moments, private ones included"""
    return MomentService.my_moments(db, user)


@router.get("/{moment_id}", response_model=MomentResponse)
def moment_detail(
    moment_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MomentService.moment_detail(db, user, moment_id)


@router.delete("/{moment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_moment(
    moment_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    MomentService.delete_moment(db, user, moment_id)


@router.patch("/{moment_id}/privacy", response_model=MomentResponse)
def set_privacy(
    moment_id: int,
    payload: PrivacyUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MomentService.set_privacy(db, user, moment_id, payload.is_private)


@router.post("/{moment_id}/like", response_model=LikeToggleResponse)
def toggle_like(
    moment_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MomentService.toggle_like(db, user, moment_id)


@router.get("/{moment_id}/comments", response_model=List[CommentResponse])
def comments(
    moment_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MomentService.comments(db, user, moment_id)


@router.post(
    "/{moment_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_comment(
    moment_id: int,
    payload: CommentCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MomentService.add_comment(db, user, moment_id, payload)


@router.post(
    "/{moment_id}/reports",
    response_model=ReportResponse,
    status_code=status.HTTP_201_CREATED,
)
def report_moment(
    moment_id: int,
    payload: ReportCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return MomentService.report_moment(db, user, moment_id, payload)
