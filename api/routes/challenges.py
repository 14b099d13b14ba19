"""Community challenges: joining, progress, proofs and leaderboard"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_current_user, get_db
from domain.helpers import utcnow
from domain.models import User
from domain.schemas.challenge_schemas import (
    CommunityChallengesResponse,
    ChallengeDetailResponse,
    LeaderboardEntry,
    ProgressResponse,
    SubmissionCreate,
    SubmissionResponse,
)
from services.challenge_service import ChallengeService

router = APIRouter(prefix="/challenges", tags=["Challenges"])
logger = logging.getLogger("fitnesshub.api.challenges")


@router.get("", response_model=CommunityChallengesResponse)
def community_challenges(_: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return ChallengeService.community_challenges(db, utcnow())


@router.get("/{challenge_id}", response_model=ChallengeDetailResponse)
def challenge_detail(
    challenge_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ChallengeService.challenge_detail(db, user, challenge_id, utcnow())


@router.post("/{challenge_id}/join", status_code=status.HTTP_201_CREATED)
def join_challenge(
    challenge_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    participant = ChallengeService.join(db, user, challenge_id, utcnow())
    return {"status": "ok", "challenge_id": challenge_id, "joined_at": participant.joined_at}


@router.get("/{challenge_id}/progress", response_model=ProgressResponse)
def progress(
    challenge_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ChallengeService.progress(db, user, challenge_id)


@router.get("/{challenge_id}/leaderboard", response_model=List[LeaderboardEntry])
def leaderboard(
    challenge_id: int,
    _: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ChallengeService.leaderboard(db, challenge_id)


@router.post(
    "/tasks/{task_id}/submissions",
    response_model=SubmissionResponse,
    status_code=status.HTTP_201_CREATED,
)
def submit_proof(
    task_id: int,
    payload: SubmissionCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ChallengeService.submit_proof(db, user, task_id, payload)
