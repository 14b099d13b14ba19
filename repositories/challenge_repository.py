"""
Challenge repositories - challenges, tasks, participants and submissions
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from repositories.base import BaseRepository
from domain.models import (
    Challenge,
    Task,
    ChallengeParticipant,
    ChallengeSubmission,
)
from domain.enums import ApprovalStatus


class ChallengeRepository(BaseRepository[Challenge]):
    """Repository for challenges"""

    def __init__(self, db: Session):
        super().__init__(db, Challenge)

    def list_ordered(self) -> List[Challenge]:
        return self.db.query(Challenge).order_by(Challenge.start_date.asc()).all()

    def list_ending_after(self, moment: datetime) -> List[Challenge]:
        """Challenges not yet finished at `moment`, soonest start first"""
        return (
            self.db.query(Challenge)
            .filter(Challenge.end_date > moment)
            .order_by(Challenge.start_date.asc(), Challenge.id.asc())
            .all()
        )

    def count_active(self, moment: datetime) -> int:
        return (
            self.db.query(func.count(Challenge.id))
            .filter(Challenge.start_date <= moment, Challenge.end_date >= moment)
            .scalar()
            or 0
        )


class TaskRepository(BaseRepository[Task]):
    def __init__(self, db: Session):
        super().__init__(db, Task)

    def list_for_challenge(self, challenge_id: int) -> List[Task]:
        return (
            self.db.query(Task)
            .filter(Task.challenge_id == challenge_id)
            .order_by(Task.id.asc())
            .all()
        )


class ParticipantRepository(BaseRepository[ChallengeParticipant]):
    """Repository for challenge participants"""

    def __init__(self, db: Session):
        super().__init__(db, ChallengeParticipant)

    def get(self, challenge_id: int, user_id: UUID) -> Optional[ChallengeParticipant]:
        return (
            self.db.query(ChallengeParticipant)
            .filter(
                ChallengeParticipant.challenge_id == challenge_id,
                ChallengeParticipant.user_id == user_id,
            )
            .first()
        )

    def list_for_challenge(self, challenge_id: int) -> List[ChallengeParticipant]:
        """Participants in join order, with their user loaded"""
        return (
            self.db.query(ChallengeParticipant)
            .options(joinedload(ChallengeParticipant.user))
            .filter(ChallengeParticipant.challenge_id == challenge_id)
            .order_by(
                ChallengeParticipant.joined_at.asc(), ChallengeParticipant.id.asc()
            )
            .all()
        )

    def count_for_challenge(self, challenge_id: int) -> int:
        return (
            self.db.query(func.count(ChallengeParticipant.id))
            .filter(ChallengeParticipant.challenge_id == challenge_id)
            .scalar()
            or 0
        )


class SubmissionRepository(BaseRepository[ChallengeSubmission]):
    """Repository for proof submissions"""

    def __init__(self, db: Session):
        super().__init__(db, ChallengeSubmission)

    def get_for_user_task(
        self, user_id: UUID, task_id: int
    ) -> Optional[ChallengeSubmission]:
        return (
            self.db.query(ChallengeSubmission)
            .filter(
                ChallengeSubmission.user_id == user_id,
                ChallengeSubmission.task_id == task_id,
            )
            .first()
        )

    def list_pending(self) -> List[ChallengeSubmission]:
        """Pending submissions, oldest first, with task, challenge and user"""
        return (
            self.db.query(ChallengeSubmission)
            .options(
                joinedload(ChallengeSubmission.task).joinedload(Task.challenge),
                joinedload(ChallengeSubmission.user),
            )
            .filter(ChallengeSubmission.status == ApprovalStatus.PENDING.value)
            .order_by(
                ChallengeSubmission.submission_time.asc(), ChallengeSubmission.id.asc()
            )
            .all()
        )

    def count_pending(self) -> int:
        return (
            self.db.query(func.count(ChallengeSubmission.id))
            .filter(ChallengeSubmission.status == ApprovalStatus.PENDING.value)
            .scalar()
            or 0
        )
