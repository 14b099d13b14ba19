"""
Community challenges: status and time progress, joining, task progress,
proof submissions with admin review, and the leaderboard.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
import json
import logging
import math

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ServiceValidationError,
)
from domain.enums import ApprovalStatus, ChallengeStatus, ProofType, ReviewDecision
from domain.helpers import as_utc, is_blank, utcnow
from domain.models import (
    Challenge,
    ChallengeParticipant,
    ChallengeSubmission,
    Task,
    User,
)
from domain.schemas.challenge_schemas import ChallengeSaveRequest, SubmissionCreate
from repositories import (
    ChallengeRepository,
    ParticipantRepository,
    SubmissionRepository,
    TaskRepository,
)

logger = logging.getLogger("fitnesshub.challenges")

IMAGE_SIGNATURES = ("/9j/", "iVBOR", "R0lGOD")  # JPEG, PNG, GIF in base64
DEFAULT_AUDIENCE = "Everyone"


def empty_progress() -> Dict[str, Any]:
    return {"tasksCompleted": 0, "progressPercentage": 0, "current_task": None}


def parse_progress(raw: Any) -> Dict[str, Any]:
    """Progress JSON may arrive as a dict or as an encoded string"""
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            return empty_progress()
    if not isinstance(raw, dict):
        return empty_progress()

    progress = empty_progress()
    try:
        progress["tasksCompleted"] = int(raw.get("tasksCompleted") or 0)
        progress["progressPercentage"] = float(raw.get("progressPercentage") or 0)
    except (TypeError, ValueError):
        return empty_progress()
    progress["current_task"] = raw.get("current_task")
    return progress


def task_view(task: Task) -> Dict[str, Any]:
    return {"id": task.id, "task_name": task.task_name, "task_description": task.task_description}


def proof_type(proof: str) -> ProofType:
    if proof.startswith(IMAGE_SIGNATURES):
        return ProofType.IMAGE
    return ProofType.VIDEO


def _leaderboard_key(percentage: int, completion_time: Optional[datetime]):
    # Untimed entries rank after timed ones at the same percentage
    return (-percentage, completion_time is None, completion_time or datetime.max.replace(tzinfo=timezone.utc))


class ChallengeService:
    """Business logic for challenges"""

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    @staticmethod
    def status(challenge: Challenge, now: datetime) -> Tuple[ChallengeStatus, float]:
        """Status and elapsed share (0-100) of the challenge at `now`"""
        start = as_utc(challenge.start_date)
        end = as_utc(challenge.end_date)
        now = as_utc(now)
        if now < start:
            return ChallengeStatus.UPCOMING, 0.0
        if now > end:
            return ChallengeStatus.COMPLETED, 100.0
        total = (end - start).total_seconds()
        if total <= 0:
            return ChallengeStatus.ONGOING, 100.0
        elapsed = (now - start).total_seconds()
        return ChallengeStatus.ONGOING, min(elapsed / total * 100, 100.0)

    @staticmethod
    def to_dict(challenge: Challenge, now: datetime) -> Dict[str, Any]:
        status, time_progress = ChallengeService.status(challenge, now)
        return {
            "id": challenge.id,
            "title": challenge.title,
            "description": challenge.description,
            "content": challenge.content,
            "start_date": as_utc(challenge.start_date),
            "end_date": as_utc(challenge.end_date),
            "max_participants": challenge.max_participants,
            "no_limit": bool(challenge.no_limit),
            "difficulty": challenge.difficulty,
            "target_audience": challenge.target_audience or DEFAULT_AUDIENCE,
            "status": status,
            "time_progress": round(time_progress, 1),
            "tasks": [task_view(t) for t in challenge.tasks],
        }

    @staticmethod
    def get_challenge(db: Session, challenge_id: int) -> Challenge:
        challenge = ChallengeRepository(db).get_by_id(challenge_id)
        if not challenge:
            raise NotFoundError(f"Challenge {challenge_id} not found")
        return challenge

    @staticmethod
    def community_challenges(db: Session, now: datetime) -> Dict[str, List[Dict[str, Any]]]:
        """Unfinished challenges split into current (started) and upcoming"""
        current, upcoming = [], []
        for challenge in ChallengeRepository(db).list_ending_after(now):
            view = ChallengeService.to_dict(challenge, now)
            if as_utc(challenge.start_date) <= as_utc(now):
                current.append(view)
            else:
                upcoming.append(view)
        return {"current": current, "upcoming": upcoming}

    @staticmethod
    def challenge_detail(db: Session, user: User, challenge_id: int, now: datetime) -> Dict[str, Any]:
        challenge = ChallengeService.get_challenge(db, challenge_id)
        participants = ParticipantRepository(db).list_for_challenge(challenge_id)
        preview = participants[: settings.challenge_participants_preview]
        return {
            "challenge": ChallengeService.to_dict(challenge, now),
            "participant_count": len(participants),
            "participants": [
                {
                    "user_id": p.user_id,
                    "username": p.user.username if p.user else None,
                    "profile_picture": p.user.profile_picture if p.user else None,
                    "joined_at": p.joined_at,
                }
                for p in preview
            ],
            "is_joined": any(p.user_id == user.id for p in participants),
        }

    # ------------------------------------------------------------------
    # Participation
    # ------------------------------------------------------------------

    @staticmethod
    def join(db: Session, user: User, challenge_id: int, now: datetime) -> ChallengeParticipant:
        challenge = ChallengeService.get_challenge(db, challenge_id)
        repo = ParticipantRepository(db)
        if repo.get(challenge_id, user.id):
            raise ConflictError("You have already joined this challenge.")
        if as_utc(now) > as_utc(challenge.end_date):
            raise ServiceValidationError("This challenge has already ended.")
        if (
            not challenge.no_limit
            and challenge.max_participants
            and repo.count_for_challenge(challenge_id) >= challenge.max_participants
        ):
            raise ServiceValidationError("This challenge is already full.")

        try:
            participant = repo.add(
                ChallengeParticipant(
                    challenge_id=challenge_id,
                    user_id=user.id,
                    joined_at=as_utc(now),
                    progress=empty_progress(),
                )
            )
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.error(f"challenge_join_failed challenge_id={challenge_id} error={str(e)}")
            raise ConflictError("You have already joined this challenge.")

        db.refresh(participant)
        logger.info(f"challenge_joined user_id={user.id} challenge_id={challenge_id}")
        return participant

    @staticmethod
    def leaderboard(db: Session, challenge_id: int) -> List[Dict[str, Any]]:
        """Highest floored percentage first; earlier completion breaks ties"""
        ChallengeService.get_challenge(db, challenge_id)
        rows = []
        for participant in ParticipantRepository(db).list_for_challenge(challenge_id):
            progress = parse_progress(participant.progress)
            rows.append(
                (
                    math.floor(progress["progressPercentage"]),
                    as_utc(participant.completion_time),
                    participant,
                    progress,
                )
            )
        rows.sort(key=lambda row: _leaderboard_key(row[0], row[1]))
        return [
            {
                "rank": index + 1,
                "user_id": participant.user_id,
                "username": participant.user.username if participant.user else None,
                "profile_picture": participant.user.profile_picture if participant.user else None,
                "tasks_completed": progress["tasksCompleted"],
                "progress_percentage": percentage,
                "completion_time": completion_time,
            }
            for index, (percentage, completion_time, participant, progress) in enumerate(rows)
        ]

    @staticmethod
    def progress(db: Session, user: User, challenge_id: int) -> Dict[str, Any]:
        challenge = ChallengeService.get_challenge(db, challenge_id)
        participant = ParticipantRepository(db).get(challenge_id, user.id)
        if not participant:
            raise NotFoundError("You have not joined this challenge.")

        tasks = list(challenge.tasks)
        progress = parse_progress(participant.progress)
        completed = progress["tasksCompleted"]
        current_task = tasks[completed] if 0 <= completed < len(tasks) else None
        return {
            "challenge_id": challenge.id,
            "title": challenge.title,
            "tasks_completed": completed,
            "total_tasks": len(tasks),
            "progress_percentage": math.floor(progress["progressPercentage"]),
            "current_task": task_view(current_task) if current_task else None,
            "is_completed": bool(tasks) and completed >= len(tasks),
            "leaderboard": ChallengeService.leaderboard(db, challenge_id)[
                : settings.leaderboard_preview
            ],
        }

    # ------------------------------------------------------------------
    # Proof submissions
    # ------------------------------------------------------------------

    @staticmethod
    def submission_view(submission: ChallengeSubmission) -> Dict[str, Any]:
        return {
            "id": submission.id,
            "user_id": submission.user_id,
            "task_id": submission.task_id,
            "description": submission.description,
            "status": submission.status,
            "proof_type": proof_type(submission.proof),
            "submission_time": submission.submission_time,
        }

    @staticmethod
    def submit_proof(db: Session, user: User, task_id: int, data: SubmissionCreate) -> Dict[str, Any]:
        """Upsert the user's submission for a task and put it back in the review queue"""
        if is_blank(data.proof) or is_blank(data.description):
            raise ServiceValidationError(
                "Please select a proof file and add a description."
            )
        task = TaskRepository(db).get_by_id(task_id)
        if not task:
            raise NotFoundError(f"Task {task_id} not found")
        if not ParticipantRepository(db).get(task.challenge_id, user.id):
            raise ForbiddenError("Please join the challenge before submitting proof.")

        repo = SubmissionRepository(db)
        submission = repo.get_for_user_task(user.id, task_id)
        created = submission is None
        if not created and submission.status == ApprovalStatus.APPROVE.value:
            raise ConflictError("This task has already been approved.")
        if created:
            submission = ChallengeSubmission(user_id=user.id, task_id=task_id)
        submission.proof = data.proof
        submission.description = data.description.strip()
        submission.status = ApprovalStatus.PENDING.value
        submission.submission_time = utcnow()
        if created:
            repo.add(submission)
        db.commit()
        db.refresh(submission)
        logger.info(
            f"proof_submitted user_id={user.id} task_id={task_id} "
            f"submission_id={submission.id} created={created}"
        )
        return ChallengeService.submission_view(submission)

    @staticmethod
    def pending_submissions(db: Session) -> List[Dict[str, Any]]:
        return [
            {
                "id": s.id,
                "user_id": s.user_id,
                "username": s.user.username if s.user else None,
                "task_id": s.task_id,
                "task_name": s.task.task_name,
                "challenge_id": s.task.challenge_id,
                "challenge_title": s.task.challenge.title,
                "proof": s.proof,
                "proof_type": proof_type(s.proof),
                "description": s.description,
                "submission_time": s.submission_time,
            }
            for s in SubmissionRepository(db).list_pending()
        ]

    @staticmethod
    def review_submission(db: Session, submission_id: int, decision: ReviewDecision) -> Dict[str, Any]:
        """Approve or decline a proof; an approval advances the participant by one task"""
        submission = SubmissionRepository(db).get_by_id(submission_id)
        if not submission:
            raise NotFoundError(f"Submission {submission_id} not found")

        already_approved = submission.status == ApprovalStatus.APPROVE.value
        submission.status = decision.value

        if decision == ReviewDecision.APPROVE and not already_approved:
            task = submission.task
            participant = ParticipantRepository(db).get(task.challenge_id, submission.user_id)
            if participant is None:
                logger.warning(
                    f"submission_without_participant submission_id={submission_id} "
                    f"challenge_id={task.challenge_id}"
                )
            else:
                tasks = TaskRepository(db).list_for_challenge(task.challenge_id)
                total = len(tasks)
                progress = parse_progress(participant.progress)
                completed = min(progress["tasksCompleted"] + 1, total)
                percentage = min(completed / total * 100, 100) if total else 0
                participant.progress = {
                    "tasksCompleted": completed,
                    "progressPercentage": percentage,
                    "current_task": tasks[completed].id if completed < total else None,
                }
                participant.completion_time = submission.submission_time

        db.commit()
        db.refresh(submission)
        logger.info(f"submission_reviewed submission_id={submission_id} decision={decision.value}")
        return ChallengeService.submission_view(submission)

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    @staticmethod
    def validate(data: ChallengeSaveRequest) -> Dict[str, Any]:
        """Check the admin challenge form and return column values"""
        if is_blank(data.title):
            raise ServiceValidationError("Challenge title is required.")
        if is_blank(data.description):
            raise ServiceValidationError("Challenge description is required.")
        if is_blank(data.content):
            raise ServiceValidationError("Challenge content is required.")
        if data.start_date is None:
            raise ServiceValidationError("Start date is required.")
        if data.end_date is None:
            raise ServiceValidationError("End date is required.")
        start, end = as_utc(data.start_date), as_utc(data.end_date)
        if end < start:
            raise ServiceValidationError("End date cannot be earlier than the start date.")

        max_participants = None
        if not data.no_limit:
            value = data.max_participants
            if isinstance(value, str) and value.strip().isdigit():
                value = int(value.strip())
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ServiceValidationError(
                    "Please enter a valid maximum number of participants."
                )
            max_participants = value

        if not data.tasks or any(
            is_blank(t.task_name) or is_blank(t.task_description) for t in data.tasks
        ):
            raise ServiceValidationError(
                "Please add at least one task with a name and description."
            )

        return {
            "title": data.title.strip(),
            "description": data.description.strip(),
            "content": data.content.strip(),
            "start_date": start,
            "end_date": end,
            "no_limit": data.no_limit,
            "max_participants": max_participants,
            "difficulty": data.difficulty.value,
            "target_audience": (data.target_audience or "").strip() or DEFAULT_AUDIENCE,
        }

    @staticmethod
    def list_challenges(db: Session, now: datetime) -> List[Dict[str, Any]]:
        return [
            ChallengeService.to_dict(c, now)
            for c in ChallengeRepository(db).list_ordered()
        ]

    @staticmethod
    def save_challenge(
        db: Session, data: ChallengeSaveRequest, challenge_id: Optional[int] = None
    ) -> Challenge:
        """Create a challenge, or edit one and upsert its tasks by id"""
        fields = ChallengeService.validate(data)
        repo = ChallengeRepository(db)
        task_repo = TaskRepository(db)

        if challenge_id is None:
            challenge = repo.add(Challenge(**fields))
            existing: Dict[int, Task] = {}
        else:
            challenge = ChallengeService.get_challenge(db, challenge_id)
            for key, value in fields.items():
                setattr(challenge, key, value)
            existing = {t.id: t for t in task_repo.list_for_challenge(challenge_id)}

        kept = set()
        for item in data.tasks:
            name, description = item.task_name.strip(), item.task_description.strip()
            task = existing.get(item.id) if item.id is not None else None
            if task is None:
                task = task_repo.add(
                    Task(challenge_id=challenge.id, task_name=name, task_description=description)
                )
            else:
                task.task_name = name
                task.task_description = description
            kept.add(task.id)
        for task_id, task in existing.items():
            if task_id not in kept:
                task_repo.delete(task)

        db.commit()
        db.refresh(challenge)
        logger.info(
            f"challenge_saved challenge_id={challenge.id} created={challenge_id is None} "
            f"tasks={len(kept)}"
        )
        return challenge

    @staticmethod
    def delete_challenge(db: Session, challenge_id: int) -> None:
        challenge = ChallengeService.get_challenge(db, challenge_id)
        ChallengeRepository(db).delete(challenge)
        db.commit()
        logger.info(f"challenge_deleted challenge_id={challenge_id}")
