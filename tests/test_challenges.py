"""
Challenge tests: status, joining, proof review, progress and the leaderboard.
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.orm import Session

from test_fixtures import db_session, create_user, create_challenge  # noqa: F401
from app.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ServiceValidationError,
)
from domain.enums import ChallengeStatus, ProofType, ReviewDecision
from domain.models import Challenge, ChallengeParticipant, Task
from domain.schemas.challenge_schemas import ChallengeSaveRequest, SubmissionCreate
from services.challenge_service import ChallengeService, parse_progress, proof_type

NOW = datetime(2025, 3, 12, 12, 0, tzinfo=timezone.utc)

PNG_PROOF = "iVBORw0KGgoAAAANSUhEUg"
VIDEO_PROOF = "AAAAIGZ0eXBpc29t"


# =============================================================================
# STATUS AND HELPERS
# =============================================================================


@pytest.mark.parametrize(
    "start,end,expected_status,expected_progress",
    [
        (NOW + timedelta(days=1), NOW + timedelta(days=8), ChallengeStatus.UPCOMING, 0.0),
        (NOW - timedelta(days=5), NOW + timedelta(days=5), ChallengeStatus.ONGOING, 50.0),
        (NOW - timedelta(days=10), NOW - timedelta(days=1), ChallengeStatus.COMPLETED, 100.0),
    ],
)
def test_challenge_status(start, end, expected_status, expected_progress):
    challenge = Challenge(start_date=start, end_date=end)
    status, progress = ChallengeService.status(challenge, NOW)
    assert status == expected_status
    assert progress == pytest.approx(expected_progress)


def test_status_accepts_naive_dates():
    challenge = Challenge(
        start_date=(NOW - timedelta(days=1)).replace(tzinfo=None),
        end_date=(NOW + timedelta(days=3)).replace(tzinfo=None),
    )
    status, progress = ChallengeService.status(challenge, NOW)
    assert status == ChallengeStatus.ONGOING
    assert progress == pytest.approx(25.0)


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, 0),
        ('{"tasksCompleted": 2, "progressPercentage": 66.6}', 2),
        ({"tasksCompleted": "3", "progressPercentage": 100}, 3),
        ("not json", 0),
        ({"tasksCompleted": "many"}, 0),
    ],
)
def test_parse_progress(raw, expected):
    assert parse_progress(raw)["tasksCompleted"] == expected


def test_proof_type_from_signature():
    assert proof_type(PNG_PROOF) == ProofType.IMAGE
    assert proof_type("/9j/4AAQSkZJRg") == ProofType.IMAGE
    assert proof_type(VIDEO_PROOF) == ProofType.VIDEO


# =============================================================================
# LISTING AND JOINING
# =============================================================================


def test_community_challenges_split(db_session: Session):
    create_challenge(db_session, start=NOW - timedelta(days=2), end=NOW + timedelta(days=5), title="Running")
    create_challenge(db_session, start=NOW + timedelta(days=3), end=NOW + timedelta(days=10), title="Soon")
    create_challenge(db_session, start=NOW - timedelta(days=20), end=NOW - timedelta(days=1), title="Over")

    listing = ChallengeService.community_challenges(db_session, NOW)

    assert [c["title"] for c in listing["current"]] == ["Running"]
    assert [c["title"] for c in listing["upcoming"]] == ["Soon"]
    assert listing["current"][0]["tasks"][0]["task_name"] == "Day 1"


def test_join_and_detail(db_session: Session):
    user = create_user(db_session, username="planker")
    challenge = create_challenge(db_session, start=NOW - timedelta(days=1), end=NOW + timedelta(days=9))

    participant = ChallengeService.join(db_session, user, challenge.id, NOW)
    assert parse_progress(participant.progress)["tasksCompleted"] == 0

    detail = ChallengeService.challenge_detail(db_session, user, challenge.id, NOW)
    assert detail["is_joined"] is True
    assert detail["participant_count"] == 1
    assert detail["participants"][0]["username"] == "planker"

    with pytest.raises(ConflictError):
        ChallengeService.join(db_session, user, challenge.id, NOW)


def test_join_ended_challenge(db_session: Session):
    user = create_user(db_session)
    challenge = create_challenge(db_session, start=NOW - timedelta(days=10), end=NOW - timedelta(days=1))
    with pytest.raises(ServiceValidationError) as exc_info:
        ChallengeService.join(db_session, user, challenge.id, NOW)
    assert exc_info.value.message == "This challenge has already ended."


def test_join_full_challenge(db_session: Session):
    first = create_user(db_session)
    second = create_user(db_session)
    challenge = create_challenge(
        db_session,
        start=NOW - timedelta(days=1),
        end=NOW + timedelta(days=9),
        max_participants=1,
        no_limit=False,
    )
    ChallengeService.join(db_session, first, challenge.id, NOW)
    with pytest.raises(ServiceValidationError) as exc_info:
        ChallengeService.join(db_session, second, challenge.id, NOW)
    assert exc_info.value.message == "This challenge is already full."


def test_upcoming_challenge_can_be_joined(db_session: Session):
    user = create_user(db_session)
    challenge = create_challenge(db_session, start=NOW + timedelta(days=2), end=NOW + timedelta(days=9))
    ChallengeService.join(db_session, user, challenge.id, NOW)
    assert db_session.query(ChallengeParticipant).count() == 1


def test_progress_requires_membership(db_session: Session):
    user = create_user(db_session)
    challenge = create_challenge(db_session)
    with pytest.raises(NotFoundError):
        ChallengeService.progress(db_session, user, challenge.id)


# =============================================================================
# SUBMISSIONS AND REVIEW
# =============================================================================


def joined(db: Session, **challenge_kwargs):
    user = create_user(db)
    challenge = create_challenge(db, start=NOW - timedelta(days=1), end=NOW + timedelta(days=9), **challenge_kwargs)
    ChallengeService.join(db, user, challenge.id, NOW)
    return user, challenge


def test_submit_requires_membership(db_session: Session):
    outsider = create_user(db_session)
    challenge = create_challenge(db_session)
    with pytest.raises(ForbiddenError):
        ChallengeService.submit_proof(
            db_session, outsider, challenge.tasks[0].id, SubmissionCreate(proof=PNG_PROOF, description="done")
        )


def test_submit_validation(db_session: Session):
    user, challenge = joined(db_session)
    with pytest.raises(ServiceValidationError):
        ChallengeService.submit_proof(db_session, user, challenge.tasks[0].id, SubmissionCreate(proof=PNG_PROOF))
    with pytest.raises(NotFoundError):
        ChallengeService.submit_proof(
            db_session, user, 9999, SubmissionCreate(proof=PNG_PROOF, description="done")
        )


def test_resubmission_replaces_previous_proof(db_session: Session):
    user, challenge = joined(db_session)
    task_id = challenge.tasks[0].id

    first = ChallengeService.submit_proof(
        db_session, user, task_id, SubmissionCreate(proof=PNG_PROOF, description="first try")
    )
    ChallengeService.review_submission(db_session, first["id"], ReviewDecision.DECLINE)
    second = ChallengeService.submit_proof(
        db_session, user, task_id, SubmissionCreate(proof=VIDEO_PROOF, description="second try")
    )

    assert second["id"] == first["id"]
    assert second["status"] == "pending"
    assert second["proof_type"] == ProofType.VIDEO
    queue = ChallengeService.pending_submissions(db_session)
    assert len(queue) == 1
    assert queue[0]["challenge_title"] == challenge.title


def test_approval_advances_progress_once(db_session: Session):
    user, challenge = joined(db_session)
    tasks = challenge.tasks
    submission = ChallengeService.submit_proof(
        db_session, user, tasks[0].id, SubmissionCreate(proof=PNG_PROOF, description="30 seconds")
    )

    ChallengeService.review_submission(db_session, submission["id"], ReviewDecision.APPROVE)
    ChallengeService.review_submission(db_session, submission["id"], ReviewDecision.APPROVE)

    progress = ChallengeService.progress(db_session, user, challenge.id)
    assert progress["tasks_completed"] == 1
    assert progress["progress_percentage"] == 33
    assert progress["current_task"]["id"] == tasks[1].id
    assert progress["is_completed"] is False
    assert ChallengeService.pending_submissions(db_session) == []


def test_declined_submission_keeps_progress(db_session: Session):
    user, challenge = joined(db_session)
    submission = ChallengeService.submit_proof(
        db_session, user, challenge.tasks[0].id, SubmissionCreate(proof=PNG_PROOF, description="blurry")
    )
    ChallengeService.review_submission(db_session, submission["id"], ReviewDecision.DECLINE)
    assert ChallengeService.progress(db_session, user, challenge.id)["tasks_completed"] == 0


def test_completing_every_task(db_session: Session):
    user, challenge = joined(db_session, task_count=2)
    for task in challenge.tasks:
        submission = ChallengeService.submit_proof(
            db_session, user, task.id, SubmissionCreate(proof=PNG_PROOF, description=task.task_name)
        )
        ChallengeService.review_submission(db_session, submission["id"], ReviewDecision.APPROVE)

    progress = ChallengeService.progress(db_session, user, challenge.id)
    assert progress["is_completed"] is True
    assert progress["progress_percentage"] == 100
    assert progress["current_task"] is None


def test_approved_task_cannot_be_resubmitted(db_session: Session):
    user, challenge = joined(db_session)
    task_id = challenge.tasks[0].id
    submission = ChallengeService.submit_proof(
        db_session, user, task_id, SubmissionCreate(proof=PNG_PROOF, description="done")
    )
    ChallengeService.review_submission(db_session, submission["id"], ReviewDecision.APPROVE)

    for _ in range(2):
        with pytest.raises(ConflictError):
            ChallengeService.submit_proof(
                db_session, user, task_id, SubmissionCreate(proof=PNG_PROOF, description="again")
            )

    progress = ChallengeService.progress(db_session, user, challenge.id)
    assert progress["tasks_completed"] == 1
    assert progress["is_completed"] is False


def test_first_submission_is_stored_pending(db_session: Session):
    user, challenge = joined(db_session)
    view = ChallengeService.submit_proof(
        db_session, user, challenge.tasks[0].id, SubmissionCreate(proof=PNG_PROOF, description=" plank ")
    )
    assert view["status"] == "pending"
    assert view["description"] == "plank"
    assert view["proof_type"] == ProofType.IMAGE
    assert view["submission_time"] is not None


def test_review_unknown_submission(db_session: Session):
    with pytest.raises(NotFoundError):
        ChallengeService.review_submission(db_session, 404, ReviewDecision.APPROVE)


def test_leaderboard_orders_by_progress_then_completion(db_session: Session):
    challenge = create_challenge(db_session, task_count=4)
    users = [create_user(db_session, username=name) for name in ("slow", "fast", "idle")]
    rows = [
        (users[0], 50.0, NOW),
        (users[1], 50.0, NOW - timedelta(hours=3)),
        (users[2], 0, None),
    ]
    for user, percentage, finished in rows:
        db_session.add(
            ChallengeParticipant(
                challenge_id=challenge.id,
                user_id=user.id,
                joined_at=NOW - timedelta(days=1),
                progress={"tasksCompleted": int(percentage // 25), "progressPercentage": percentage},
                completion_time=finished,
            )
        )
    db_session.commit()

    board = ChallengeService.leaderboard(db_session, challenge.id)

    assert [row["username"] for row in board] == ["fast", "slow", "idle"]
    assert [row["rank"] for row in board] == [1, 2, 3]
    assert board[0]["tasks_completed"] == 2


def test_leaderboard_untimed_entry_between_timed_ones(db_session: Session):
    challenge = create_challenge(db_session, task_count=4)
    rows = [("slow", NOW), ("idle", None), ("fast", NOW - timedelta(hours=3))]
    for offset, (name, finished) in enumerate(rows):
        user = create_user(db_session, username=name)
        db_session.add(
            ChallengeParticipant(
                challenge_id=challenge.id,
                user_id=user.id,
                joined_at=NOW - timedelta(days=3) + timedelta(hours=offset),
                progress={"tasksCompleted": 2, "progressPercentage": 50.0},
                completion_time=finished,
            )
        )
    db_session.commit()

    board = ChallengeService.leaderboard(db_session, challenge.id)

    assert [row["username"] for row in board] == ["fast", "slow", "idle"]


# =============================================================================
# ADMIN
# =============================================================================


def challenge_form(**overrides) -> ChallengeSaveRequest:
    fields = dict(
        title=" Push-up Ladder ",
        description="Add one push-up a day",
        content="Start with 10 push-ups.",
        start_date=NOW,
        end_date=NOW + timedelta(days=14),
        no_limit=False,
        max_participants="25",
        difficulty="Intermediate",
        target_audience="",
        tasks=[
            {"task_name": "Week 1", "task_description": "10 to 16 push-ups"},
            {"task_name": "Week 2", "task_description": "17 to 23 push-ups"},
        ],
    )
    fields.update(overrides)
    return ChallengeSaveRequest(**fields)


def test_save_challenge_creates_tasks(db_session: Session):
    challenge = ChallengeService.save_challenge(db_session, challenge_form())

    assert challenge.title == "Push-up Ladder"
    assert challenge.max_participants == 25
    assert challenge.target_audience == "Everyone"
    assert [t.task_name for t in challenge.tasks] == ["Week 1", "Week 2"]


@pytest.mark.parametrize(
    "overrides,message",
    [
        ({"title": " "}, "Challenge title is required."),
        ({"end_date": NOW - timedelta(days=1)}, "End date cannot be earlier than the start date."),
        ({"max_participants": "0"}, "Please enter a valid maximum number of participants."),
        ({"max_participants": "ten"}, "Please enter a valid maximum number of participants."),
        ({"tasks": []}, "Please add at least one task with a name and description."),
        (
            {"tasks": [{"task_name": "Week 1", "task_description": ""}]},
            "Please add at least one task with a name and description.",
        ),
    ],
)
def test_challenge_validation(db_session: Session, overrides, message):
    with pytest.raises(ServiceValidationError) as exc_info:
        ChallengeService.save_challenge(db_session, challenge_form(**overrides))
    assert exc_info.value.message == message


def test_no_limit_ignores_max_participants(db_session: Session):
    challenge = ChallengeService.save_challenge(
        db_session, challenge_form(no_limit=True, max_participants="ten")
    )
    assert challenge.max_participants is None


def test_edit_challenge_upserts_tasks(db_session: Session):
    challenge = ChallengeService.save_challenge(db_session, challenge_form())
    week_1_id, week_2_id = [t.id for t in challenge.tasks]

    edited = ChallengeService.save_challenge(
        db_session,
        challenge_form(
            tasks=[
                {"id": week_1_id, "task_name": "Week 1", "task_description": "12 push-ups"},
                {"task_name": "Week 3", "task_description": "24 to 30 push-ups"},
            ]
        ),
        challenge.id,
    )

    tasks = db_session.query(Task).filter(Task.challenge_id == edited.id).order_by(Task.id).all()
    assert [t.task_name for t in tasks] == ["Week 1", "Week 3"]
    assert tasks[0].id == week_1_id
    assert tasks[0].task_description == "12 push-ups"
    assert week_2_id not in {t.id for t in tasks}


def test_delete_challenge(db_session: Session):
    challenge = create_challenge(db_session)
    ChallengeService.delete_challenge(db_session, challenge.id)
    assert ChallengeService.list_challenges(db_session, NOW) == []
    with pytest.raises(NotFoundError):
        ChallengeService.delete_challenge(db_session, challenge.id)
