"""
Challenge models: challenges, their tasks, participants and proof submissions.
"""

from sqlalchemy import (
    Column,
    Text,
    Integer,
    Boolean,
    DateTime,
    ForeignKey,
    Uuid,
    JSON,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from domain.models.database import Base
from domain.enums import ApprovalStatus, ChallengeDifficulty
from domain.helpers import utcnow


class Challenge(Base):
    __tablename__ = "challenges"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    max_participants = Column(Integer, nullable=True)
    no_limit = Column(Boolean, nullable=False, default=False)
    difficulty = Column(
        Text, nullable=False, default=ChallengeDifficulty.BEGINNER.value
    )
    target_audience = Column(Text, nullable=False, default="Everyone")
    created_at = Column(DateTime(timezone=True), default=utcnow)

    # Relationships
    tasks = relationship(
        "Task",
        back_populates="challenge",
        cascade="all, delete-orphan",
        order_by="Task.id",
    )
    participants = relationship(
        "ChallengeParticipant",
        back_populates="challenge",
        cascade="all, delete-orphan",
        order_by="ChallengeParticipant.joined_at",
    )


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    challenge_id = Column(
        Integer, ForeignKey("challenges.id", ondelete="CASCADE"), nullable=False
    )
    task_name = Column(Text, nullable=False)
    task_description = Column(Text, nullable=False)

    # Relationships
    challenge = relationship("Challenge", back_populates="tasks")
    submissions = relationship(
        "ChallengeSubmission", back_populates="task", cascade="all, delete-orphan"
    )


class ChallengeParticipant(Base):
    """Membership of a user in a challenge with its progress document"""

    __tablename__ = "challenge_participants"
    __table_args__ = (
        UniqueConstraint("challenge_id", "user_id", name="uq_challenge_participant"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    challenge_id = Column(
        Integer, ForeignKey("challenges.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    joined_at = Column(DateTime(timezone=True), default=utcnow)
    # {"tasksCompleted": int, "progressPercentage": float, "current_task": int | None}
    progress = Column(JSON)
    completion_time = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    challenge = relationship("Challenge", back_populates="participants")
    user = relationship("User", back_populates="participations")


class ChallengeSubmission(Base):
    """Proof (base64 image or video) that a user finished a task"""

    __tablename__ = "challenge_submissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    task_id = Column(
        Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False
    )
    proof = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    status = Column(Text, nullable=False, default=ApprovalStatus.PENDING.value)
    submission_time = Column(DateTime(timezone=True), default=utcnow)

    # Relationships
    user = relationship("User", back_populates="submissions")
    task = relationship("Task", back_populates="submissions")
