from pydantic import BaseModel, Field
from typing import Optional, List, Union
from datetime import datetime
from uuid import UUID

from domain.enums import ChallengeDifficulty, ChallengeStatus, ProofType


class TaskInput(BaseModel):
    """Task row of the challenge form; id is set when editing an existing task"""

    id: Optional[int] = None
    task_name: Optional[str] = None
    task_description: Optional[str] = None


class ChallengeSaveRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    no_limit: bool = False
    max_participants: Optional[Union[int, str]] = None
    difficulty: ChallengeDifficulty = ChallengeDifficulty.BEGINNER
    target_audience: Optional[str] = None
    tasks: List[TaskInput] = Field(default_factory=list)


class TaskResponse(BaseModel):
    id: int
    task_name: str
    task_description: str

    model_config = {"from_attributes": True}


class ChallengeResponse(BaseModel):
    id: int
    title: str
    description: str
    content: str
    start_date: datetime
    end_date: datetime
    max_participants: Optional[int] = None
    no_limit: bool
    difficulty: str
    target_audience: str
    status: ChallengeStatus
    time_progress: float = Field(..., description="Elapsed share of the challenge, 0-100")
    tasks: List[TaskResponse]


class CommunityChallengesResponse(BaseModel):
    current: List[ChallengeResponse]
    upcoming: List[ChallengeResponse]


class ParticipantSummary(BaseModel):
    user_id: UUID
    username: Optional[str] = None
    profile_picture: Optional[str] = None
    joined_at: Optional[datetime] = None


class ChallengeDetailResponse(BaseModel):
    challenge: ChallengeResponse
    participant_count: int
    participants: List[ParticipantSummary]
    is_joined: bool


class LeaderboardEntry(BaseModel):
    rank: int
    user_id: UUID
    username: Optional[str] = None
    profile_picture: Optional[str] = None
    tasks_completed: int
    progress_percentage: int
    completion_time: Optional[datetime] = None


class ProgressResponse(BaseModel):
    challenge_id: int
    title: str
    tasks_completed: int
    total_tasks: int
    progress_percentage: int
    current_task: Optional[TaskResponse] = None
    is_completed: bool
    leaderboard: List[LeaderboardEntry]


class SubmissionCreate(BaseModel):
    proof: Optional[str] = Field(None, description="Base64 image or video")
    description: Optional[str] = None


class SubmissionResponse(BaseModel):
    id: int
    user_id: UUID
    task_id: int
    description: str
    status: str
    proof_type: ProofType
    submission_time: Optional[datetime] = None


class PendingSubmissionResponse(BaseModel):
    id: int
    user_id: UUID
    username: Optional[str] = None
    task_id: int
    task_name: str
    challenge_id: int
    challenge_title: str
    proof: str
    proof_type: ProofType
    description: str
    submission_time: Optional[datetime] = None
