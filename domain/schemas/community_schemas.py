from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from uuid import UUID

from domain.enums import ReviewDecision


class MomentCreate(BaseModel):
    caption: Optional[str] = None
    image_base64: Optional[str] = None
    is_private: bool = False


class MomentResponse(BaseModel):
    """Moment as shown in the feed, with like/comment counters"""

    id: int
    user_id: UUID
    username: str
    profile_picture: Optional[str] = None
    caption: Optional[str] = None
    image_base64: Optional[str] = None
    is_private: bool
    created_at: Optional[datetime] = None
    like_count: int = 0
    comment_count: int = 0
    is_liked_by_current_user: bool = False


class PrivacyUpdate(BaseModel):
    is_private: bool


class LikeToggleResponse(BaseModel):
    moment_id: int
    liked: bool
    like_count: int


class CommentCreate(BaseModel):
    text: str = Field("", max_length=1000)


class CommentResponse(BaseModel):
    id: int
    moment_id: int
    user_id: UUID
    username: str
    text: str
    created_at: Optional[datetime] = None


class ReportCreate(BaseModel):
    reason: Optional[str] = None
    additional_comment: Optional[str] = Field(None, max_length=1000)


class ReportResponse(BaseModel):
    id: int
    moment_id: int
    reason: str
    additional_comment: Optional[str] = None

    model_config = {"from_attributes": True}


class ReportedMomentResponse(BaseModel):
    """Report joined with its moment and author for the moderation queue"""

    report_id: int
    moment_id: int
    reason: str
    additional_comment: Optional[str] = None
    caption: str
    image: Optional[str] = Field(None, description="Data URI of the moment image")
    user_id: Optional[UUID] = None
    username: str


class ArticleCreate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    image_base64: Optional[str] = None


class ArticleResponse(BaseModel):
    id: int
    user_id: UUID
    username: str
    title: str
    content: str
    image_base64: Optional[str] = None
    approval_status: str
    created_at: Optional[datetime] = None


class ReviewRequest(BaseModel):
    decision: ReviewDecision
