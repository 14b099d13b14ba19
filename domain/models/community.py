"""
Community models: moments with their likes, comments and reports, and articles.
"""

from sqlalchemy import (
    Column,
    Text,
    Integer,
    Boolean,
    DateTime,
    ForeignKey,
    Uuid,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from domain.models.database import Base
from domain.enums import ApprovalStatus
from domain.helpers import utcnow


class Moment(Base):
    """User post: base64 image plus caption"""

    __tablename__ = "moments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    caption = Column(Text)
    image_base64 = Column(Text)
    is_private = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    # Relationships
    user = relationship("User", back_populates="moments")
    likes = relationship("Like", back_populates="moment", cascade="all, delete-orphan")
    comments = relationship(
        "Comment",
        back_populates="moment",
        cascade="all, delete-orphan",
        order_by="Comment.created_at",
    )
    reports = relationship(
        "Report", back_populates="moment", cascade="all, delete-orphan"
    )


class Like(Base):
    __tablename__ = "likes"
    __table_args__ = (UniqueConstraint("moment_id", "user_id", name="uq_like"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    moment_id = Column(
        Integer, ForeignKey("moments.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    # Relationships
    moment = relationship("Moment", back_populates="likes")
    user = relationship("User", back_populates="likes")


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    moment_id = Column(
        Integer, ForeignKey("moments.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    text = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    # Relationships
    moment = relationship("Moment", back_populates="comments")
    user = relationship("User", back_populates="comments")


class Report(Base):
    """Abuse report against a moment, reviewed by admins"""

    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, autoincrement=True)
    moment_id = Column(
        Integer, ForeignKey("moments.id", ondelete="CASCADE"), nullable=False
    )
    reporter_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    reason = Column(Text, nullable=False)
    additional_comment = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    # Relationships
    moment = relationship("Moment", back_populates="reports")


class Article(Base):
    """Community article; visible once an admin approves it"""

    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    image_base64 = Column(Text)
    approval_status = Column(
        Text, nullable=False, default=ApprovalStatus.PENDING.value
    )
    created_at = Column(DateTime(timezone=True), default=utcnow)

    # Relationships
    user = relationship("User", back_populates="articles")
