"""
Community moments: the feed, likes, comments and reports.
"""

from typing import Any, Dict, List
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import ConflictError, NotFoundError, ServiceValidationError
from domain.helpers import is_blank
from domain.models import Comment, Like, Moment, Report, User
from domain.schemas.community_schemas import CommentCreate, MomentCreate, ReportCreate
from repositories import (
    CommentRepository,
    LikeRepository,
    MomentRepository,
    ReportRepository,
)

logger = logging.getLogger("fitnesshub.moments")


class MomentService:
    """Business logic for moments"""

    @staticmethod
    def _views(db: Session, user: User, moments: List[Moment]) -> List[Dict[str, Any]]:
        ids = [m.id for m in moments]
        like_counts = LikeRepository(db).counts_by_moment(ids)
        comment_counts = CommentRepository(db).counts_by_moment(ids)
        liked = LikeRepository(db).liked_moment_ids(user.id, ids)
        return [
            {
                "id": m.id,
                "user_id": m.user_id,
                "username": (m.user.username if m.user else None) or "Guest",
                "profile_picture": m.user.profile_picture if m.user else None,
                "caption": m.caption,
                "image_base64": m.image_base64,
                "is_private": bool(m.is_private),
                "created_at": m.created_at,
                "like_count": like_counts.get(m.id, 0),
                "comment_count": comment_counts.get(m.id, 0),
                "is_liked_by_current_user": m.id in liked,
            }
            for m in moments
        ]

    @staticmethod
    def _visible_moment(db: Session, user: User, moment_id: int) -> Moment:
        moment = MomentRepository(db).get_by_id(moment_id)
        if not moment or (moment.is_private and moment.user_id != user.id):
            raise NotFoundError(f"Moment {moment_id} not found")
        return moment

    @staticmethod
    def _owned_moment(db: Session, user: User, moment_id: int) -> Moment:
        moment = MomentRepository(db).get_by_id(moment_id)
        if not moment or moment.user_id != user.id:
            raise NotFoundError(f"Moment {moment_id} not found")
        return moment

    @staticmethod
    def feed(db: Session, user: User) -> List[Dict[str, Any]]:
        moments = MomentRepository(db).list_public()
        logger.info(f"feed_fetched user_id={user.id} count={len(moments)}")
        return MomentService._views(db, user, moments)

    @staticmethod
    def moment_detail(db: Session, user: User, moment_id: int) -> Dict[str, Any]:
        moment = MomentService._visible_moment(db, user, moment_id)
        return MomentService._views(db, user, [moment])[0]

    @staticmethod
    def my_moments(db: Session, user: User) -> List[Dict[str, Any]]:
        moments = MomentRepository(db).list_by_user(user.id, include_private=True)
        return MomentService._views(db, user, moments)

    @staticmethod
    def add_moment(db: Session, user: User, data: MomentCreate) -> Dict[str, Any]:
        if is_blank(data.caption):
            raise ServiceValidationError("Caption Required")
        caption = data.caption.strip()
        limit = settings.moment_caption_max_length
        if len(caption) > limit:
            raise ServiceValidationError(
                f"Caption cannot be longer than {limit} characters."
            )
        if is_blank(data.image_base64):
            raise ServiceValidationError("Please select an image.")

        moment = MomentRepository(db).add(
            Moment(
                user_id=user.id,
                caption=caption,
                image_base64=data.image_base64,
                is_private=data.is_private,
            )
        )
        db.commit()
        db.refresh(moment)
        logger.info(f"moment_created user_id={user.id} moment_id={moment.id} private={moment.is_private}")
        return MomentService._views(db, user, [moment])[0]

    @staticmethod
    def delete_moment(db: Session, user: User, moment_id: int) -> None:
        moment = MomentService._owned_moment(db, user, moment_id)
        MomentRepository(db).delete(moment)
        db.commit()
        logger.info(f"moment_deleted user_id={user.id} moment_id={moment_id}")

    @staticmethod
    def set_privacy(db: Session, user: User, moment_id: int, is_private: bool) -> Dict[str, Any]:
        moment = MomentService._owned_moment(db, user, moment_id)
        moment.is_private = is_private
        db.commit()
        db.refresh(moment)
        logger.info(f"moment_privacy_set moment_id={moment_id} private={is_private}")
        return MomentService._views(db, user, [moment])[0]

    @staticmethod
    def toggle_like(db: Session, user: User, moment_id: int) -> Dict[str, Any]:
        MomentService._visible_moment(db, user, moment_id)
        repo = LikeRepository(db)
        existing = repo.get(moment_id, user.id)
        try:
            if existing:
                repo.delete(existing)
            else:
                repo.add(Like(moment_id=moment_id, user_id=user.id))
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.error(f"like_toggle_failed moment_id={moment_id} error={str(e)}")
            raise ConflictError("This moment was already liked")

        liked = existing is None
        count = repo.count_for(moment_id)
        logger.info(f"like_toggled user_id={user.id} moment_id={moment_id} liked={liked}")
        return {"moment_id": moment_id, "liked": liked, "like_count": count}

    @staticmethod
    def comments(db: Session, user: User, moment_id: int) -> List[Dict[str, Any]]:
        MomentService._visible_moment(db, user, moment_id)
        return [
            {
                "id": c.id,
                "moment_id": c.moment_id,
                "user_id": c.user_id,
                "username": (c.user.username if c.user else None) or "Unknown",
                "text": c.text,
                "created_at": c.created_at,
            }
            for c in CommentRepository(db).list_for_moment(moment_id)
        ]

    @staticmethod
    def add_comment(db: Session, user: User, moment_id: int, data: CommentCreate) -> Dict[str, Any]:
        MomentService._visible_moment(db, user, moment_id)
        if is_blank(data.text):
            raise ServiceValidationError("Comment cannot be empty.")
        comment = CommentRepository(db).add(
            Comment(moment_id=moment_id, user_id=user.id, text=data.text.strip())
        )
        db.commit()
        db.refresh(comment)
        logger.info(f"comment_added user_id={user.id} moment_id={moment_id}")
        return {
            "id": comment.id,
            "moment_id": moment_id,
            "user_id": user.id,
            "username": user.username or "Unknown",
            "text": comment.text,
            "created_at": comment.created_at,
        }

    @staticmethod
    def report_moment(db: Session, user: User, moment_id: int, data: ReportCreate) -> Report:
        MomentService._visible_moment(db, user, moment_id)
        if is_blank(data.reason):
            raise ServiceValidationError("Please select a reason for reporting.")
        report = ReportRepository(db).add(
            Report(
                moment_id=moment_id,
                reporter_id=user.id,
                reason=data.reason.strip(),
                additional_comment=(data.additional_comment or "").strip() or None,
            )
        )
        db.commit()
        db.refresh(report)
        logger.info(f"moment_reported user_id={user.id} moment_id={moment_id} report_id={report.id}")
        return report
