"""
Moment repositories - posts, likes, comments and reports
"""

from typing import Dict, List, Optional, Sequence, Set
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from repositories.base import BaseRepository
from domain.models import Moment, Like, Comment, Report


class MomentRepository(BaseRepository[Moment]):
    """Repository for moments"""

    def __init__(self, db: Session):
        super().__init__(db, Moment)

    def list_public(self) -> List[Moment]:
        """Every non-private moment, newest first"""
        return (
            self.db.query(Moment)
            .options(joinedload(Moment.user))
            .filter(Moment.is_private.is_(False))
            .order_by(Moment.created_at.desc(), Moment.id.desc())
            .all()
        )

    def list_by_user(self, user_id: UUID, include_private: bool) -> List[Moment]:
        query = self.db.query(Moment).filter(Moment.user_id == user_id)
        if not include_private:
            query = query.filter(Moment.is_private.is_(False))
        return query.order_by(Moment.created_at.desc(), Moment.id.desc()).all()


class LikeRepository(BaseRepository[Like]):
    """Repository for likes"""

    def __init__(self, db: Session):
        super().__init__(db, Like)

    def get(self, moment_id: int, user_id: UUID) -> Optional[Like]:
        return (
            self.db.query(Like)
            .filter(Like.moment_id == moment_id, Like.user_id == user_id)
            .first()
        )

    def count_for(self, moment_id: int) -> int:
        return (
            self.db.query(func.count(Like.id))
            .filter(Like.moment_id == moment_id)
            .scalar()
            or 0
        )

    def counts_by_moment(self, moment_ids: Sequence[int]) -> Dict[int, int]:
        if not moment_ids:
            return {}
        rows = (
            self.db.query(Like.moment_id, func.count(Like.id))
            .filter(Like.moment_id.in_(moment_ids))
            .group_by(Like.moment_id)
            .all()
        )
        return {moment_id: count for moment_id, count in rows}

    def liked_moment_ids(self, user_id: UUID, moment_ids: Sequence[int]) -> Set[int]:
        if not moment_ids:
            return set()
        rows = (
            self.db.query(Like.moment_id)
            .filter(Like.user_id == user_id, Like.moment_id.in_(moment_ids))
            .all()
        )
        return {row[0] for row in rows}


class CommentRepository(BaseRepository[Comment]):
    """Repository for comments"""

    def __init__(self, db: Session):
        super().__init__(db, Comment)

    def list_for_moment(self, moment_id: int) -> List[Comment]:
        """Comments oldest first"""
        return (
            self.db.query(Comment)
            .options(joinedload(Comment.user))
            .filter(Comment.moment_id == moment_id)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
            .all()
        )

    def counts_by_moment(self, moment_ids: Sequence[int]) -> Dict[int, int]:
        if not moment_ids:
            return {}
        rows = (
            self.db.query(Comment.moment_id, func.count(Comment.id))
            .filter(Comment.moment_id.in_(moment_ids))
            .group_by(Comment.moment_id)
            .all()
        )
        return {moment_id: count for moment_id, count in rows}


class ReportRepository(BaseRepository[Report]):
    """Repository for moment reports"""

    def __init__(self, db: Session):
        super().__init__(db, Report)

    def list_with_moments(self) -> List[Report]:
        """Reports newest first, with the moment and its author loaded"""
        return (
            self.db.query(Report)
            .options(joinedload(Report.moment).joinedload(Moment.user))
            .order_by(Report.created_at.desc(), Report.id.desc())
            .all()
        )

    def delete_for_moment(self, moment_id: int) -> int:
        count = (
            self.db.query(Report)
            .filter(Report.moment_id == moment_id)
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return count
