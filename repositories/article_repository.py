"""
Article Repository - community articles and their approval state
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from repositories.base import BaseRepository
from domain.models import Article
from domain.enums import ApprovalStatus


class ArticleRepository(BaseRepository[Article]):
    def __init__(self, db: Session):
        super().__init__(db, Article)

    def list_by_status(
        self, status: ApprovalStatus, user_id: Optional[UUID] = None
    ) -> List[Article]:
        """Articles with the given status, newest first"""
        query = (
            self.db.query(Article)
            .options(joinedload(Article.user))
            .filter(Article.approval_status == status.value)
        )
        if user_id is not None:
            query = query.filter(Article.user_id == user_id)
        return query.order_by(Article.created_at.desc(), Article.id.desc()).all()

    def count_by_status(self, status: ApprovalStatus) -> int:
        return (
            self.db.query(func.count(Article.id))
            .filter(Article.approval_status == status.value)
            .scalar()
            or 0
        )
