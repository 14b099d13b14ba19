from typing import Any, Dict, List
import logging

from sqlalchemy.orm import Session

from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import ApprovalStatus, ReviewDecision
from domain.helpers import is_blank
from domain.models import Article, User
from domain.schemas.community_schemas import ArticleCreate
from repositories import ArticleRepository

logger = logging.getLogger("fitnesshub.articles")


class ArticleService:
    """Community articles and their approval workflow"""

    @staticmethod
    def to_dict(article: Article) -> Dict[str, Any]:
        return {
            "id": article.id,
            "user_id": article.user_id,
            "username": (article.user.username if article.user else None) or "Unknown",
            "title": article.title,
            "content": article.content,
            "image_base64": article.image_base64,
            "approval_status": article.approval_status,
            "created_at": article.created_at,
        }

    @staticmethod
    def community_articles(db: Session) -> List[Dict[str, Any]]:
        articles = ArticleRepository(db).list_by_status(ApprovalStatus.APPROVE)
        return [ArticleService.to_dict(a) for a in articles]

    @staticmethod
    def article_detail(db: Session, user: User, article_id: int) -> Dict[str, Any]:
        """Approved articles are public; pending or declined ones only to the author and admins"""
        article = ArticleRepository(db).get_by_id(article_id)
        visible = article is not None and (
            article.approval_status == ApprovalStatus.APPROVE.value
            or article.user_id == user.id
            or user.is_admin
        )
        if not visible:
            raise NotFoundError(f"Article {article_id} not found")
        return ArticleService.to_dict(article)

    @staticmethod
    def submit_article(db: Session, user: User, data: ArticleCreate) -> Dict[str, Any]:
        if is_blank(data.title) or is_blank(data.content) or is_blank(data.image_base64):
            raise ServiceValidationError("Please add a title, content and an image.")
        article = ArticleRepository(db).add(
            Article(
                user_id=user.id,
                title=data.title.strip(),
                content=data.content.strip(),
                image_base64=data.image_base64,
                approval_status=ApprovalStatus.PENDING.value,
            )
        )
        db.commit()
        db.refresh(article)
        logger.info(f"article_submitted user_id={user.id} article_id={article.id}")
        return ArticleService.to_dict(article)

    @staticmethod
    def pending_articles(db: Session) -> List[Dict[str, Any]]:
        articles = ArticleRepository(db).list_by_status(ApprovalStatus.PENDING)
        return [ArticleService.to_dict(a) for a in articles]

    @staticmethod
    def review_article(db: Session, article_id: int, decision: ReviewDecision) -> Dict[str, Any]:
        article = ArticleRepository(db).get_by_id(article_id)
        if not article:
            raise NotFoundError(f"Article {article_id} not found")
        article.approval_status = decision.value
        db.commit()
        db.refresh(article)
        logger.info(f"article_reviewed article_id={article_id} decision={decision.value}")
        return ArticleService.to_dict(article)
