"""Community articles"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from api.dependencies import get_current_user, get_db
from domain.models import User
from domain.schemas.community_schemas import ArticleCreate, ArticleResponse
from services.article_service import ArticleService

router = APIRouter(prefix="/articles", tags=["Articles"])


@router.get("", response_model=List[ArticleResponse])
def community_articles(_: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return ArticleService.community_articles(db)


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
def submit_article(
    payload: ArticleCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """New articles wait for admin approval"""
    return ArticleService.submit_article(db, user, payload)


@router.get("/{article_id}", response_model=ArticleResponse)
def article_detail(
    article_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ArticleService.article_detail(db, user, article_id)
