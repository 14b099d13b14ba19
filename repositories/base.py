"""
Base repository for the data access layer.
Services talk to repositories; repositories talk to the SQLAlchemy session.
"""

from typing import Generic, TypeVar, Optional, List, Type, Any
from sqlalchemy import func
from sqlalchemy.orm import Session
from abc import ABC

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository providing common CRUD operations.

    Write helpers only flush; the calling service owns the transaction and
    commits once per operation.
    """

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, entity_id: Any) -> Optional[ModelType]:
        """Get entity by primary key"""
        return self.db.get(self.model, entity_id)

    def get_all(self, skip: int = 0, limit: int = 100) -> List[ModelType]:
        """Get all entities with pagination"""
        return self.db.query(self.model).offset(skip).limit(limit).all()

    def count(self) -> int:
        return self.db.query(func.count()).select_from(self.model).scalar() or 0

    def add(self, entity: ModelType) -> ModelType:
        """Stage a new entity and flush so generated keys are available"""
        self.db.add(entity)
        self.db.flush()
        return entity

    def delete(self, entity: ModelType) -> None:
        self.db.delete(entity)
        self.db.flush()

    def exists(self, entity_id: Any) -> bool:
        """Check if entity exists"""
        return self.get_by_id(entity_id) is not None
