"""
User Repository - Data access layer for user accounts
"""

from typing import Optional, List
from uuid import UUID
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import User
from domain.enums import UserRole

SORTABLE_USER_FIELDS = {
    "username": User.username,
    "email": User.email,
    "role": User.role,
}


class UserRepository(BaseRepository[User]):
    """Repository for user data access"""

    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_by_id(self, user_id: UUID) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email, ignoring case"""
        return (
            self.db.query(User)
            .filter(func.lower(User.email) == email.strip().lower())
            .first()
        )

    def list_manageable(
        self,
        search: Optional[str] = None,
        sort_by: str = "username",
        descending: bool = False,
    ) -> List[User]:
        """Users an admin may manage (everyone except super admins)"""
        query = self.db.query(User).filter(User.role != UserRole.SUPER_ADMIN.value)
        if search:
            pattern = f"%{search.strip().lower()}%"
            query = query.filter(
                or_(
                    func.lower(func.coalesce(User.username, "")).like(pattern),
                    func.lower(User.email).like(pattern),
                )
            )
        column = SORTABLE_USER_FIELDS.get(sort_by, User.username)
        order = column.desc() if descending else column.asc()
        return query.order_by(order, User.email.asc()).all()

    def count_manageable(self) -> int:
        return (
            self.db.query(func.count(User.id))
            .filter(User.role != UserRole.SUPER_ADMIN.value)
            .scalar()
            or 0
        )
