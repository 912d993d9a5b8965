"""
User Repository - Data access layer for user accounts
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import AppUser


class UserRepository(BaseRepository[AppUser]):
    """Repository for user data access"""

    id_field = "user_id"

    def __init__(self, db: Session):
        super().__init__(db, AppUser)

    def get_push_token(self, user_id: UUID) -> Optional[str]:
        """Return the registered push token of a user, if any"""
        row = (
            self.db.query(AppUser.push_token)
            .filter(AppUser.user_id == user_id, AppUser.is_active.is_(True))
            .first()
        )
        return row[0] if row else None
