"""
Notification Repository - Data access layer for in-app notifications
"""

from typing import List, Optional, Dict, Any
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy import func

from repositories.base import BaseRepository
from domain.models import Notification
from domain.enums import NotificationType


class NotificationRepository(BaseRepository[Notification]):
    """Repository for notification data access"""

    id_field = "notification_id"

    def __init__(self, db: Session):
        super().__init__(db, Notification)

    def create_notification(
        self,
        user_id: UUID,
        title: str,
        message: str,
        type: NotificationType,
        data: Optional[Dict[str, Any]] = None,
    ) -> Notification:
        """Insert an unread notification"""
        notification = Notification(
            user_id=user_id,
            title=title,
            message=message,
            type=type,
            data=data,
            is_read=False,
        )
        self.db.add(notification)
        self.db.commit()
        self.db.refresh(notification)
        return notification

    def get_by_user_id(self, user_id: UUID, limit: int = 50) -> List[Notification]:
        """Get a user's notifications, newest first"""
        return (
            self.db.query(Notification)
            .filter(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc())
            .limit(limit)
            .all()
        )

    def mark_as_read(self, notification_id: UUID) -> int:
        updated = (
            self.db.query(Notification)
            .filter(Notification.notification_id == notification_id)
            .update({Notification.is_read: True}, synchronize_session=False)
        )
        self.db.commit()
        return updated

    def count_unread(self, user_id: UUID) -> int:
        """Count unread notifications for a user"""
        return (
            self.db.query(func.count(Notification.notification_id))
            .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
            .scalar()
        ) or 0
