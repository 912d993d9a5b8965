from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session
import logging
import uuid

from adapters import push_adapter
from app.config import settings
from domain.enums import NotificationType
from domain.models import Notification
from repositories import NotificationRepository, UserRepository

logger = logging.getLogger("messmate.notifications")


class NotificationService:
    @staticmethod
    def resolve_type(data: Optional[Dict[str, Any]]) -> NotificationType:
        """Notification type from the payload's ``type`` key, ``system`` when absent or unknown"""
        raw = (data or {}).get("type")
        if not raw:
            return NotificationType.SYSTEM
        try:
            return NotificationType(raw)
        except ValueError:
            logger.warning(f"Unknown notification type '{raw}', storing as system")
            return NotificationType.SYSTEM

    @staticmethod
    def send_notification(
        db: Session,
        user_id: uuid.UUID,
        title: str,
        message: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Store a notification for a user and push it to their device.

        This never raises: a failed insert or push is logged and the caller's
        own operation carries on. Callers must not rely on delivery.

        Args:
            db: Database session
            user_id: Recipient user
            title: Alert title
            message: Alert body
            data: Structured payload; its ``type`` key selects the notification type
        """
        try:
            repo = NotificationRepository(db)
            notification = repo.create_notification(
                user_id=user_id,
                title=title,
                message=message,
                type=NotificationService.resolve_type(data),
                data=data,
            )
            logger.info(
                f"notification_stored user_id={user_id} "
                f"notification_id={notification.notification_id} "
                f"type={notification.type}"
            )

            if not settings.push_enabled:
                return

            token = UserRepository(db).get_push_token(user_id)
            if not token:
                logger.info(f"No push token for user {user_id}; skipping push")
                return

            push_adapter.send_push(token, title, message, data)
            logger.info(f"push_sent user_id={user_id}")
        except Exception as e:
            try:
                db.rollback()
            except Exception:
                logger.exception("Rollback after notification failure also failed")
            logger.error(f"Error sending notification to user {user_id}: {e}")

    @staticmethod
    def mark_as_read(db: Session, notification_id: uuid.UUID) -> None:
        try:
            updated = NotificationRepository(db).mark_as_read(notification_id)
            if not updated:
                logger.warning(f"mark_as_read: notification {notification_id} not found")
        except Exception as e:
            db.rollback()
            logger.error(f"Error marking notification {notification_id} as read: {e}")

    @staticmethod
    def get_unread_count(db: Session, user_id: uuid.UUID) -> int:
        """Number of unread notifications; 0 when the count cannot be read"""
        try:
            return NotificationRepository(db).count_unread(user_id)
        except Exception as e:
            logger.error(f"Error getting unread count for user {user_id}: {e}")
            return 0

    @staticmethod
    def list_notifications(
        db: Session, user_id: uuid.UUID, limit: int = 50
    ) -> List[Notification]:
        return NotificationRepository(db).get_by_user_id(user_id, limit=limit)
