"""Notification inbox routes"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from api.dependencies import get_db
from domain.schemas.notification_schemas import NotificationResponse, UnreadCountResponse
from services import NotificationService

router = APIRouter(prefix="/notifications", tags=["Notifications"])
logger = logging.getLogger("messmate.api.notifications")


@router.get("", response_model=List[NotificationResponse])
def list_notifications(
    user_id: UUID = Query(..., description="Recipient user ID"),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
):
    """Return a user's notifications, newest first."""
    return NotificationService.list_notifications(db, user_id, limit=limit)


@router.get("/unread-count", response_model=UnreadCountResponse)
def unread_count(
    user_id: UUID = Query(..., description="Recipient user ID"),
    db: Session = Depends(get_db),
):
    return UnreadCountResponse(
        user_id=user_id, unread_count=NotificationService.get_unread_count(db, user_id)
    )


@router.patch("/{notification_id}/read")
def mark_as_read(notification_id: UUID, db: Session = Depends(get_db)):
    """Mark a notification as read. Failures are logged, not reported."""
    NotificationService.mark_as_read(db, notification_id)
    return {"status": "ok", "notification_id": str(notification_id)}
