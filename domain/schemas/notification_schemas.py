from pydantic import BaseModel
from typing import Optional, Dict, Any
from datetime import datetime
from uuid import UUID

from domain.enums import NotificationType


class NotificationResponse(BaseModel):
    """Schema for notification response"""

    notification_id: UUID
    user_id: UUID
    title: str
    message: str
    type: NotificationType
    data: Optional[Dict[str, Any]] = None
    is_read: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class UnreadCountResponse(BaseModel):
    user_id: UUID
    unread_count: int
