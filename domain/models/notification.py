"""
In-app notification model.
"""

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Boolean, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base, json_document
from domain.enums import NotificationType


class Notification(Base):
    """Notification delivered to a single user"""

    __tablename__ = "notification"

    notification_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    type = Column(
        SQLEnum(
            NotificationType,
            name="notification_type",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )
    data = Column(json_document())
    is_read = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), index=True)

    user = relationship("AppUser", back_populates="notifications")
