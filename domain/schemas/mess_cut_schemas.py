from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime
from uuid import UUID

from domain.enums import MealType, DeliveryStatus


class MessCutRequest(BaseModel):
    """Schema for a customer's request to skip one scheduled meal"""

    subscription_id: UUID
    date: date
    meal_type: MealType
    reason: Optional[str] = Field(
        None, max_length=500, description="Optional reason shown to the mess owner"
    )


class MessCutEligibilityResponse(BaseModel):
    """Whether a meal can still be skipped"""

    date: date
    meal_type: str
    eligible: bool
    scheduled_at: datetime
    notice_hours: int


class DeliveryResponse(BaseModel):
    """Schema for delivery response"""

    delivery_id: UUID
    subscription_id: UUID
    mess_id: UUID
    customer_id: UUID
    date: date
    meal_type: MealType
    status: DeliveryStatus
    skip_reason: Optional[str] = None
    skip_requested_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    delivery_notes: Optional[str] = None
    mess_name: Optional[str] = None
    mess_owner_id: Optional[UUID] = None

    model_config = {"from_attributes": True}
