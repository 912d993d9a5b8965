"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.mess_cut_schemas import (
    MessCutRequest,
    MessCutEligibilityResponse,
    DeliveryResponse,
)
from domain.schemas.notification_schemas import (
    NotificationResponse,
    UnreadCountResponse,
)
from domain.schemas.mess_schemas import (
    MessDiscoveryResult,
    MealPricingUpdate,
    MealPricingResponse,
    SubscriptionPlanCreate,
    SubscriptionPlanResponse,
    NavigationResponse,
)

__all__ = [
    # Mess cut schemas
    "MessCutRequest",
    "MessCutEligibilityResponse",
    "DeliveryResponse",
    # Notification schemas
    "NotificationResponse",
    "UnreadCountResponse",
    # Mess schemas
    "MessDiscoveryResult",
    "MealPricingUpdate",
    "MealPricingResponse",
    "SubscriptionPlanCreate",
    "SubscriptionPlanResponse",
    "NavigationResponse",
]
