"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.user_repository import UserRepository
from repositories.delivery_repository import DeliveryRepository
from repositories.notification_repository import NotificationRepository
from repositories.mess_repository import (
    MessRepository,
    MealPricingRepository,
    SubscriptionPlanRepository,
    WeeklyMenuRepository,
)

__all__ = [
    "BaseRepository",
    "UserRepository",
    "DeliveryRepository",
    "NotificationRepository",
    "MessRepository",
    "MealPricingRepository",
    "SubscriptionPlanRepository",
    "WeeklyMenuRepository",
]
