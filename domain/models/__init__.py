"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
)
from domain.models.user import AppUser
from domain.models.mess import Mess, MealPricing, SubscriptionPlan, WeeklyMenu
from domain.models.subscription import Subscription, Delivery
from domain.models.notification import Notification

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    # User models
    "AppUser",
    # Mess models
    "Mess",
    "MealPricing",
    "SubscriptionPlan",
    "WeeklyMenu",
    # Subscription models
    "Subscription",
    "Delivery",
    # Notification models
    "Notification",
]
