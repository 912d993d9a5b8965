"""
Domain enums for MessMate application.
Contains all enumeration types used across the domain models.
"""

import enum


class UserRole(str, enum.Enum):
    """Account roles"""

    CUSTOMER = "customer"
    MESS_OWNER = "mess_owner"
    ADMIN = "admin"


class MessStatus(str, enum.Enum):
    """Mess approval lifecycle"""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    SUSPENDED = "suspended"


class MealType(str, enum.Enum):
    """Meal slots served by a mess"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class PlanType(str, enum.Enum):
    """Billing period of a subscription"""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class SubscriptionStatus(str, enum.Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


class DeliveryStatus(str, enum.Enum):
    """Lifecycle of a single scheduled meal"""

    SCHEDULED = "scheduled"
    SKIPPED = "skipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class NotificationType(str, enum.Enum):
    MESS_CUT = "mess_cut"
    DELIVERY = "delivery"
    SUBSCRIPTION = "subscription"
    SYSTEM = "system"
    RATING = "rating"


class DurationType(str, enum.Enum):
    """Subscription plan duration"""

    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Weekday(str, enum.Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"
