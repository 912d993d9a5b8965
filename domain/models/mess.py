"""
Mess (meal provider) and pricing models.
"""

from sqlalchemy import (
    Column,
    Text,
    TIMESTAMP,
    ForeignKey,
    Numeric,
    Integer,
    Boolean,
    Float,
    CheckConstraint,
    UniqueConstraint,
    Enum as SQLEnum,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base, text_array, json_document
from domain.enums import MessStatus


class Mess(Base):
    """A meal provider run by a mess owner"""

    __tablename__ = "mess"

    mess_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(
        UUID(as_uuid=True),
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="")
    address = Column(Text, nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    phone = Column(Text, nullable=False)
    email = Column(Text)
    status = Column(
        SQLEnum(MessStatus, name="mess_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=MessStatus.PENDING,
        index=True,
    )
    rating_average = Column(Numeric(3, 2), default=0)
    rating_count = Column(Integer, default=0)
    delivery_radius_km = Column(Numeric(5, 2), default=5)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    owner = relationship("AppUser", back_populates="messes")
    subscriptions = relationship(
        "Subscription", back_populates="mess", cascade="all, delete-orphan"
    )
    pricing = relationship(
        "MealPricing", back_populates="mess", uselist=False, cascade="all, delete-orphan"
    )
    plans = relationship(
        "SubscriptionPlan", back_populates="mess", cascade="all, delete-orphan"
    )
    weekly_menu = relationship(
        "WeeklyMenu", back_populates="mess", uselist=False, cascade="all, delete-orphan"
    )


class MealPricing(Base):
    """Per-meal prices set by the mess owner (one row per mess)"""

    __tablename__ = "meal_pricing"

    pricing_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    mess_id = Column(
        UUID(as_uuid=True),
        ForeignKey("mess.mess_id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    breakfast_price = Column(Numeric(10, 2), nullable=False, default=0)
    lunch_price = Column(Numeric(10, 2), nullable=False, default=0)
    dinner_price = Column(Numeric(10, 2), nullable=False, default=0)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    mess = relationship("Mess", back_populates="pricing")

    __table_args__ = (
        CheckConstraint(
            "breakfast_price >= 0 AND lunch_price >= 0 AND dinner_price >= 0",
            name="ck_meal_pricing_nonneg",
        ),
    )


class SubscriptionPlan(Base):
    """A purchasable bundle of days and meals offered by a mess"""

    __tablename__ = "subscription_plan"

    plan_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    mess_id = Column(
        UUID(as_uuid=True),
        ForeignKey("mess.mess_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(Text, nullable=False)
    description = Column(Text)
    days_of_week = Column(text_array(), nullable=False)
    meals_included = Column(text_array(), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    duration_type = Column(Text, nullable=False)
    duration_weeks = Column(Integer, nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    mess = relationship("Mess", back_populates="plans")

    __table_args__ = (
        UniqueConstraint("mess_id", "name", name="uq_subscription_plan_mess_name"),
        CheckConstraint(
            "duration_type IN ('weekly', 'monthly')", name="ck_plan_duration_type"
        ),
    )


class WeeklyMenu(Base):
    """
    The dishes a mess serves in each weekly slot (one row per mess).

    ``menu`` maps weekday -> meal slot -> list of dish names, e.g.
    ``{"monday": {"lunch": ["Dal", "Rice"]}}``. Missing slots mean nothing
    has been planned yet.
    """

    __tablename__ = "weekly_menu"

    menu_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    mess_id = Column(
        UUID(as_uuid=True),
        ForeignKey("mess.mess_id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    menu = Column(json_document(), nullable=False, default=dict)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    mess = relationship("Mess", back_populates="weekly_menu")
