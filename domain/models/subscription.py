"""
Subscription and delivery models.
"""

from sqlalchemy import (
    Column,
    Text,
    TIMESTAMP,
    ForeignKey,
    Numeric,
    Date,
    UniqueConstraint,
    Index,
    Enum as SQLEnum,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base, text_array
from domain.enums import PlanType, SubscriptionStatus, MealType, DeliveryStatus


def _enum_values(enum_cls):
    return [m.value for m in enum_cls]


class Subscription(Base):
    """A customer's meal subscription with a mess"""

    __tablename__ = "subscription"

    subscription_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    customer_id = Column(
        UUID(as_uuid=True),
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    mess_id = Column(
        UUID(as_uuid=True),
        ForeignKey("mess.mess_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    plan_type = Column(
        SQLEnum(PlanType, name="plan_type", values_callable=_enum_values),
        nullable=False,
    )
    meal_types = Column(text_array(), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    price_per_meal = Column(Numeric(8, 2), nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    status = Column(
        SQLEnum(SubscriptionStatus, name="subscription_status", values_callable=_enum_values),
        default=SubscriptionStatus.ACTIVE,
    )
    delivery_address = Column(Text, nullable=False)
    delivery_instructions = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    customer = relationship("AppUser", back_populates="subscriptions")
    mess = relationship("Mess", back_populates="subscriptions")
    deliveries = relationship(
        "Delivery", back_populates="subscription", cascade="all, delete-orphan"
    )


class Delivery(Base):
    """One scheduled meal for one subscription on one date"""

    __tablename__ = "delivery"

    delivery_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    subscription_id = Column(
        UUID(as_uuid=True),
        ForeignKey("subscription.subscription_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    mess_id = Column(
        UUID(as_uuid=True),
        ForeignKey("mess.mess_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    customer_id = Column(
        UUID(as_uuid=True),
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date = Column(Date, nullable=False)
    meal_type = Column(
        SQLEnum(MealType, name="meal_type", values_callable=_enum_values),
        nullable=False,
    )
    status = Column(
        SQLEnum(DeliveryStatus, name="delivery_status", values_callable=_enum_values),
        nullable=False,
        default=DeliveryStatus.SCHEDULED,
        index=True,
    )
    skip_reason = Column(Text)
    skip_requested_at = Column(TIMESTAMP(timezone=True))
    delivered_at = Column(TIMESTAMP(timezone=True))
    delivery_notes = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    subscription = relationship("Subscription", back_populates="deliveries")

    __table_args__ = (
        # Concurrent skips of the same meal are last-write-wins; only duplicates are prevented.
        UniqueConstraint(
            "subscription_id", "date", "meal_type", name="uq_delivery_subscription_slot"
        ),
        Index("ix_delivery_date_meal_type", "date", "meal_type"),
    )
