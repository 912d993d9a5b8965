"""
Delivery Repository - Data access layer for scheduled meal deliveries
"""

from typing import List, Optional
from uuid import UUID
from datetime import date, datetime
from sqlalchemy import case
from sqlalchemy.orm import Session, contains_eager

from repositories.base import BaseRepository
from domain.models import Delivery, Subscription
from domain.enums import MealType, DeliveryStatus


def _as_meal_type(meal_type) -> Optional[MealType]:
    try:
        return MealType(meal_type)
    except ValueError:
        return None


class DeliveryRepository(BaseRepository[Delivery]):
    """Repository for delivery data access"""

    id_field = "delivery_id"

    def __init__(self, db: Session):
        super().__init__(db, Delivery)

    def get_for_customer_on_date(self, customer_id: UUID, on_date: date) -> List[Delivery]:
        """
        A customer's deliveries for one day with subscription and mess loaded,
        ordered breakfast, lunch, dinner.
        """
        slot_order = case(
            (Delivery.meal_type == MealType.BREAKFAST, 0),
            (Delivery.meal_type == MealType.LUNCH, 1),
            (Delivery.meal_type == MealType.DINNER, 2),
            else_=3,
        )
        return (
            self.db.query(Delivery)
            .outerjoin(Delivery.subscription)
            .outerjoin(Subscription.mess)
            .options(contains_eager(Delivery.subscription).contains_eager(Subscription.mess))
            .filter(Delivery.customer_id == customer_id, Delivery.date == on_date)
            .order_by(slot_order)
            .all()
        )

    def mark_skipped(
        self,
        subscription_id: UUID,
        on_date: date,
        meal_type,
        reason: Optional[str],
        requested_at: datetime,
    ) -> int:
        """
        Mark the delivery for a slot as skipped and commit.

        The row is addressed by (subscription_id, date, meal_type), not by id.

        Returns:
            Number of rows updated (0 or 1 given the unique constraint)
        """
        slot = _as_meal_type(meal_type)
        if slot is None:
            return 0
        updated = (
            self.db.query(Delivery)
            .filter(
                Delivery.subscription_id == subscription_id,
                Delivery.date == on_date,
                Delivery.meal_type == slot,
            )
            .update(
                {
                    Delivery.status: DeliveryStatus.SKIPPED,
                    Delivery.skip_reason: reason,
                    Delivery.skip_requested_at: requested_at,
                },
                synchronize_session=False,
            )
        )
        self.db.commit()
        return updated

    def get_with_provider(
        self, subscription_id: UUID, on_date: date, meal_type
    ) -> Optional[Delivery]:
        """
        Load a delivery together with its subscription and mess.

        Uses inner joins, so a delivery whose subscription or mess row is
        missing comes back as None.
        """
        slot = _as_meal_type(meal_type)
        if slot is None:
            return None
        return (
            self.db.query(Delivery)
            .join(Delivery.subscription)
            .join(Subscription.mess)
            .options(contains_eager(Delivery.subscription).contains_eager(Subscription.mess))
            .populate_existing()
            .filter(
                Delivery.subscription_id == subscription_id,
                Delivery.date == on_date,
                Delivery.meal_type == slot,
            )
            .one_or_none()
        )

    def set_notes(self, delivery_id: UUID, notes: str) -> int:
        """Set free-text delivery notes by id; returns number of rows updated"""
        updated = (
            self.db.query(Delivery)
            .filter(Delivery.delivery_id == delivery_id)
            .update({Delivery.delivery_notes: notes}, synchronize_session=False)
        )
        self.db.commit()
        return updated
