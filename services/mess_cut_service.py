"""
Mess cut (meal skip) workflow.

A customer may skip a scheduled meal only while the meal is still at least
``skip_notice_hours`` away. Cutoff times are wall-clock times in the
configured meal time zone, never the host's local zone.
"""

from typing import Optional, Union
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging
import uuid
from datetime import date, datetime, time, timedelta, timezone, tzinfo

from app.config import settings
from app.exceptions import (
    IneligibleSkipWindowError,
    DeliveryNotFoundError,
    DataIntegrityError,
)
from domain.enums import MealType, NotificationType
from domain.models import Delivery
from repositories import DeliveryRepository
from services.notification_service import NotificationService

logger = logging.getLogger("messmate.mess_cut")

MEAL_CUTOFFS = {
    MealType.BREAKFAST.value: time(8, 0),
    MealType.LUNCH.value: time(13, 0),
    MealType.DINNER.value: time(20, 0),
}
DEFAULT_CUTOFF = time(12, 0)
DEFAULT_NOTICE_HOURS = 12

ACKNOWLEDGED_NOTE = "Acknowledged by mess owner"


def _slot_name(meal_type: Union[MealType, str]) -> str:
    return meal_type.value if isinstance(meal_type, MealType) else str(meal_type)


def get_meal_time(meal_type: Union[MealType, str]) -> time:
    """Time of day a meal slot is served; unknown slots fall back to noon"""
    return MEAL_CUTOFFS.get(_slot_name(meal_type), DEFAULT_CUTOFF)


def scheduled_at(on_date: date, meal_type: Union[MealType, str], tz: tzinfo) -> datetime:
    """Aware datetime at which the meal is served in ``tz``"""
    return datetime.combine(on_date, get_meal_time(meal_type), tzinfo=tz)


def is_eligible_to_skip(
    on_date: date,
    meal_type: Union[MealType, str],
    tz: tzinfo,
    now: Optional[datetime] = None,
    notice_hours: int = DEFAULT_NOTICE_HOURS,
) -> bool:
    """
    Decide whether a meal can still be skipped.

    Args:
        on_date: Calendar date of the meal
        meal_type: Meal slot; unrecognised slots use a 12:00 cutoff
        tz: Time zone the cutoff is expressed in
        now: Current instant; naive values are read in ``tz``. Defaults to the clock.
        notice_hours: Required lead time

    Returns:
        True when the meal is ``notice_hours`` or more away, False otherwise
        (including meals already served)
    """
    if now is None:
        now = datetime.now(tz)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=tz)

    # Compare in UTC so DST transitions inside the window are counted correctly.
    lead = scheduled_at(on_date, meal_type, tz).astimezone(timezone.utc) - now.astimezone(
        timezone.utc
    )
    return lead >= timedelta(hours=notice_hours)


class MessCutService:
    @staticmethod
    def can_request_meal_skip(
        on_date: date, meal_type: Union[MealType, str], now: Optional[datetime] = None
    ) -> bool:
        """Eligibility in the configured meal time zone, for gating the skip action in a UI"""
        return is_eligible_to_skip(
            on_date, meal_type, settings.meal_tz, now, settings.skip_notice_hours
        )

    @staticmethod
    def request_meal_skip(
        db: Session,
        subscription_id: uuid.UUID,
        on_date: date,
        meal_type: Union[MealType, str],
        reason: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Delivery:
        """
        Skip one scheduled meal and notify the mess owner.

        Steps:
        1. Re-check eligibility at request time; nothing is written when ineligible.
        2. Mark the (subscription, date, meal) delivery as skipped and commit.
        3. Re-read the delivery joined with its subscription and mess.
        4. Notify the mess owner (best effort).

        Steps 2 and 3 are separate round trips with no enclosing transaction.
        If step 3 fails the delivery stays skipped and no notification is sent.

        Args:
            db: Database session
            subscription_id: Subscription owning the delivery
            on_date: Date of the meal
            meal_type: Meal slot
            reason: Optional reason passed on to the mess owner
            now: Current instant (defaults to the clock)

        Returns:
            The skipped Delivery with ``subscription`` and ``subscription.mess`` loaded

        Raises:
            IneligibleSkipWindowError: Less than the required notice remains
            DeliveryNotFoundError: No delivery matches the triple
            DataIntegrityError: The delivery cannot be joined to its subscription or mess
        """
        tz = settings.meal_tz
        if now is None:
            now = datetime.now(tz)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=tz)

        slot = _slot_name(meal_type)

        if not is_eligible_to_skip(on_date, slot, tz, now, settings.skip_notice_hours):
            logger.info(
                f"mess_cut_rejected subscription_id={subscription_id} "
                f"date={on_date} meal_type={slot} reason=inside_notice_window"
            )
            raise IneligibleSkipWindowError(
                f"Mess cut requests must be made at least "
                f"{settings.skip_notice_hours} hours in advance",
                details={
                    "date": on_date.isoformat(),
                    "meal_type": slot,
                    "scheduled_at": scheduled_at(on_date, slot, tz).isoformat(),
                },
            )

        repo = DeliveryRepository(db)

        updated = repo.mark_skipped(subscription_id, on_date, slot, reason, now)
        if not updated:
            logger.warning(
                f"mess_cut failed: no delivery for subscription {subscription_id} "
                f"on {on_date} ({slot})"
            )
            raise DeliveryNotFoundError(
                f"No {slot} delivery on {on_date} for subscription {subscription_id}"
            )

        try:
            delivery = repo.get_with_provider(subscription_id, on_date, slot)
        except SQLAlchemyError as e:
            logger.error(
                f"mess_cut join failed after skip for subscription {subscription_id}: {e}"
            )
            raise DataIntegrityError(
                "Delivery was skipped but its subscription or mess could not be loaded",
                details={"cause": str(e)},
            ) from e

        if delivery is None:
            logger.error(
                f"mess_cut join returned nothing for subscription {subscription_id} "
                f"on {on_date} ({slot}); delivery left skipped"
            )
            raise DataIntegrityError(
                "Delivery was skipped but its subscription or mess is missing",
                details={
                    "subscription_id": str(subscription_id),
                    "date": on_date.isoformat(),
                    "meal_type": slot,
                },
            )

        mess = delivery.subscription.mess

        logger.info(
            f"mess_cut_recorded delivery_id={delivery.delivery_id} "
            f"subscription_id={subscription_id} date={on_date} meal_type={slot} "
            f"mess_id={mess.mess_id}"
        )

        NotificationService.send_notification(
            db,
            mess.owner_id,
            "Mess Cut Request",
            f"A customer has requested to skip {slot} on {on_date.isoformat()} for {mess.name}",
            {
                "type": NotificationType.MESS_CUT.value,
                "delivery_id": str(delivery.delivery_id),
                "date": on_date.isoformat(),
                "meal_type": slot,
                "reason": reason,
            },
        )

        return delivery

    @staticmethod
    def acknowledge_meal_skip(db: Session, delivery_id: uuid.UUID) -> None:
        """
        Record that the mess owner has seen a mess cut.

        Raises:
            DeliveryNotFoundError: If no delivery has this id
        """
        updated = DeliveryRepository(db).set_notes(delivery_id, ACKNOWLEDGED_NOTE)
        if not updated:
            logger.warning(f"acknowledge_meal_skip: delivery {delivery_id} not found")
            raise DeliveryNotFoundError(f"Delivery {delivery_id} not found")

        logger.info(f"mess_cut_acknowledged delivery_id={delivery_id}")
