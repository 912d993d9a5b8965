"""
Delivery domain mappers.
Handles transformation between Delivery ORM rows and response DTOs.
"""

from domain.models import Delivery
from domain.schemas.mess_cut_schemas import DeliveryResponse


class DeliveryMapper:
    """Mapper for delivery-related transformations."""

    @staticmethod
    def to_response(delivery: Delivery) -> DeliveryResponse:
        """
        Convert a Delivery ORM row to DeliveryResponse.

        Mess name and owner are filled in when the subscription and its mess
        were loaded alongside the delivery.
        """
        subscription = getattr(delivery, "subscription", None)
        mess = getattr(subscription, "mess", None) if subscription else None

        return DeliveryResponse(
            delivery_id=delivery.delivery_id,
            subscription_id=delivery.subscription_id,
            mess_id=delivery.mess_id,
            customer_id=delivery.customer_id,
            date=delivery.date,
            meal_type=delivery.meal_type,
            status=delivery.status,
            skip_reason=delivery.skip_reason,
            skip_requested_at=delivery.skip_requested_at,
            delivered_at=delivery.delivered_at,
            delivery_notes=delivery.delivery_notes,
            mess_name=mess.name if mess else None,
            mess_owner_id=mess.owner_id if mess else None,
        )
