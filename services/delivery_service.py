from typing import List, Optional
from sqlalchemy.orm import Session
import uuid
from datetime import date, datetime

from app.config import settings
from domain.models import Delivery
from repositories import DeliveryRepository


class DeliveryService:
    @staticmethod
    def list_for_customer(
        db: Session, customer_id: uuid.UUID, on_date: Optional[date] = None
    ) -> List[Delivery]:
        """A customer's deliveries for one day, defaulting to today in the meal time zone"""
        if on_date is None:
            on_date = datetime.now(settings.meal_tz).date()
        return DeliveryRepository(db).get_for_customer_on_date(customer_id, on_date)
