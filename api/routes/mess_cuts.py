"""Mess cut (meal skip) routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from datetime import date
from uuid import UUID

from api.dependencies import get_db
from app.config import settings
from domain.mappers import DeliveryMapper
from domain.schemas.mess_cut_schemas import (
    MessCutRequest,
    MessCutEligibilityResponse,
    DeliveryResponse,
)
from services import MessCutService
from services.mess_cut_service import scheduled_at

router = APIRouter(prefix="/mess-cuts", tags=["Mess Cuts"])
logger = logging.getLogger("messmate.api.mess_cuts")


@router.get("/eligibility", response_model=MessCutEligibilityResponse)
def check_eligibility(
    date: date = Query(..., description="Date of the meal"),
    meal_type: str = Query(..., description="Meal slot (breakfast, lunch, dinner)"),
):
    """
    Tell whether a meal can still be skipped.

    Lets the app disable the skip action before a request is made. The
    same rule is applied again when the skip is requested.
    """
    return MessCutEligibilityResponse(
        date=date,
        meal_type=meal_type,
        eligible=MessCutService.can_request_meal_skip(date, meal_type),
        scheduled_at=scheduled_at(date, meal_type, settings.meal_tz),
        notice_hours=settings.skip_notice_hours,
    )


@router.post("", response_model=DeliveryResponse, status_code=status.HTTP_201_CREATED)
def request_mess_cut(request: MessCutRequest, db: Session = Depends(get_db)):
    """
    Skip one scheduled meal and notify the mess owner.

    Raises:
        400: Less than the required notice remains before the meal
        404: No delivery exists for the subscription, date and meal
        500: The delivery was skipped but its mess could not be loaded
    """
    delivery = MessCutService.request_meal_skip(
        db,
        request.subscription_id,
        request.date,
        request.meal_type,
        reason=request.reason,
    )
    logger.info(f"Mess cut recorded for delivery {delivery.delivery_id}")
    return DeliveryMapper.to_response(delivery)


@router.post("/{delivery_id}/acknowledge")
def acknowledge_mess_cut(delivery_id: UUID, db: Session = Depends(get_db)):
    """Mark a mess cut as seen by the mess owner."""
    MessCutService.acknowledge_meal_skip(db, delivery_id)
    return {"status": "ok", "acknowledged": str(delivery_id)}
