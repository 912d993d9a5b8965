"""Mess discovery, review, weekly menu, meal pricing and subscription plan routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from api.dependencies import get_db
from domain.schemas.mess_schemas import (
    MessDiscoveryResult,
    MealPricingUpdate,
    MealPricingResponse,
    SubscriptionPlanCreate,
    SubscriptionPlanResponse,
    MessSummary,
    MessStatusUpdate,
    WeeklyMenuUpdate,
    WeeklyMenuResponse,
)
from domain.enums import MessStatus
from services import DiscoveryService, MessService, PricingService

router = APIRouter(prefix="/messes", tags=["Messes"])
logger = logging.getLogger("messmate.api.messes")


@router.get("/discover", response_model=List[MessDiscoveryResult])
def discover_messes(
    q: Optional[str] = Query(None, description="Search in name, address and description"),
    latitude: Optional[float] = Query(None, ge=-90, le=90),
    longitude: Optional[float] = Query(None, ge=-180, le=180),
    max_distance_km: Optional[float] = Query(None, gt=0),
    db: Session = Depends(get_db),
):
    """
    Find approved messes.

    With a location the results are sorted nearest first and may be limited
    to ``max_distance_km``.
    """
    return DiscoveryService.discover_messes(
        db, q, latitude=latitude, longitude=longitude, max_distance_km=max_distance_km
    )


@router.get("", response_model=List[MessSummary])
def list_messes(
    status: Optional[MessStatus] = Query(None, description="Only messes in this review status"),
    q: Optional[str] = Query(None, description="Search in name and address"),
    db: Session = Depends(get_db),
):
    """All messes for review, newest first."""
    return MessService.list_messes(db, status=status, query=q)


@router.patch("/{mess_id}/status", response_model=MessSummary)
def update_mess_status(
    mess_id: UUID, data: MessStatusUpdate, db: Session = Depends(get_db)
):
    """
    Approve, reject or suspend a mess.

    Raises:
        400: The move is not allowed from the current status
        404: Unknown mess
    """
    return MessService.update_status(db, mess_id, data.status)


@router.get("/{mess_id}/menu", response_model=WeeklyMenuResponse)
def get_weekly_menu(mess_id: UUID, db: Session = Depends(get_db)):
    """Weekly menu of a mess. Slots with nothing planned are empty lists."""
    return MessService.get_weekly_menu(db, mess_id)


@router.put("/{mess_id}/menu", response_model=WeeklyMenuResponse)
def save_weekly_menu(
    mess_id: UUID, data: WeeklyMenuUpdate, db: Session = Depends(get_db)
):
    return MessService.save_weekly_menu(db, mess_id, data)


@router.get("/{mess_id}/pricing", response_model=MealPricingResponse)
def get_pricing(mess_id: UUID, db: Session = Depends(get_db)):
    pricing = PricingService.get_meal_pricing(db, mess_id)
    return PricingService.to_pricing_response(pricing)


@router.put("/{mess_id}/pricing", response_model=MealPricingResponse)
def set_pricing(
    mess_id: UUID, data: MealPricingUpdate, db: Session = Depends(get_db)
):
    """Create or replace the per-meal prices of a mess."""
    pricing = PricingService.upsert_meal_pricing(db, mess_id, data)
    return PricingService.to_pricing_response(pricing)


@router.get("/{mess_id}/plans", response_model=List[SubscriptionPlanResponse])
def list_plans(
    mess_id: UUID,
    active_only: bool = Query(False),
    db: Session = Depends(get_db),
):
    """Subscription plans of a mess, cheapest first."""
    return PricingService.list_plans(db, mess_id, active_only)


@router.post(
    "/{mess_id}/plans",
    response_model=SubscriptionPlanResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_plan(
    mess_id: UUID, data: SubscriptionPlanCreate, db: Session = Depends(get_db)
):
    """Create a plan; its total price is computed from the mess's meal prices."""
    return PricingService.create_plan(db, mess_id, data)


@router.put("/{mess_id}/plans/{plan_id}", response_model=SubscriptionPlanResponse)
def update_plan(
    mess_id: UUID,
    plan_id: UUID,
    data: SubscriptionPlanCreate,
    db: Session = Depends(get_db),
):
    return PricingService.update_plan(db, mess_id, plan_id, data)


@router.delete("/{mess_id}/plans/{plan_id}")
def delete_plan(mess_id: UUID, plan_id: UUID, db: Session = Depends(get_db)):
    PricingService.delete_plan(db, mess_id, plan_id)
    return {"status": "ok", "deleted": str(plan_id)}
