"""Customer delivery routes"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from datetime import date
from uuid import UUID
from typing import List, Optional

from api.dependencies import get_db
from domain.mappers import DeliveryMapper
from domain.schemas.mess_cut_schemas import DeliveryResponse
from services import DeliveryService

router = APIRouter(prefix="/deliveries", tags=["Deliveries"])


@router.get("", response_model=List[DeliveryResponse])
def list_customer_deliveries(
    customer_id: UUID = Query(..., description="Customer whose meals to list"),
    date: Optional[date] = Query(None, description="Meal date; defaults to today"),
    db: Session = Depends(get_db),
):
    """
    A customer's meals for one day with the mess serving each, in
    breakfast, lunch, dinner order.
    """
    deliveries = DeliveryService.list_for_customer(db, customer_id, date)
    return [DeliveryMapper.to_response(d) for d in deliveries]
