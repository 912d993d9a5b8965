from pydantic import BaseModel, Field, field_validator
from typing import Dict, Optional, List
from datetime import datetime
from uuid import UUID
from decimal import Decimal

from domain.enums import MessStatus, MealType, DurationType, Weekday


class MessDiscoveryResult(BaseModel):
    """An approved mess returned by discovery, with distance when known"""

    mess_id: UUID
    name: str
    description: str
    address: str
    latitude: float
    longitude: float
    phone: str
    status: MessStatus
    rating_average: Optional[Decimal] = None
    rating_count: Optional[int] = None
    distance_km: Optional[float] = Field(
        None, description="Distance from the caller's location in kilometres"
    )

    model_config = {"from_attributes": True}


class MealPricingUpdate(BaseModel):
    """Schema for setting per-meal prices"""

    breakfast_price: Decimal = Field(default=Decimal("0"), ge=0)
    lunch_price: Decimal = Field(default=Decimal("0"), ge=0)
    dinner_price: Decimal = Field(default=Decimal("0"), ge=0)


class MealPricingResponse(BaseModel):
    pricing_id: UUID
    mess_id: UUID
    breakfast_price: Decimal
    lunch_price: Decimal
    dinner_price: Decimal
    daily_total: Decimal
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SubscriptionPlanCreate(BaseModel):
    """Schema for creating or replacing a subscription plan.

    The total price is always computed from the mess's meal pricing.
    """

    name: str = Field(..., min_length=1, max_length=120)
    description: Optional[str] = None
    days_of_week: List[Weekday] = Field(..., min_length=1)
    meals_included: List[MealType] = Field(..., min_length=1)
    duration_type: DurationType = DurationType.MONTHLY
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Plan name cannot be blank")
        return v

    @field_validator("days_of_week", "meals_included")
    @classmethod
    def dedupe(cls, v):
        return list(dict.fromkeys(v))


class SubscriptionPlanResponse(BaseModel):
    plan_id: UUID
    mess_id: UUID
    name: str
    description: Optional[str] = None
    days_of_week: List[str]
    meals_included: List[str]
    total_price: Decimal
    duration_type: str
    duration_weeks: int
    is_active: bool

    model_config = {"from_attributes": True}


class NavigationResponse(BaseModel):
    """Screens a role may open, and where to land by default"""

    role: str
    screens: List[str]
    default_screen: str


class MessSummary(BaseModel):
    """A mess in any status, as listed for review"""

    mess_id: UUID
    owner_id: UUID
    name: str
    address: str
    phone: str
    email: Optional[str] = None
    status: MessStatus
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MessStatusUpdate(BaseModel):
    status: MessStatus


def empty_menu_grid() -> Dict[str, Dict[str, List[str]]]:
    return {day.value: {meal.value: [] for meal in MealType} for day in Weekday}


class WeeklyMenuUpdate(BaseModel):
    """Dishes per weekday and meal slot.

    Blank dish names are dropped. Days or slots left out are saved empty.
    """

    menu: Dict[Weekday, Dict[MealType, List[str]]] = Field(default_factory=dict)

    @field_validator("menu")
    @classmethod
    def strip_dishes(cls, v):
        return {
            day: {meal: [d.strip() for d in dishes if d.strip()] for meal, dishes in slots.items()}
            for day, slots in v.items()
        }

    def to_grid(self) -> Dict[str, Dict[str, List[str]]]:
        grid = empty_menu_grid()
        for day, slots in self.menu.items():
            for meal, dishes in slots.items():
                grid[day.value][meal.value] = dishes
        return grid


class WeeklyMenuResponse(BaseModel):
    mess_id: UUID
    menu: Dict[str, Dict[str, List[str]]]
    updated_at: Optional[datetime] = None
