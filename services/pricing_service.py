from typing import List, Iterable, Optional
from sqlalchemy.orm import Session
import logging
import uuid
from decimal import Decimal

from domain.enums import DurationType, MessStatus
from domain.models import Mess, MealPricing, SubscriptionPlan
from domain.schemas.mess_schemas import (
    MealPricingUpdate,
    MealPricingResponse,
    SubscriptionPlanCreate,
)
from repositories import MessRepository, MealPricingRepository, SubscriptionPlanRepository
from app.exceptions import NotFoundError, ServiceValidationError

logger = logging.getLogger("messmate.pricing")

DURATION_WEEKS = {
    DurationType.WEEKLY.value: 1,
    DurationType.MONTHLY.value: 4,
}


def _value(v) -> str:
    return v.value if hasattr(v, "value") else str(v)


class PricingService:
    @staticmethod
    def duration_weeks(duration_type) -> int:
        try:
            return DURATION_WEEKS[_value(duration_type)]
        except KeyError:
            raise ServiceValidationError(f"Unknown duration type: {duration_type}")

    @staticmethod
    def calculate_plan_price(
        pricing: Optional[MealPricing],
        days_of_week: Iterable,
        meals_included: Iterable,
        duration_type,
    ) -> Decimal:
        """
        Total price of a plan: every included meal on every included day,
        repeated for the plan's number of weeks.

        Meals without a price (or a mess without pricing) count as zero.
        """
        prices = {
            "breakfast": Decimal(str(getattr(pricing, "breakfast_price", 0) or 0)),
            "lunch": Decimal(str(getattr(pricing, "lunch_price", 0) or 0)),
            "dinner": Decimal(str(getattr(pricing, "dinner_price", 0) or 0)),
        }
        meals = [_value(m) for m in meals_included]
        per_week = sum(
            (prices.get(meal, Decimal("0")) for _ in days_of_week for meal in meals),
            Decimal("0"),
        )
        return per_week * PricingService.duration_weeks(duration_type)

    @staticmethod
    def _get_mess(db: Session, mess_id: uuid.UUID) -> Mess:
        mess = MessRepository(db).get_by_id(mess_id)
        if not mess:
            raise NotFoundError(f"Mess {mess_id} not found")
        return mess

    @staticmethod
    def to_pricing_response(pricing: MealPricing) -> MealPricingResponse:
        return MealPricingResponse(
            pricing_id=pricing.pricing_id,
            mess_id=pricing.mess_id,
            breakfast_price=pricing.breakfast_price,
            lunch_price=pricing.lunch_price,
            dinner_price=pricing.dinner_price,
            daily_total=(
                Decimal(str(pricing.breakfast_price or 0))
                + Decimal(str(pricing.lunch_price or 0))
                + Decimal(str(pricing.dinner_price or 0))
            ),
            updated_at=pricing.updated_at,
        )

    @staticmethod
    def get_meal_pricing(db: Session, mess_id: uuid.UUID) -> MealPricing:
        PricingService._get_mess(db, mess_id)
        pricing = MealPricingRepository(db).get_by_mess_id(mess_id)
        if not pricing:
            raise NotFoundError(f"No meal pricing set for mess {mess_id}")
        return pricing

    @staticmethod
    def upsert_meal_pricing(
        db: Session, mess_id: uuid.UUID, data: MealPricingUpdate
    ) -> MealPricing:
        PricingService._get_mess(db, mess_id)
        pricing = MealPricingRepository(db).upsert(mess_id, **data.model_dump())
        logger.info(
            f"meal_pricing_saved mess_id={mess_id} breakfast={data.breakfast_price} "
            f"lunch={data.lunch_price} dinner={data.dinner_price}"
        )
        return pricing

    @staticmethod
    def list_plans(
        db: Session, mess_id: uuid.UUID, active_only: bool = False
    ) -> List[SubscriptionPlan]:
        PricingService._get_mess(db, mess_id)
        return SubscriptionPlanRepository(db).get_by_mess_id(mess_id, active_only)

    @staticmethod
    def _get_approved_mess(db: Session, mess_id: uuid.UUID) -> Mess:
        mess = PricingService._get_mess(db, mess_id)
        if mess.status != MessStatus.APPROVED:
            raise ServiceValidationError(
                "Plans can only be created or changed for an approved mess",
                code="MESS_NOT_APPROVED",
            )
        return mess

    @staticmethod
    def _apply_plan(
        db: Session, mess: Mess, plan: SubscriptionPlan, data: SubscriptionPlanCreate
    ) -> SubscriptionPlan:
        pricing = MealPricingRepository(db).get_by_mess_id(mess.mess_id)
        plan.name = data.name
        plan.description = data.description.strip() if data.description else None
        plan.days_of_week = [d.value for d in data.days_of_week]
        plan.meals_included = [m.value for m in data.meals_included]
        plan.duration_type = data.duration_type.value
        plan.duration_weeks = PricingService.duration_weeks(data.duration_type)
        plan.is_active = data.is_active
        plan.total_price = PricingService.calculate_plan_price(
            pricing, data.days_of_week, data.meals_included, data.duration_type
        )
        return SubscriptionPlanRepository(db).save(plan)

    @staticmethod
    def create_plan(
        db: Session, mess_id: uuid.UUID, data: SubscriptionPlanCreate
    ) -> SubscriptionPlan:
        """
        Create a subscription plan for an approved mess.

        Raises:
            NotFoundError: If the mess does not exist
            ServiceValidationError: If the mess is not approved
            ConflictError: If the mess already has a plan with this name
        """
        mess = PricingService._get_approved_mess(db, mess_id)

        plan = PricingService._apply_plan(
            db, mess, SubscriptionPlan(mess_id=mess_id), data
        )
        logger.info(
            f"plan_created mess_id={mess_id} plan_id={plan.plan_id} "
            f"total_price={plan.total_price}"
        )
        return plan

    @staticmethod
    def update_plan(
        db: Session,
        mess_id: uuid.UUID,
        plan_id: uuid.UUID,
        data: SubscriptionPlanCreate,
    ) -> SubscriptionPlan:
        """
        Replace a plan and recompute its price.

        Raises:
            NotFoundError: If the mess or plan does not exist
            ServiceValidationError: If the mess is not approved
        """
        mess = PricingService._get_approved_mess(db, mess_id)
        plan = SubscriptionPlanRepository(db).get_for_mess(mess_id, plan_id)
        if not plan:
            raise NotFoundError(f"Plan {plan_id} not found for mess {mess_id}")

        plan = PricingService._apply_plan(db, mess, plan, data)
        logger.info(f"plan_updated plan_id={plan_id} total_price={plan.total_price}")
        return plan

    @staticmethod
    def delete_plan(db: Session, mess_id: uuid.UUID, plan_id: uuid.UUID) -> None:
        repo = SubscriptionPlanRepository(db)
        plan = repo.get_for_mess(mess_id, plan_id)
        if not plan:
            raise NotFoundError(f"Plan {plan_id} not found for mess {mess_id}")
        repo.delete(plan_id)
        logger.info(f"plan_deleted mess_id={mess_id} plan_id={plan_id}")
