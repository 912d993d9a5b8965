"""
Mess Repository - Data access layer for messes, meal pricing and subscription plans
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from repositories.base import BaseRepository
from domain.models import Mess, MealPricing, SubscriptionPlan, WeeklyMenu
from domain.enums import MessStatus
from app.exceptions import ConflictError


class MessRepository(BaseRepository[Mess]):
    """Repository for mess data access"""

    id_field = "mess_id"

    def __init__(self, db: Session):
        super().__init__(db, Mess)

    def search_approved(self, query: Optional[str] = None) -> List[Mess]:
        """Approved messes whose name, address or description contains the query"""
        q = self.db.query(Mess).filter(Mess.status == MessStatus.APPROVED)
        if query:
            pattern = f"%{query.strip()}%"
            q = q.filter(
                or_(
                    Mess.name.ilike(pattern),
                    Mess.address.ilike(pattern),
                    Mess.description.ilike(pattern),
                )
            )
        return q.order_by(Mess.name).all()

    def list_all(
        self, status: Optional[MessStatus] = None, query: Optional[str] = None
    ) -> List[Mess]:
        """Messes in any status for review, newest first"""
        q = self.db.query(Mess)
        if status is not None:
            q = q.filter(Mess.status == status)
        if query:
            pattern = f"%{query.strip()}%"
            q = q.filter(or_(Mess.name.ilike(pattern), Mess.address.ilike(pattern)))
        return q.order_by(Mess.created_at.desc()).all()

    def set_status(self, mess: Mess, status: MessStatus) -> Mess:
        mess.status = status
        self.db.commit()
        self.db.refresh(mess)
        return mess


class MealPricingRepository(BaseRepository[MealPricing]):
    """Repository for per-mess meal pricing"""

    id_field = "pricing_id"

    def __init__(self, db: Session):
        super().__init__(db, MealPricing)

    def get_by_mess_id(self, mess_id: UUID) -> Optional[MealPricing]:
        return self.db.query(MealPricing).filter(MealPricing.mess_id == mess_id).first()

    def upsert(self, mess_id: UUID, **prices) -> MealPricing:
        """Create or update the pricing row of a mess"""
        pricing = self.get_by_mess_id(mess_id)
        if pricing:
            for key, value in prices.items():
                if hasattr(pricing, key):
                    setattr(pricing, key, value)
        else:
            pricing = MealPricing(mess_id=mess_id, **prices)
            self.db.add(pricing)

        self.db.commit()
        self.db.refresh(pricing)
        return pricing


class SubscriptionPlanRepository(BaseRepository[SubscriptionPlan]):
    """Repository for subscription plans"""

    id_field = "plan_id"

    def __init__(self, db: Session):
        super().__init__(db, SubscriptionPlan)

    def get_for_mess(self, mess_id: UUID, plan_id: UUID) -> Optional[SubscriptionPlan]:
        return (
            self.db.query(SubscriptionPlan)
            .filter(
                SubscriptionPlan.mess_id == mess_id,
                SubscriptionPlan.plan_id == plan_id,
            )
            .first()
        )

    def get_by_mess_id(
        self, mess_id: UUID, active_only: bool = False
    ) -> List[SubscriptionPlan]:
        """Plans of a mess, cheapest first"""
        q = self.db.query(SubscriptionPlan).filter(SubscriptionPlan.mess_id == mess_id)
        if active_only:
            q = q.filter(SubscriptionPlan.is_active.is_(True))
        return q.order_by(SubscriptionPlan.total_price.asc()).all()

    def save(self, plan: SubscriptionPlan) -> SubscriptionPlan:
        """Insert or update a plan, mapping the per-mess name constraint to ConflictError"""
        try:
            self.db.add(plan)
            self.db.commit()
            self.db.refresh(plan)
            return plan
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(
                f"A plan named '{plan.name}' already exists for this mess",
                code="DUPLICATE_PLAN_NAME",
            )


class WeeklyMenuRepository(BaseRepository[WeeklyMenu]):
    """Repository for the weekly menu grid of a mess"""

    id_field = "menu_id"

    def __init__(self, db: Session):
        super().__init__(db, WeeklyMenu)

    def get_by_mess_id(self, mess_id: UUID) -> Optional[WeeklyMenu]:
        return self.db.query(WeeklyMenu).filter(WeeklyMenu.mess_id == mess_id).first()

    def upsert(self, mess_id: UUID, menu: dict) -> WeeklyMenu:
        """Create or replace the menu grid of a mess"""
        row = self.get_by_mess_id(mess_id)
        if row:
            row.menu = menu
        else:
            row = WeeklyMenu(mess_id=mess_id, menu=menu)
            self.db.add(row)

        self.db.commit()
        self.db.refresh(row)
        return row
