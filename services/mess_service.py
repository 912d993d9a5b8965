"""
Mess administration and weekly menus.

Status moves follow the review flow: a pending mess is approved or
rejected, and an approved mess may be suspended. Setting the current
status again is a no-op.
"""

from typing import List, Optional
from sqlalchemy.orm import Session
import logging
import uuid

from domain.enums import MessStatus
from domain.models import Mess
from domain.schemas.mess_schemas import (
    WeeklyMenuUpdate,
    WeeklyMenuResponse,
    empty_menu_grid,
)
from repositories import MessRepository, WeeklyMenuRepository
from app.exceptions import NotFoundError, ServiceValidationError

logger = logging.getLogger("messmate.messes")

STATUS_TRANSITIONS = {
    MessStatus.PENDING: {MessStatus.APPROVED, MessStatus.REJECTED},
    MessStatus.APPROVED: {MessStatus.SUSPENDED},
    MessStatus.REJECTED: set(),
    MessStatus.SUSPENDED: set(),
}


class MessService:
    @staticmethod
    def _get_mess(db: Session, mess_id: uuid.UUID) -> Mess:
        mess = MessRepository(db).get_by_id(mess_id)
        if not mess:
            raise NotFoundError(f"Mess {mess_id} not found")
        return mess

    @staticmethod
    def list_messes(
        db: Session, status: Optional[MessStatus] = None, query: Optional[str] = None
    ) -> List[Mess]:
        return MessRepository(db).list_all(status=status, query=query)

    @staticmethod
    def update_status(db: Session, mess_id: uuid.UUID, new_status: MessStatus) -> Mess:
        """
        Move a mess to a new review status.

        Raises:
            NotFoundError: unknown mess
            ServiceValidationError: the move is not allowed from the current status
        """
        mess = MessService._get_mess(db, mess_id)
        current = MessStatus(mess.status)
        new_status = MessStatus(new_status)

        if current == new_status:
            return mess

        if new_status not in STATUS_TRANSITIONS[current]:
            raise ServiceValidationError(
                f"Cannot change mess status from {current.value} to {new_status.value}",
                details={"from": current.value, "to": new_status.value},
                code="INVALID_STATUS_TRANSITION",
            )

        mess = MessRepository(db).set_status(mess, new_status)
        logger.info(
            f"mess_status_changed mess_id={mess_id} from={current.value} to={new_status.value}"
        )
        return mess

    @staticmethod
    def get_weekly_menu(db: Session, mess_id: uuid.UUID) -> WeeklyMenuResponse:
        """The menu grid of a mess; empty slots when none was saved"""
        MessService._get_mess(db, mess_id)
        row = WeeklyMenuRepository(db).get_by_mess_id(mess_id)
        if not row:
            return WeeklyMenuResponse(mess_id=mess_id, menu=empty_menu_grid())

        grid = empty_menu_grid()
        for day, slots in (row.menu or {}).items():
            if day in grid:
                for meal, dishes in (slots or {}).items():
                    if meal in grid[day]:
                        grid[day][meal] = list(dishes or [])
        return WeeklyMenuResponse(mess_id=mess_id, menu=grid, updated_at=row.updated_at)

    @staticmethod
    def save_weekly_menu(
        db: Session, mess_id: uuid.UUID, data: WeeklyMenuUpdate
    ) -> WeeklyMenuResponse:
        """Replace the whole menu grid of an approved mess"""
        mess = MessService._get_mess(db, mess_id)
        if mess.status != MessStatus.APPROVED:
            raise ServiceValidationError(
                "Menus can only be published for an approved mess",
                code="MESS_NOT_APPROVED",
            )

        grid = data.to_grid()
        row = WeeklyMenuRepository(db).upsert(mess_id, grid)
        dishes = sum(len(d) for slots in grid.values() for d in slots.values())
        logger.info(f"weekly_menu_saved mess_id={mess_id} dishes={dishes}")
        return WeeklyMenuResponse(mess_id=mess_id, menu=grid, updated_at=row.updated_at)
