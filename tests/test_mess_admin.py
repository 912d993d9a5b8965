"""
Tests for mess review, weekly menus and a customer's day of deliveries.

Review flow:
    pending  -> approved | rejected
    approved -> suspended
Setting the current status again changes nothing.

Weekly menu: weekday -> meal slot -> dishes. Reads of a mess that never
saved a menu return every slot empty. Saving replaces the whole grid and
needs an approved mess.
"""

import pytest
import uuid
from datetime import date, datetime

from sqlalchemy.orm import Session

from test_fixtures import sql_session, sql_client, seed_subscription, add_delivery
from services import DeliveryService, MessService
from domain.enums import MealType, MessStatus, Weekday
from domain.schemas.mess_schemas import WeeklyMenuUpdate, empty_menu_grid
from app.config import settings
from app.exceptions import NotFoundError, ServiceValidationError


# =============================================================================
# MESS STATUS
# =============================================================================


@pytest.mark.parametrize(
    "start,target",
    [
        (MessStatus.PENDING, MessStatus.APPROVED),
        (MessStatus.PENDING, MessStatus.REJECTED),
        (MessStatus.APPROVED, MessStatus.SUSPENDED),
    ],
)
def test_allowed_status_changes(sql_session: Session, start, target):
    mess = seed_subscription(sql_session, mess_status=start).mess

    updated = MessService.update_status(sql_session, mess.mess_id, target)

    assert updated.status == target


@pytest.mark.parametrize(
    "start,target",
    [
        (MessStatus.PENDING, MessStatus.SUSPENDED),
        (MessStatus.REJECTED, MessStatus.APPROVED),
        (MessStatus.SUSPENDED, MessStatus.PENDING),
        (MessStatus.APPROVED, MessStatus.PENDING),
    ],
)
def test_disallowed_status_changes(sql_session: Session, start, target):
    mess = seed_subscription(sql_session, mess_status=start).mess

    with pytest.raises(ServiceValidationError) as exc_info:
        MessService.update_status(sql_session, mess.mess_id, target)

    assert exc_info.value.code == "INVALID_STATUS_TRANSITION"
    sql_session.refresh(mess)
    assert mess.status == start


def test_same_status_is_a_no_op(sql_session: Session):
    mess = seed_subscription(sql_session, mess_status=MessStatus.SUSPENDED).mess

    assert MessService.update_status(sql_session, mess.mess_id, "suspended").status == MessStatus.SUSPENDED


def test_status_of_unknown_mess_raises(sql_session: Session):
    with pytest.raises(NotFoundError):
        MessService.update_status(sql_session, uuid.uuid4(), MessStatus.APPROVED)


def test_approve_endpoint(sql_client, sql_session: Session):
    mess = seed_subscription(sql_session, mess_status=MessStatus.PENDING).mess

    r = sql_client.patch(f"/messes/{mess.mess_id}/status", json={"status": "approved"})

    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "approved"
    assert body["name"] == "Annapurna Home Kitchen"


def test_invalid_transition_endpoint_reports_details(sql_client, sql_session: Session):
    """Verifies: the error envelope carries the exception's own code and details."""
    mess = seed_subscription(sql_session, mess_status=MessStatus.REJECTED).mess

    r = sql_client.patch(f"/messes/{mess.mess_id}/status", json={"status": "approved"})

    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["error"]["code"] == "INVALID_STATUS_TRANSITION"
    assert body["error"]["details"] == {"from": "rejected", "to": "approved"}


def test_status_endpoint_rejects_unknown_status(sql_client, sql_session: Session):
    mess = seed_subscription(sql_session, mess_status=MessStatus.PENDING).mess

    r = sql_client.patch(f"/messes/{mess.mess_id}/status", json={"status": "closed"})

    assert r.status_code == 422


def test_list_messes_endpoint_filters_by_status(sql_client, sql_session: Session):
    pending = seed_subscription(sql_session, mess_status=MessStatus.PENDING).mess
    seed_subscription(sql_session)

    r = sql_client.get("/messes", params={"status": "pending"})

    assert r.status_code == 200
    assert [m["mess_id"] for m in r.json()] == [str(pending.mess_id)]
    assert len(sql_client.get("/messes").json()) == 2


# =============================================================================
# WEEKLY MENU
# =============================================================================


def test_menu_schema_drops_blank_dishes_and_fills_missing_slots():
    data = WeeklyMenuUpdate(menu={"monday": {"lunch": ["  Dal ", "", "   ", "Rice"]}})

    grid = data.to_grid()

    assert grid["monday"]["lunch"] == ["Dal", "Rice"]
    assert grid["monday"]["breakfast"] == []
    assert set(grid) == {d.value for d in Weekday}
    assert all(set(slots) == {m.value for m in MealType} for slots in grid.values())


def test_menu_schema_rejects_unknown_day():
    with pytest.raises(ValueError):
        WeeklyMenuUpdate(menu={"funday": {"lunch": ["Dal"]}})


def test_menu_of_mess_without_one_is_empty(sql_session: Session):
    mess = seed_subscription(sql_session).mess

    menu = MessService.get_weekly_menu(sql_session, mess.mess_id)

    assert menu.menu == empty_menu_grid()
    assert menu.updated_at is None


def test_menu_of_unknown_mess_raises(sql_session: Session):
    with pytest.raises(NotFoundError):
        MessService.get_weekly_menu(sql_session, uuid.uuid4())


def test_save_menu_replaces_whole_grid(sql_session: Session):
    mess = seed_subscription(sql_session).mess
    MessService.save_weekly_menu(
        sql_session,
        mess.mess_id,
        WeeklyMenuUpdate(menu={"monday": {"lunch": ["Dal", "Rice"]}, "friday": {"dinner": ["Paneer"]}}),
    )

    MessService.save_weekly_menu(
        sql_session, mess.mess_id, WeeklyMenuUpdate(menu={"monday": {"lunch": ["Rajma"]}})
    )
    menu = MessService.get_weekly_menu(sql_session, mess.mess_id).menu

    assert menu["monday"]["lunch"] == ["Rajma"]
    assert menu["friday"]["dinner"] == []


def test_save_menu_requires_approved_mess(sql_session: Session):
    mess = seed_subscription(sql_session, mess_status=MessStatus.PENDING).mess

    with pytest.raises(ServiceValidationError) as exc_info:
        MessService.save_weekly_menu(
            sql_session, mess.mess_id, WeeklyMenuUpdate(menu={"monday": {"lunch": ["Dal"]}})
        )

    assert exc_info.value.code == "MESS_NOT_APPROVED"


def test_menu_endpoints(sql_client, sql_session: Session):
    mess = seed_subscription(sql_session).mess

    r = sql_client.put(
        f"/messes/{mess.mess_id}/menu",
        json={"menu": {"tuesday": {"breakfast": ["Poha", " "], "lunch": ["Thali"]}}},
    )
    assert r.status_code == 200
    assert r.json()["menu"]["tuesday"]["breakfast"] == ["Poha"]

    r = sql_client.get(f"/messes/{mess.mess_id}/menu")
    assert r.status_code == 200
    body = r.json()
    assert body["mess_id"] == str(mess.mess_id)
    assert body["menu"]["tuesday"] == {"breakfast": ["Poha"], "lunch": ["Thali"], "dinner": []}
    assert body["menu"]["sunday"] == {"breakfast": [], "lunch": [], "dinner": []}


def test_menu_endpoint_unknown_mess_returns_404(sql_client):
    """Verifies: a NotFoundError raised without a code falls back to NOT_FOUND."""
    r = sql_client.get(f"/messes/{uuid.uuid4()}/menu")

    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND"
    assert "details" not in r.json()["error"]


# =============================================================================
# CUSTOMER DELIVERIES
# =============================================================================


def test_customer_deliveries_endpoint(sql_client, sql_session: Session):
    seed = seed_subscription(sql_session)
    on_date = date(2025, 3, 13)
    add_delivery(sql_session, seed.subscription, on_date, MealType.DINNER)
    add_delivery(sql_session, seed.subscription, on_date, MealType.LUNCH)

    r = sql_client.get(
        "/deliveries",
        params={"customer_id": str(seed.customer.user_id), "date": "2025-03-13"},
    )

    assert r.status_code == 200
    body = r.json()
    assert [d["meal_type"] for d in body] == ["lunch", "dinner"]
    assert body[0]["mess_name"] == "Annapurna Home Kitchen"
    assert body[0]["mess_owner_id"] == str(seed.owner.user_id)
    assert body[0]["status"] == "scheduled"


def test_customer_deliveries_default_to_today(sql_session: Session):
    seed = seed_subscription(sql_session)
    today = datetime.now(settings.meal_tz).date()
    add_delivery(sql_session, seed.subscription, today, MealType.LUNCH)

    rows = DeliveryService.list_for_customer(sql_session, seed.customer.user_id)

    assert [r.date for r in rows] == [today]


def test_customer_deliveries_endpoint_requires_customer(sql_client):
    assert sql_client.get("/deliveries").status_code == 422
