"""
Tests for the mess cut HTTP endpoints.

Service methods are monkeypatched; these tests cover request parsing,
status codes and the error envelope:

    {"success": false, "error": {"code": ..., "message": ..., "details": ...}}
"""

import pytest
import uuid
from datetime import date, datetime, timedelta

from test_fixtures import client, make_mess, make_subscription, make_delivery
from services.mess_cut_service import MessCutService
from domain.enums import DeliveryStatus
from app.exceptions import (
    IneligibleSkipWindowError,
    DeliveryNotFoundError,
    DataIntegrityError,
)


def _skip_payload(subscription_id, on_date, meal_type="lunch", reason="Travelling"):
    return {
        "subscription_id": str(subscription_id),
        "date": on_date.isoformat(),
        "meal_type": meal_type,
        "reason": reason,
    }


def test_request_mess_cut_returns_skipped_delivery(monkeypatch):
    mess = make_mess()
    delivery = make_delivery(make_subscription(mess=mess), on_date=date(2025, 3, 13))
    calls = {}

    def fake_skip(db, subscription_id, on_date, meal_type, reason=None):
        calls.update(
            subscription_id=subscription_id, date=on_date, meal_type=meal_type, reason=reason
        )
        delivery.status = DeliveryStatus.SKIPPED
        delivery.skip_reason = reason
        delivery.skip_requested_at = datetime(2025, 3, 12, 20, 0)
        return delivery

    monkeypatch.setattr(MessCutService, "request_meal_skip", fake_skip)

    r = client.post("/mess-cuts", json=_skip_payload(delivery.subscription_id, delivery.date))

    assert r.status_code == 201
    body = r.json()
    assert body["delivery_id"] == str(delivery.delivery_id)
    assert body["status"] == "skipped"
    assert body["skip_reason"] == "Travelling"
    assert body["mess_name"] == mess.name
    assert body["mess_owner_id"] == str(mess.owner_id)
    assert calls["subscription_id"] == delivery.subscription_id
    assert calls["date"] == date(2025, 3, 13)
    assert calls["meal_type"].value == "lunch"


def test_request_mess_cut_inside_window_returns_400(monkeypatch):
    def fake_skip(db, subscription_id, on_date, meal_type, reason=None):
        raise IneligibleSkipWindowError(
            "Mess cut requests must be made at least 12 hours in advance",
            details={"date": on_date.isoformat(), "meal_type": "dinner"},
        )

    monkeypatch.setattr(MessCutService, "request_meal_skip", fake_skip)

    r = client.post("/mess-cuts", json=_skip_payload(uuid.uuid4(), date.today(), "dinner"))

    assert r.status_code == 400
    error = r.json()["error"]
    assert error["code"] == "INELIGIBLE_SKIP_WINDOW"
    assert "12 hours" in error["message"]
    assert error["details"]["meal_type"] == "dinner"


def test_request_mess_cut_missing_delivery_returns_404(monkeypatch):
    def fake_skip(db, subscription_id, on_date, meal_type, reason=None):
        raise DeliveryNotFoundError("No lunch delivery")

    monkeypatch.setattr(MessCutService, "request_meal_skip", fake_skip)

    r = client.post("/mess-cuts", json=_skip_payload(uuid.uuid4(), date.today()))

    assert r.status_code == 404
    assert r.json()["error"]["code"] == "DELIVERY_NOT_FOUND"


def test_request_mess_cut_integrity_failure_returns_500(monkeypatch):
    def fake_skip(db, subscription_id, on_date, meal_type, reason=None):
        raise DataIntegrityError(
            "Delivery was skipped but its subscription or mess is missing",
            details={"subscription_id": str(subscription_id)},
        )

    monkeypatch.setattr(MessCutService, "request_meal_skip", fake_skip)

    r = client.post("/mess-cuts", json=_skip_payload(uuid.uuid4(), date.today()))

    assert r.status_code == 500
    error = r.json()["error"]
    assert error["code"] == "DATA_INTEGRITY_ERROR"
    assert "subscription_id" in error["details"]


@pytest.mark.parametrize(
    "payload",
    [
        {"date": "2025-03-13", "meal_type": "lunch"},
        {"subscription_id": "not-a-uuid", "date": "2025-03-13", "meal_type": "lunch"},
        {"subscription_id": str(uuid.uuid4()), "date": "2025-03-13", "meal_type": "brunch"},
        {"subscription_id": str(uuid.uuid4()), "date": "13/03/2025", "meal_type": "lunch"},
    ],
)
def test_request_mess_cut_rejects_malformed_body(payload):
    r = client.post("/mess-cuts", json=payload)
    assert r.status_code == 422
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


def test_acknowledge_mess_cut(monkeypatch):
    seen = []
    monkeypatch.setattr(
        MessCutService, "acknowledge_meal_skip", lambda db, did: seen.append(did)
    )
    delivery_id = uuid.uuid4()

    r = client.post(f"/mess-cuts/{delivery_id}/acknowledge")

    assert r.status_code == 200
    assert r.json() == {"status": "ok", "acknowledged": str(delivery_id)}
    assert seen == [delivery_id]


def test_acknowledge_unknown_delivery_returns_404(monkeypatch):
    def fake_ack(db, delivery_id):
        raise DeliveryNotFoundError(f"Delivery {delivery_id} not found")

    monkeypatch.setattr(MessCutService, "acknowledge_meal_skip", fake_ack)

    r = client.post(f"/mess-cuts/{uuid.uuid4()}/acknowledge")
    assert r.status_code == 404


def test_eligibility_for_far_future_meal():
    on_date = date.today() + timedelta(days=7)

    r = client.get(f"/mess-cuts/eligibility?date={on_date.isoformat()}&meal_type=breakfast")

    assert r.status_code == 200
    body = r.json()
    assert body["eligible"] is True
    assert body["meal_type"] == "breakfast"
    assert body["notice_hours"] == 12
    assert body["scheduled_at"].startswith(f"{on_date.isoformat()}T08:00:00")


def test_eligibility_for_past_meal():
    on_date = date.today() - timedelta(days=1)

    r = client.get(f"/mess-cuts/eligibility?date={on_date.isoformat()}&meal_type=dinner")

    assert r.status_code == 200
    assert r.json()["eligible"] is False


def test_eligibility_unknown_slot_uses_noon():
    on_date = date.today() + timedelta(days=7)

    r = client.get(f"/mess-cuts/eligibility?date={on_date.isoformat()}&meal_type=snack")

    assert r.status_code == 200
    assert "T12:00:00" in r.json()["scheduled_at"]


def test_eligibility_requires_date():
    r = client.get("/mess-cuts/eligibility?meal_type=lunch")
    assert r.status_code == 422
