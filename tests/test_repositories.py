"""
Repository tests against a mocked SQLAlchemy session.

These check that slot lookups short-circuit on unknown meal slots, that
writes commit, and that the chained query calls return what the session
yields. The same repositories run against real SQL in test_sql_repositories.py.
"""

import uuid
from datetime import date, datetime
from unittest.mock import MagicMock

from sqlalchemy.orm import Session

from repositories import (
    DeliveryRepository,
    NotificationRepository,
    UserRepository,
)
from domain.enums import MealType, NotificationType


def _session():
    db = MagicMock(spec=Session)
    query = db.query.return_value
    for name in ("filter", "join", "outerjoin", "options", "populate_existing", "order_by", "limit"):
        getattr(query, name).return_value = query
    return db, query


def test_unknown_slot_never_hits_the_database():
    db, _ = _session()
    repo = DeliveryRepository(db)
    sid = uuid.uuid4()

    assert repo.mark_skipped(sid, date.today(), "brunch", None, datetime.utcnow()) == 0
    assert repo.get_with_provider(sid, date.today(), "brunch") is None
    db.query.assert_not_called()
    db.commit.assert_not_called()


def test_mark_skipped_commits_and_returns_rowcount():
    db, query = _session()
    query.update.return_value = 1

    updated = DeliveryRepository(db).mark_skipped(
        uuid.uuid4(), date.today(), MealType.LUNCH, "Travelling", datetime.utcnow()
    )

    assert updated == 1
    db.commit.assert_called_once()


def test_customer_day_is_loaded_with_outer_joins():
    db, query = _session()
    query.all.return_value = []

    assert DeliveryRepository(db).get_for_customer_on_date(uuid.uuid4(), date.today()) == []
    query.outerjoin.assert_called()
    query.order_by.assert_called_once()


def test_get_with_provider_uses_single_row():
    db, query = _session()
    query.one_or_none.return_value = None

    assert DeliveryRepository(db).get_with_provider(uuid.uuid4(), date.today(), "lunch") is None
    query.join.assert_called()


def test_set_notes_returns_zero_for_missing_row():
    db, query = _session()
    query.update.return_value = 0

    assert DeliveryRepository(db).set_notes(uuid.uuid4(), "Acknowledged") == 0
    db.commit.assert_called_once()


def test_create_notification_is_unread():
    db, _ = _session()
    user_id = uuid.uuid4()

    note = NotificationRepository(db).create_notification(
        user_id, "Mess Cut Request", "Skip lunch", NotificationType.MESS_CUT, {"type": "mess_cut"}
    )

    assert note.user_id == user_id
    assert note.is_read is False
    assert note.type == NotificationType.MESS_CUT
    db.add.assert_called_once_with(note)
    db.commit.assert_called_once()


def test_count_unread_defaults_to_zero():
    db, query = _session()
    query.scalar.return_value = None

    assert NotificationRepository(db).count_unread(uuid.uuid4()) == 0


def test_get_push_token():
    db, query = _session()
    query.first.return_value = ("ExponentPushToken[abc]",)
    assert UserRepository(db).get_push_token(uuid.uuid4()) == "ExponentPushToken[abc]"

    query.first.return_value = None
    assert UserRepository(db).get_push_token(uuid.uuid4()) is None
