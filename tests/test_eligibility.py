"""
Tests for mess cut eligibility.

A meal can be skipped only while it is at least 12 hours away:

    breakfast -> 08:00   lunch -> 13:00   dinner -> 20:00   other -> 12:00

The cutoff is a wall-clock time in an explicit time zone. A naive "now"
is read in that zone; an aware "now" is compared as an instant.
"""

import pytest
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from domain.enums import MealType
from services.mess_cut_service import (
    MessCutService,
    get_meal_time,
    scheduled_at,
    is_eligible_to_skip,
)
from app.config import settings

UTC = ZoneInfo("UTC")
KOLKATA = ZoneInfo("Asia/Kolkata")
MEAL_DAY = date(2025, 3, 12)


@pytest.mark.parametrize(
    "meal_type,expected",
    [
        (MealType.BREAKFAST, time(8, 0)),
        ("lunch", time(13, 0)),
        (MealType.DINNER, time(20, 0)),
        ("snack", time(12, 0)),
        ("", time(12, 0)),
    ],
)
def test_meal_cutoff_times(meal_type, expected):
    assert get_meal_time(meal_type) == expected


def test_exactly_twelve_hours_is_eligible():
    now = datetime(2025, 3, 12, 1, 0, 0, tzinfo=UTC)  # lunch at 13:00
    assert is_eligible_to_skip(MEAL_DAY, MealType.LUNCH, UTC, now) is True


def test_one_second_short_is_ineligible():
    now = datetime(2025, 3, 12, 1, 0, 1, tzinfo=UTC)  # 11h59m59s before lunch
    assert is_eligible_to_skip(MEAL_DAY, MealType.LUNCH, UTC, now) is False


def test_meal_already_served_is_ineligible():
    now = datetime(2025, 3, 12, 21, 0, tzinfo=UTC)
    assert is_eligible_to_skip(MEAL_DAY, MealType.DINNER, UTC, now) is False


def test_unknown_slot_uses_noon_cutoff():
    eligible_now = datetime(2025, 3, 12, 0, 0, tzinfo=UTC)
    late_now = datetime(2025, 3, 12, 0, 0, 1, tzinfo=UTC)
    assert is_eligible_to_skip(MEAL_DAY, "brunch", UTC, eligible_now) is True
    assert is_eligible_to_skip(MEAL_DAY, "brunch", UTC, late_now) is False


def test_tomorrow_lunch_from_half_past_midnight_is_eligible():
    """Lunch tomorrow at 13:00, asked tomorrow at 00:30: 12.5 hours ahead."""
    tomorrow = MEAL_DAY + timedelta(days=1)
    now = datetime.combine(tomorrow, time(0, 30), tzinfo=KOLKATA)
    assert is_eligible_to_skip(tomorrow, MealType.LUNCH, KOLKATA, now) is True


def test_tonight_dinner_from_morning_is_ineligible():
    """Dinner today at 20:00, asked at 09:01: only 10h59m ahead."""
    now = datetime.combine(MEAL_DAY, time(9, 1), tzinfo=KOLKATA)
    assert is_eligible_to_skip(MEAL_DAY, MealType.DINNER, KOLKATA, now) is False


def test_naive_now_is_read_in_given_zone():
    naive = datetime(2025, 3, 12, 1, 0, 0)
    assert is_eligible_to_skip(MEAL_DAY, MealType.LUNCH, KOLKATA, naive) is True


def test_aware_now_in_other_zone_is_compared_as_instant():
    # Lunch in Kolkata is 13:00 IST = 07:30 UTC; 19:30 UTC the day before is 12h ahead
    now_utc = datetime(2025, 3, 11, 19, 30, tzinfo=timezone.utc)
    assert is_eligible_to_skip(MEAL_DAY, MealType.LUNCH, KOLKATA, now_utc) is True
    assert (
        is_eligible_to_skip(MEAL_DAY, MealType.LUNCH, KOLKATA, now_utc + timedelta(seconds=1))
        is False
    )


def test_dst_gap_counts_real_elapsed_time():
    """New York springs forward on 2025-03-09, so 00:30 to 13:00 is only 11.5 real hours."""
    ny = ZoneInfo("America/New_York")
    spring_forward = date(2025, 3, 9)
    now = datetime(2025, 3, 9, 0, 30, tzinfo=ny)
    # Wall clock says 12.5h until lunch, but the clock skips an hour at 02:00
    assert is_eligible_to_skip(spring_forward, MealType.LUNCH, ny, now) is False


def test_scheduled_at_is_aware_in_zone():
    when = scheduled_at(MEAL_DAY, MealType.BREAKFAST, KOLKATA)
    assert when.tzinfo is KOLKATA
    assert (when.hour, when.minute) == (8, 0)


def test_can_request_uses_configured_zone():
    tz = settings.meal_tz
    now = datetime.combine(MEAL_DAY, time(1, 0), tzinfo=tz)
    assert MessCutService.can_request_meal_skip(MEAL_DAY, MealType.LUNCH, now) is True
    assert (
        MessCutService.can_request_meal_skip(MEAL_DAY, MealType.LUNCH, now + timedelta(minutes=1))
        is False
    )


def test_defaults_to_current_clock():
    far_future = date.today() + timedelta(days=30)
    long_past = date.today() - timedelta(days=30)
    assert is_eligible_to_skip(far_future, MealType.DINNER, UTC) is True
    assert is_eligible_to_skip(long_past, MealType.DINNER, UTC) is False
