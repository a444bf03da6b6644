"""
Streak Guardrail Tests

Verify:
1. First activity starts a streak at 1
2. Same-day activity is idempotent
3. Consecutive days increment, skipped days reset
4. A future-dated activity resets instead of corrupting the count
5. Decay is lazy: reads report 0 without rewriting stored state
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from careerhub.core.errors import ValidationError
from careerhub.features.streaks.service import StreakTracker
from careerhub.features.streaks.store import InMemoryStreakStore
from careerhub.models.streak import StreakState

DAY = datetime(2026, 1, 5, 15, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def store():
    return InMemoryStreakStore()


@pytest.fixture
def tracker(store):
    return StreakTracker(store, tz=timezone.utc)


def test_first_activity_starts_streak(tracker):
    state = tracker.record_activity("user_a", DAY)
    assert state.streak_count == 1
    assert state.last_active_date == date(2026, 1, 5)


def test_same_day_activity_is_idempotent(tracker):
    tracker.record_activity("user_a", DAY)
    tracker.record_activity("user_a", DAY + timedelta(hours=3))
    state = tracker.record_activity("user_a", DAY + timedelta(hours=5))
    assert state.streak_count == 1


def test_consecutive_day_increments(tracker):
    for offset in range(4):
        state = tracker.record_activity("user_a", DAY + timedelta(days=offset))
    assert state.streak_count == 4
    assert state.last_active_date == date(2026, 1, 8)


def test_skipped_day_resets(tracker):
    tracker.record_activity("user_a", DAY)
    tracker.record_activity("user_a", DAY + timedelta(days=1))
    state = tracker.record_activity("user_a", DAY + timedelta(days=3))
    assert state.streak_count == 1
    assert state.last_active_date == date(2026, 1, 8)


def test_future_last_active_date_resets(tracker, store):
    """Clock skew left a last_active_date after today: restart at 1."""
    store.set(StreakState(user_id="user_a", last_active_date=date(2026, 1, 20), streak_count=9))
    state = tracker.record_activity("user_a", DAY)
    assert state.streak_count == 1
    assert state.last_active_date == date(2026, 1, 5)


def test_users_are_isolated(tracker):
    tracker.record_activity("user_a", DAY)
    tracker.record_activity("user_a", DAY + timedelta(days=1))
    tracker.record_activity("user_b", DAY + timedelta(days=1))
    assert tracker.current_streak("user_a", now=DAY + timedelta(days=1)) == 2
    assert tracker.current_streak("user_b", now=DAY + timedelta(days=1)) == 1


def test_current_streak_decays_lazily(tracker, store):
    for offset in range(3):
        tracker.record_activity("user_a", DAY + timedelta(days=offset))

    # Yesterday's streak is still alive today
    assert tracker.current_streak("user_a", now=DAY + timedelta(days=3)) == 3
    # A full skipped day breaks it on read
    assert tracker.current_streak("user_a", now=DAY + timedelta(days=4)) == 0
    # Stored state is untouched by reads
    assert store.get("user_a").streak_count == 3


def test_current_streak_without_state_is_zero(tracker):
    assert tracker.current_streak("nobody", now=DAY) == 0


def test_current_streak_future_last_active_is_zero(tracker, store):
    store.set(StreakState(user_id="user_a", last_active_date=date(2026, 1, 20), streak_count=4))
    assert tracker.current_streak("user_a", now=DAY) == 0


@pytest.mark.parametrize(
    "offset,status,current",
    [(0, "active", 2), (1, "at_risk", 2), (2, "broken", 0)],
)
def test_get_state_status(tracker, offset, status, current):
    tracker.record_activity("user_a", DAY - timedelta(days=1))
    tracker.record_activity("user_a", DAY)

    state = tracker.get_state("user_a", now=DAY + timedelta(days=offset))

    assert state["status"] == status
    assert state["currentStreak"] == current
    assert state["lastActiveDate"] == "2026-01-05"
    assert state["storedCount"] == 2


def test_get_state_without_activity(tracker):
    state = tracker.get_state("user_a", now=DAY)
    assert state == {"userId": "user_a", "currentStreak": 0, "lastActiveDate": None, "storedCount": 0, "status": "none"}


def test_day_boundary_follows_tracker_timezone(store):
    """23:30 UTC on Jan 5 is already Jan 6 in Tokyo."""
    from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

    try:
        tokyo = ZoneInfo("Asia/Tokyo")
    except ZoneInfoNotFoundError:
        pytest.skip("tz database unavailable")
    tracker = StreakTracker(store, tz=tokyo)

    late = datetime(2026, 1, 5, 23, 30, tzinfo=timezone.utc)
    state = tracker.record_activity("user_a", late)
    assert state.last_active_date == date(2026, 1, 6)


def test_naive_datetime_is_treated_as_local(tracker):
    state = tracker.record_activity("user_a", datetime(2026, 1, 5, 23, 59))
    assert state.last_active_date == date(2026, 1, 5)


@pytest.mark.parametrize("user_id", [None, "", "   "])
def test_blank_user_rejected(tracker, user_id):
    with pytest.raises(ValidationError):
        tracker.record_activity(user_id, DAY)


def test_store_returns_copies(store):
    store.set(StreakState(user_id="user_a", last_active_date=date(2026, 1, 5), streak_count=2))
    fetched = store.get("user_a")
    fetched.streak_count = 99
    assert store.get("user_a").streak_count == 2
