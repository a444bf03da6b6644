"""
Stats orchestration tests.

The placement probability is always computed from fresh reads; the cached
stats row is display-only.
"""

from datetime import datetime, timedelta, timezone

import pytest

from careerhub.core.errors import ValidationError
from careerhub.features.records.store import RecordCollection

NOW = datetime(2026, 1, 5, 12, 0, 0, tzinfo=timezone.utc)


def _seed_reference_user(services, records, user_id="user_a"):
    """5 applications, 3 interviews, resume, 1 deck, 10-day streak, 4 recent entries."""
    for i in range(5):
        records.add(user_id, RecordCollection.APPLICATIONS, company=f"Co {i}", position="SWE")
    for i in range(3):
        records.add(user_id, RecordCollection.INTERVIEWS, title=f"Round {i}")
    records.add(user_id, RecordCollection.FLASHCARD_DECKS, title="System design")
    records.set_resume(user_id, "Experienced engineer")

    # 6 days of earlier activity, then 4 entries across the last 4 days
    for offset in range(9, 3, -1):
        services.streaks.record_activity(user_id, NOW - timedelta(days=offset))
    for offset in range(3, -1, -1):
        services.ledger.append(user_id, "application", f"day -{offset}", now=NOW - timedelta(days=offset))


def test_reference_user_scores_56(services, records):
    _seed_reference_user(services, records)

    stats = services.stats.get_stats("user_a", now=NOW)

    assert stats.streak == 10
    assert stats.placement_probability == 56
    assert stats.components.recent_activity == 4
    assert stats.last_active_date == "2026-01-05"


def test_new_user_gets_seeded_cache_and_zero_score(services):
    assert services.stats.get_cached_stats("fresh") is None

    stats = services.stats.get_stats("fresh", now=NOW)

    assert stats.placement_probability == 0
    assert stats.streak == 0
    assert stats.last_active_date is None
    assert stats.upcoming_deadlines == []
    cached = services.stats.get_cached_stats("fresh")
    assert cached is not None
    assert cached.placement_probability == 0


def test_get_stats_refreshes_display_cache(services, records):
    records.set_resume("user_a", "resume text")

    services.stats.get_stats("user_a", now=NOW)

    cached = services.stats.get_cached_stats("user_a")
    assert cached.placement_probability == 10
    assert cached.updated_at == NOW


def test_cached_values_never_feed_the_score(services):
    services.stats.update_cached_stats("user_a", placement_probability=90, streak=30, now=NOW)

    stats = services.stats.get_stats("user_a", now=NOW)

    assert stats.placement_probability == 0
    assert stats.streak == 0


def test_update_cached_stats_merges_fields(services):
    services.stats.update_cached_stats(
        "user_a",
        placement_probability=40,
        upcoming_deadlines=[{"title": "OA", "date": "2026-01-07"}],
        now=NOW,
    )
    cached = services.stats.update_cached_stats("user_a", streak=3, now=NOW)

    assert cached.placement_probability == 40
    assert cached.streak == 3
    assert cached.upcoming_deadlines == [{"title": "OA", "date": "2026-01-07"}]


def test_streak_decay_applies_to_score(services):
    for offset in range(7):
        services.streaks.record_activity("user_a", NOW + timedelta(days=offset))

    alive = services.stats.get_stats("user_a", now=NOW + timedelta(days=7))
    broken = services.stats.get_stats("user_a", now=NOW + timedelta(days=8))

    assert alive.components.streak == 5
    assert broken.streak == 0
    assert broken.components.streak == 0


def test_upcoming_deadlines_future_only_sorted_and_limited(services, records):
    records.add("user_a", RecordCollection.EVENTS, title="Past", date=NOW - timedelta(days=1))
    records.add("user_a", RecordCollection.EVENTS, title="Right now", date=NOW)
    records.add("user_a", RecordCollection.EVENTS, title="Onsite", date=NOW + timedelta(days=9))
    records.add("user_a", RecordCollection.EVENTS, title="OA", date=NOW + timedelta(days=2))
    records.add("user_a", RecordCollection.EVENTS, title="Recruiter call", date=NOW + timedelta(hours=3))
    records.add("user_a", RecordCollection.EVENTS, title="Offer deadline", date=NOW + timedelta(days=20))

    stats = services.stats.get_stats("user_a", now=NOW)

    assert [e.title for e in stats.upcoming_deadlines] == ["Recruiter call", "OA", "Onsite"]


def test_recent_activity_sample_is_capped(services):
    for i in range(12):
        services.ledger.append("user_a", "email", f"mail {i}", now=NOW + timedelta(minutes=i))

    snapshot = services.stats.build_snapshot("user_a", now=NOW)

    assert snapshot.recent_activity_count == 10


@pytest.mark.parametrize("user_id", [None, "", "   "])
def test_blank_user_never_scored(services, user_id):
    with pytest.raises(ValidationError):
        services.stats.get_stats(user_id, now=NOW)
    with pytest.raises(ValidationError):
        services.stats.update_cached_stats(user_id, streak=1, now=NOW)


def test_stats_serialize_camel_case(services, records):
    records.add("user_a", RecordCollection.EVENTS, title="OA", date=NOW + timedelta(days=1))

    payload = services.stats.get_stats("user_a", now=NOW).to_dict()

    assert set(payload) == {
        "userId",
        "placementProbability",
        "streak",
        "lastActiveDate",
        "upcomingDeadlines",
        "components",
    }
    assert payload["upcomingDeadlines"] == [{"title": "OA", "date": "2026-01-06T12:00:00+00:00"}]


def test_naive_now_uses_tracker_timezone_for_deadlines():
    """Naive 20:00 in UTC+9 is 11:00 UTC, so a 15:00 UTC event is still upcoming."""
    from careerhub.features.activity.ledger import ActivityLedger
    from careerhub.features.activity.store import InMemoryActivityStore
    from careerhub.features.records.store import InMemoryRecordStore
    from careerhub.features.stats.cache import InMemoryStatsCache
    from careerhub.features.stats.service import StatsService
    from careerhub.features.streaks.service import StreakTracker
    from careerhub.features.streaks.store import InMemoryStreakStore

    records = InMemoryRecordStore()
    tracker = StreakTracker(InMemoryStreakStore(), tz=timezone(timedelta(hours=9)))
    ledger = ActivityLedger(InMemoryActivityStore(), tracker)
    stats_service = StatsService(records, ledger, tracker, InMemoryStatsCache())
    records.add("user_a", RecordCollection.EVENTS, title="Recruiter call", date=datetime(2026, 1, 5, 15, 0, tzinfo=timezone.utc))
    ledger.append("user_a", "email", "naive", now=datetime(2026, 1, 5, 19, 0))

    stats = stats_service.get_stats("user_a", now=datetime(2026, 1, 5, 20, 0))

    assert [e.title for e in stats.upcoming_deadlines] == ["Recruiter call"]
    assert stats.streak == 1
    assert stats_service.get_cached_stats("user_a").updated_at.tzinfo is not None
