# careerhub/conftest.py
import os
from datetime import timezone

import pytest

# Tests build their own settings; never fail import-time env validation
os.environ.setdefault("SKIP_ENV_VALIDATION", "1")

from fastapi.testclient import TestClient

from careerhub.core.config import Settings
from careerhub.core.database import Database
from careerhub.core.services import Services
from careerhub.features.activity.ledger import ActivityLedger
from careerhub.features.activity.store import InMemoryActivityStore
from careerhub.features.activity.store_pg import SqlActivityStore
from careerhub.features.records.store import InMemoryRecordStore
from careerhub.features.records.store_pg import SqlRecordStore
from careerhub.features.stats.cache import InMemoryStatsCache
from careerhub.features.stats.cache_pg import SqlStatsCache
from careerhub.features.stats.service import StatsService
from careerhub.features.streaks.service import StreakTracker
from careerhub.features.streaks.store import InMemoryStreakStore
from careerhub.features.streaks.store_pg import SqlStreakStore


def _wire(activity_store, streak_store, cache, records, db=None) -> Services:
    # Day boundaries in UTC so date assertions don't depend on the host timezone
    streaks = StreakTracker(streak_store, tz=timezone.utc)
    ledger = ActivityLedger(activity_store, streaks)
    stats = StatsService(records, ledger, streaks, cache)
    return Services(ledger=ledger, streaks=streaks, stats=stats, records=records, db=db)


@pytest.fixture
def test_settings():
    """Settings isolated from the developer's .env file."""
    return Settings(_env_file=None, ENV="test", DATABASE_URL=None, TEST_DATABASE_URL=None)


@pytest.fixture
def records():
    return InMemoryRecordStore()


@pytest.fixture
def services(records):
    """In-memory services with UTC day boundaries."""
    return _wire(InMemoryActivityStore(), InMemoryStreakStore(), InMemoryStatsCache(), records)


@pytest.fixture
def sqlite_db():
    """
    Fresh in-memory SQLite database with all tables created.

    StaticPool keeps the single connection alive for the whole test.
    """
    db = Database("sqlite://")
    db.create_all_tables()
    yield db
    db.drop_all_tables()
    db.dispose()


@pytest.fixture
def sql_services(sqlite_db):
    return _wire(
        SqlActivityStore(sqlite_db),
        SqlStreakStore(sqlite_db),
        SqlStatsCache(sqlite_db),
        SqlRecordStore(sqlite_db),
        db=sqlite_db,
    )


@pytest.fixture
def client(test_settings, services):
    from careerhub.main import create_app

    app = create_app(settings=test_settings, services=services)
    with TestClient(app) as test_client:
        yield test_client
