"""
Service wiring.

Builds the ledger, streak tracker and stats orchestrator around one set of
stores and hands them to the app explicitly (app.state.services):
- SQL-backed stores when a database URL is configured
- In-memory stores otherwise (local development, tests)
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from careerhub.core.config import Settings
from careerhub.core.database import Database
from careerhub.features.activity.ledger import ActivityLedger
from careerhub.features.activity.store import InMemoryActivityStore
from careerhub.features.activity.store_pg import SqlActivityStore
from careerhub.features.records.store import InMemoryRecordStore
from careerhub.features.records.store_pg import SqlRecordStore
from careerhub.features.stats.cache import InMemoryStatsCache
from careerhub.features.stats.cache_pg import SqlStatsCache
from careerhub.features.stats.service import StatsService
from careerhub.features.streaks.service import StreakTracker, resolve_timezone
from careerhub.features.streaks.store import InMemoryStreakStore
from careerhub.features.streaks.store_pg import SqlStreakStore

logger = logging.getLogger("careerhub")


@dataclass
class Services:
    ledger: ActivityLedger
    streaks: StreakTracker
    stats: StatsService
    records: object
    db: Optional[Database] = None


def build_services(settings: Settings, db: Optional[Database] = None, records=None) -> Services:
    """
    Assemble services for one app instance.

    Args:
        settings: Application settings (timezone, database URL)
        db: Pre-built database handle (optional; tests pass SQLite here)
        records: Record store override (optional)
    """
    if db is None:
        url = settings.TEST_DATABASE_URL or settings.DATABASE_URL
        db = Database(url) if url else None

    tz = resolve_timezone(settings.ACTIVITY_TIMEZONE)

    if db is not None:
        logger.info("services.stores", extra={"event_type": "services.stores.sql"})
        activity_store = SqlActivityStore(db)
        streak_store = SqlStreakStore(db)
        cache = SqlStatsCache(db)
        records = records or SqlRecordStore(db)
    else:
        logger.info("services.stores", extra={"event_type": "services.stores.memory"})
        activity_store = InMemoryActivityStore()
        streak_store = InMemoryStreakStore()
        cache = InMemoryStatsCache()
        records = records or InMemoryRecordStore()

    streaks = StreakTracker(streak_store, tz=tz)
    ledger = ActivityLedger(activity_store, streaks)
    stats = StatsService(records, ledger, streaks, cache)
    return Services(ledger=ledger, streaks=streaks, stats=stats, records=records, db=db)


def get_services(request: Request) -> Services:
    """FastAPI dependency returning the app's services."""
    return request.app.state.services
