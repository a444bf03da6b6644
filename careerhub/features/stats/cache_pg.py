"""
careerhub/features/stats/cache_pg.py

SQL-backed dashboard display cache. Same interface as InMemoryStatsCache.
"""

from datetime import timezone
from typing import Optional

from sqlalchemy import select, insert, update

from careerhub.core.database import Database, stats_cache
from careerhub.models.stats import CachedStats


class SqlStatsCache:
    def __init__(self, db: Database):
        self.db = db

    def get(self, user_id: str) -> Optional[CachedStats]:
        with self.db.session() as session:
            row = session.execute(
                select(stats_cache).where(stats_cache.c.user_id == user_id)
            ).first()
            if row is None:
                return None
            updated_at = row.updated_at
            if updated_at is not None and updated_at.tzinfo is None:
                updated_at = updated_at.replace(tzinfo=timezone.utc)
            return CachedStats(
                user_id=row.user_id,
                placement_probability=row.placement_probability,
                streak=row.streak,
                upcoming_deadlines=list(row.upcoming_deadlines or []),
                updated_at=updated_at,
            )

    def put(self, cached: CachedStats) -> CachedStats:
        values = {
            "placement_probability": cached.placement_probability,
            "streak": cached.streak,
            "upcoming_deadlines": list(cached.upcoming_deadlines),
            "updated_at": cached.updated_at,
        }
        with self.db.session() as session:
            exists = session.execute(
                select(stats_cache.c.user_id).where(stats_cache.c.user_id == cached.user_id)
            ).first()
            if exists:
                session.execute(
                    update(stats_cache).where(stats_cache.c.user_id == cached.user_id).values(**values)
                )
            else:
                session.execute(insert(stats_cache).values(user_id=cached.user_id, **values))
        return cached

    def clear(self) -> None:
        """FOR TESTING ONLY."""
        with self.db.session() as session:
            session.execute(stats_cache.delete())
