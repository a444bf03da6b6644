"""
careerhub/features/activity/store_pg.py

SQL-backed append-only activity ledger.

This module provides persistent storage for activity entries while maintaining:
- Append-only semantics (no update or delete paths)
- Deterministic newest-first ordering (created_at, then id)
- The same interface as InMemoryActivityStore
"""

from datetime import datetime, timezone
from typing import List

from sqlalchemy import select, insert, func

from careerhub.core.database import Database, activity_entries
from careerhub.models.activity import ActivityCategory, ActivityEntry


def _as_utc(moment: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored as UTC.
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


class SqlActivityStore:
    """
    SQL-backed activity store.

    Maintains identical interface to the in-memory store.
    """

    def __init__(self, db: Database):
        self.db = db

    def append(
        self,
        user_id: str,
        category: ActivityCategory,
        description: str,
        timestamp: datetime,
    ) -> ActivityEntry:
        """
        Insert one ledger row; the database assigns the id.

        Returns:
            The stored ActivityEntry
        """
        stored_at = _as_utc(timestamp)
        with self.db.session() as session:
            result = session.execute(
                insert(activity_entries).values(
                    user_id=user_id,
                    category=category.value,
                    description=description,
                    created_at=stored_at,
                )
            )
            entry_id = result.inserted_primary_key[0]

        return ActivityEntry(
            id=str(entry_id),
            user_id=user_id,
            category=category,
            description=description,
            timestamp=stored_at,
        )

    def list_recent(self, user_id: str, limit: int) -> List[ActivityEntry]:
        """
        Newest first, at most limit entries.

        Returns:
            List of ActivityEntry instances (copies, not DB references)
        """
        with self.db.session() as session:
            query = (
                select(activity_entries)
                .where(activity_entries.c.user_id == user_id)
                .order_by(activity_entries.c.created_at.desc(), activity_entries.c.id.desc())
                .limit(limit)
            )
            return [
                ActivityEntry(
                    id=str(row.id),
                    user_id=row.user_id,
                    category=ActivityCategory(row.category),
                    description=row.description,
                    timestamp=_as_utc(row.created_at),
                )
                for row in session.execute(query)
            ]

    def count(self, user_id: str) -> int:
        with self.db.session() as session:
            return session.execute(
                select(func.count()).select_from(activity_entries).where(activity_entries.c.user_id == user_id)
            ).scalar_one()

    def clear(self) -> None:
        """
        Clear all entries.
        FOR TESTING ONLY.
        """
        with self.db.session() as session:
            session.execute(activity_entries.delete())
