"""
careerhub/features/activity/store.py

Append-only activity ledger storage.
In-memory implementation; store_pg.py is the SQL-backed twin with the same interface.
"""

from datetime import datetime
from itertools import count
from typing import Dict, List, Tuple

from careerhub.models.activity import ActivityCategory, ActivityEntry


class InMemoryActivityStore:
    """
    Append-only, per-user activity log.

    Ordering is (timestamp, insertion sequence), so entries sharing a
    timestamp still come back newest-inserted first.
    """

    def __init__(self):
        self._entries: Dict[str, List[Tuple[int, ActivityEntry]]] = {}
        self._sequence = count(1)

    def append(
        self,
        user_id: str,
        category: ActivityCategory,
        description: str,
        timestamp: datetime,
    ) -> ActivityEntry:
        """
        Append an entry and assign its id.

        Returns:
            The stored ActivityEntry
        """
        seq = next(self._sequence)
        entry = ActivityEntry(
            id=str(seq),
            user_id=user_id,
            category=category,
            description=description,
            timestamp=timestamp,
        )
        self._entries.setdefault(user_id, []).append((seq, entry))
        return entry

    def list_recent(self, user_id: str, limit: int) -> List[ActivityEntry]:
        """Newest first, at most limit entries (always a copy, not a reference)."""
        rows = sorted(
            self._entries.get(user_id, []),
            key=lambda row: (row[1].timestamp, row[0]),
            reverse=True,
        )
        return [entry for _, entry in rows[:limit]]

    def count(self, user_id: str) -> int:
        return len(self._entries.get(user_id, []))

    def clear(self) -> None:
        """
        Clear all entries.
        FOR TESTING ONLY.
        """
        self._entries.clear()
