"""
careerhub/features/stats/cache.py

Dashboard display cache: the last-written stats a client may render before a
fresh computation lands. Never an input to scoring.
"""

from dataclasses import replace
from typing import Dict, Optional

from careerhub.models.stats import CachedStats


class InMemoryStatsCache:
    def __init__(self):
        self._rows: Dict[str, CachedStats] = {}

    def get(self, user_id: str) -> Optional[CachedStats]:
        row = self._rows.get(user_id)
        return replace(row, upcoming_deadlines=list(row.upcoming_deadlines)) if row else None

    def put(self, cached: CachedStats) -> CachedStats:
        self._rows[cached.user_id] = replace(cached, upcoming_deadlines=list(cached.upcoming_deadlines))
        return cached

    def clear(self) -> None:
        """FOR TESTING ONLY."""
        self._rows.clear()
