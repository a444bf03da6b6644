"""
careerhub/features/streaks/store.py

Per-user streak state persistence.
In-memory implementation; store_pg.py holds the SQL-backed twin.
"""

from dataclasses import replace
from typing import Dict, Optional

from careerhub.models.streak import StreakState


class InMemoryStreakStore:
    """
    Dict-backed streak store.

    Returns copies so callers cannot mutate stored state without calling set().
    """

    def __init__(self):
        self._states: Dict[str, StreakState] = {}

    def get(self, user_id: str) -> Optional[StreakState]:
        state = self._states.get(user_id)
        return replace(state) if state else None

    def set(self, state: StreakState) -> None:
        """Upsert the state for state.user_id."""
        self._states[state.user_id] = replace(state)

    def clear(self) -> None:
        """FOR TESTING ONLY."""
        self._states.clear()
