from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Literal

StreakStatus = Literal["none", "active", "at_risk", "broken"]


@dataclass
class StreakState:
    """
    Persisted streak for one user. Day-level only, no time component.

    streak_count may be stale once a day has been skipped; readers go through
    StreakTracker.current_streak, which applies decay lazily.
    """

    user_id: str
    last_active_date: date
    streak_count: int = 1

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "lastActiveDate": self.last_active_date.isoformat(),
            "streakCount": self.streak_count,
        }
