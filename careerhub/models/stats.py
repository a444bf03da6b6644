from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from careerhub.models.score import ScoreComponents


@dataclass(frozen=True)
class UpcomingEvent:
    title: str
    date: datetime

    def to_dict(self) -> dict:
        return {"title": self.title, "date": self.date.isoformat()}


@dataclass
class Stats:
    """
    Dashboard view assembled by StatsService.get_stats.

    Attributes:
        user_id: Owner of the stats
        placement_probability: Fresh score, 0..95
        streak: Current (decayed) streak length in days
        last_active_date: ISO date of the last qualifying activity, if any
        upcoming_deadlines: Soonest future calendar events, ascending
        components: Capped per-signal breakdown of the score
    """

    user_id: str
    placement_probability: int
    streak: int
    last_active_date: Optional[str]
    upcoming_deadlines: List[UpcomingEvent] = field(default_factory=list)
    components: ScoreComponents = field(default_factory=ScoreComponents)

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "placementProbability": self.placement_probability,
            "streak": self.streak,
            "lastActiveDate": self.last_active_date,
            "upcomingDeadlines": [event.to_dict() for event in self.upcoming_deadlines],
            "components": self.components.to_dict(),
        }


@dataclass
class CachedStats:
    """
    Last-written dashboard values, kept for optimistic display only.

    Nothing in the engine reads this to compute or branch; a fresh
    StatsService.get_stats call always supersedes it.
    """

    user_id: str
    placement_probability: int = 0
    streak: int = 0
    upcoming_deadlines: List[dict] = field(default_factory=list)
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "placementProbability": self.placement_probability,
            "streak": self.streak,
            "upcomingDeadlines": list(self.upcoming_deadlines),
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
