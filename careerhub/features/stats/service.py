"""
Stats Service

Gathers a fresh snapshot from the record store, activity ledger and streak
tracker, then computes placement probability deterministically.

The stored stats row is a display cache: it is seeded for new users and
refreshed after each computation, but never read back to derive a score.
"""

from dataclasses import replace
from datetime import datetime, timezone
from typing import List, Optional

from careerhub.core.logging import log_event
from careerhub.core.validation import require_user_id
from careerhub.features.activity.ledger import ActivityLedger
from careerhub.features.records.store import RESUME, RecordCollection
from careerhub.features.scoring.scoring_engine import PlacementScoringEngine
from careerhub.features.streaks.service import StreakTracker
from careerhub.models.score import ScoreSnapshot
from careerhub.models.stats import CachedStats, Stats

# Recent-activity sample size fed to the scorer
RECENT_ACTIVITY_SAMPLE = 10
UPCOMING_DEADLINES_LIMIT = 3


class StatsService:
    """Scoring orchestrator for the dashboard."""

    def __init__(self, records, ledger: ActivityLedger, streaks: StreakTracker, cache):
        self._records = records
        self._ledger = ledger
        self._streaks = streaks
        self._cache = cache

    def get_stats(self, user_id: str, now: Optional[datetime] = None) -> Stats:
        """
        Compute the dashboard stats for a user.

        Args:
            user_id: User ID (rejected if missing or blank)
            now: Fixed timestamp for deterministic testing (optional)

        Returns:
            Stats with a freshly computed placement probability
        """
        require_user_id(user_id)
        now = self._streaks.localize(now)

        self._seed_if_missing(user_id, now)

        snapshot = self.build_snapshot(user_id, now=now)
        components = PlacementScoringEngine.components(snapshot)
        probability = PlacementScoringEngine.score_components(components)
        upcoming = self._records.list_upcoming(
            user_id, RecordCollection.EVENTS, after=now, limit=UPCOMING_DEADLINES_LIMIT
        )
        last_active = self._streaks.last_active_date(user_id)

        stats = Stats(
            user_id=user_id,
            placement_probability=probability,
            streak=snapshot.streak_count,
            last_active_date=last_active.isoformat() if last_active else None,
            upcoming_deadlines=upcoming,
            components=components,
        )

        self._cache.put(
            CachedStats(
                user_id=user_id,
                placement_probability=stats.placement_probability,
                streak=stats.streak,
                upcoming_deadlines=[event.to_dict() for event in upcoming],
                updated_at=now,
            )
        )
        log_event(
            "info",
            "stats.computed",
            user_id=user_id,
            event_type="stats.computed",
            extra={"score": probability, "streak_count": stats.streak},
        )
        return stats

    def build_snapshot(self, user_id: str, now: Optional[datetime] = None) -> ScoreSnapshot:
        """Read every scoring signal fresh from storage."""
        require_user_id(user_id)
        recent = self._ledger.list_recent(user_id, RECENT_ACTIVITY_SAMPLE)
        return ScoreSnapshot(
            application_count=self._records.count(user_id, RecordCollection.APPLICATIONS),
            interview_count=self._records.count(user_id, RecordCollection.INTERVIEWS),
            resume_present=self._records.exists(user_id, RESUME),
            flashcard_deck_count=self._records.count(user_id, RecordCollection.FLASHCARD_DECKS),
            streak_count=self._streaks.current_streak(user_id, now=now),
            recent_activity_count=len(recent),
        )

    def get_cached_stats(self, user_id: str) -> Optional[CachedStats]:
        require_user_id(user_id)
        return self._cache.get(user_id)

    def update_cached_stats(
        self,
        user_id: str,
        *,
        placement_probability: Optional[int] = None,
        streak: Optional[int] = None,
        upcoming_deadlines: Optional[List[dict]] = None,
        now: Optional[datetime] = None,
    ) -> CachedStats:
        """Merge-overwrite the display cache. Has no effect on computed scores."""
        require_user_id(user_id)
        now = now or datetime.now(timezone.utc)
        current = self._cache.get(user_id) or CachedStats(user_id=user_id)

        changes = {"updated_at": now}
        if placement_probability is not None:
            changes["placement_probability"] = placement_probability
        if streak is not None:
            changes["streak"] = streak
        if upcoming_deadlines is not None:
            changes["upcoming_deadlines"] = list(upcoming_deadlines)
        return self._cache.put(replace(current, **changes))

    def _seed_if_missing(self, user_id: str, now: datetime) -> None:
        if self._cache.get(user_id) is not None:
            return
        self._cache.put(CachedStats(user_id=user_id, updated_at=now))
        log_event("info", "stats.seeded", user_id=user_id, event_type="stats.seeded")
