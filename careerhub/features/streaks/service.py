from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from careerhub.core.logging import log_event
from careerhub.core.validation import require_user_id
from careerhub.models.streak import StreakState, StreakStatus


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """IANA zone for day boundaries; None means the process's local timezone."""
    return ZoneInfo(name) if name else None


class StreakTracker:
    """Deterministic, idempotent day-granularity streak state machine.

    Transitions on a qualifying activity at local day D:
    - no state          -> {D, 1}
    - last == D         -> unchanged
    - last == D - 1     -> {D, count + 1}
    - anything else     -> {D, 1} (skipped days, or a future date from clock skew)

    Decay is lazy: current_streak() reports 0 once a day has been skipped, and
    the stale stored count is only overwritten by the next qualifying activity.
    """

    def __init__(self, store, tz: Optional[tzinfo] = None):
        self._store = store
        self._tz = tz

    def record_activity(self, user_id: str, occurred_at: Optional[datetime] = None) -> StreakState:
        require_user_id(user_id)
        day = self.local_day(occurred_at)
        state = self._store.get(user_id)

        if state is None:
            state = StreakState(user_id=user_id, last_active_date=day, streak_count=1)
            transition = "started"
        elif state.last_active_date == day:
            # Already counted today
            return state
        elif state.last_active_date == day - timedelta(days=1):
            state.streak_count += 1
            state.last_active_date = day
            transition = "incremented"
        else:
            state.streak_count = 1
            state.last_active_date = day
            transition = "reset"

        self._store.set(state)
        log_event(
            "info",
            "streak.updated",
            user_id=user_id,
            event_type=f"streak.{transition}",
            extra={"streak_count": state.streak_count, "streak_day": day.isoformat()},
        )
        return state

    def current_streak(self, user_id: str, now: Optional[datetime] = None) -> int:
        """Streak length as of today, without mutating stored state."""
        require_user_id(user_id)
        state = self._store.get(user_id)
        if state is None:
            return 0
        return state.streak_count if self._is_alive(state, self.local_day(now)) else 0

    def get_state(self, user_id: str, now: Optional[datetime] = None) -> dict:
        require_user_id(user_id)
        state = self._store.get(user_id)
        today = self.local_day(now)
        status = self._status_for_state(state, today)
        return {
            "userId": user_id,
            "currentStreak": state.streak_count if status in ("active", "at_risk") else 0,
            "lastActiveDate": state.last_active_date.isoformat() if state else None,
            "storedCount": state.streak_count if state else 0,
            "status": status,
        }

    def last_active_date(self, user_id: str) -> Optional[date]:
        require_user_id(user_id)
        state = self._store.get(user_id)
        return state.last_active_date if state else None

    def localize(self, moment: Optional[datetime] = None) -> datetime:
        """Aware datetime for moment; naive values are pinned to the tracker's timezone.

        Callers run timestamps through this before handing them to any store,
        so every backend agrees on which local day a naive value falls on.
        """
        if moment is None:
            return datetime.now(timezone.utc)
        if moment.tzinfo is not None:
            return moment
        if self._tz is None:
            return moment.astimezone()
        return moment.replace(tzinfo=self._tz)

    # Internal helpers -------------------------------------------------
    def local_day(self, moment: Optional[datetime] = None) -> date:
        """Calendar date of moment in the tracker's timezone.

        Naive datetimes are taken to already be local.
        """
        if moment is None:
            return datetime.now(self._tz).date()
        if moment.tzinfo is None:
            return moment.date()
        return moment.astimezone(self._tz).date()

    @staticmethod
    def _is_alive(state: StreakState, today: date) -> bool:
        return state.last_active_date in (today, today - timedelta(days=1))

    @staticmethod
    def _status_for_state(state: Optional[StreakState], today: date) -> StreakStatus:
        if state is None:
            return "none"
        if state.last_active_date == today:
            return "active"
        if state.last_active_date == today - timedelta(days=1):
            return "at_risk"
        return "broken"
