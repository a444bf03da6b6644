"""
Activity Ledger

Append-only log of qualifying user actions. Every append also counts toward
the user's daily streak.

Failure semantics:
- A failed append raises before the streak is touched.
- A failed streak update after a successful append is logged and re-raised;
  the appended entry stays in the ledger.
"""

from datetime import datetime
from typing import List, Optional, Union

from careerhub.core.errors import ValidationError
from careerhub.core.logging import log_event
from careerhub.core.validation import require_user_id
from careerhub.features.streaks.service import StreakTracker
from careerhub.models.activity import ActivityCategory, ActivityEntry

DEFAULT_RECENT_LIMIT = 5


def parse_category(category: Union[ActivityCategory, str]) -> ActivityCategory:
    """Coerce a category value, rejecting anything outside the closed set."""
    if isinstance(category, ActivityCategory):
        return category
    try:
        return ActivityCategory(category)
    except ValueError:
        allowed = ", ".join(c.value for c in ActivityCategory)
        raise ValidationError(f"Unknown activity category '{category}' (expected one of: {allowed})")


class ActivityLedger:
    def __init__(self, store, streaks: StreakTracker):
        self._store = store
        self._streaks = streaks

    def append(
        self,
        user_id: str,
        category: Union[ActivityCategory, str],
        description: str,
        now: Optional[datetime] = None,
    ) -> ActivityEntry:
        """
        Record a qualifying activity and advance the streak.

        Args:
            user_id: Owner of the entry
            category: One of ActivityCategory (enum or its string value)
            description: Human-readable text, immutable once written
            now: Fixed timestamp for deterministic testing (optional)

        Returns:
            The appended ActivityEntry with its store-assigned id
        """
        require_user_id(user_id)
        category = parse_category(category)
        if not isinstance(description, str):
            raise ValidationError("description must be a string")

        timestamp = self._streaks.localize(now)
        entry = self._store.append(user_id, category, description, timestamp)
        log_event(
            "info",
            "activity.appended",
            user_id=user_id,
            event_type="activity.appended",
            extra={"entry_id": entry.id, "category": category.value},
        )

        try:
            self._streaks.record_activity(user_id, entry.timestamp)
        except Exception:
            log_event(
                "error",
                "streak.update_failed",
                user_id=user_id,
                event_type="streak.update_failed",
                error_code="streak_update_failed",
                extra={"entry_id": entry.id},
                exc_info=True,
            )
            raise

        return entry

    def list_recent(self, user_id: str, limit: int = DEFAULT_RECENT_LIMIT) -> List[ActivityEntry]:
        """Newest entries first; a fresh read on every call."""
        require_user_id(user_id)
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValidationError("limit must be a positive integer")
        return self._store.list_recent(user_id, limit)
