from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ActivityCategory(str, Enum):
    """Closed set of qualifying activities."""

    APPLICATION = "application"
    INTERVIEW = "interview"
    EMAIL = "email"
    FLASHCARD = "flashcard"
    CODE_LAB = "code_lab"
    ROADMAP = "roadmap"


@dataclass(frozen=True)
class ActivityEntry:
    """
    One immutable line in a user's activity ledger.

    The id and timestamp are assigned when the entry is appended; entries are
    never updated or deleted afterwards.
    """

    id: str
    user_id: str
    category: ActivityCategory
    description: str
    timestamp: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "type": self.category.value,
            "description": self.description,
            "timestamp": self.timestamp.isoformat(),
        }
