"""
careerhub/features/records/store.py

Read-side view of the user's record collections (applications, interviews,
documents, flashcard decks, calendar events and the resume singleton).

The CRUD layer owns these records; the scoring engine only counts them and
lists upcoming events. InMemoryRecordStore also exposes add()/set_resume()
for local development and tests.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from careerhub.core.errors import ValidationError
from careerhub.models.stats import UpcomingEvent


class RecordCollection(str, Enum):
    APPLICATIONS = "applications"
    INTERVIEWS = "interviews"
    DOCUMENTS = "documents"
    FLASHCARD_DECKS = "flashcard_decks"
    EVENTS = "events"


RESUME = "resume"
SINGLETON_KEYS = frozenset({RESUME})


def parse_collection(collection: Union[RecordCollection, str]) -> RecordCollection:
    try:
        return RecordCollection(collection)
    except ValueError:
        raise ValidationError(f"Unknown record collection '{collection}'")


def check_singleton_key(key: str) -> str:
    if key not in SINGLETON_KEYS:
        raise ValidationError(f"Unknown singleton record '{key}'")
    return key


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


class InMemoryRecordStore:
    def __init__(self):
        self._records: Dict[str, Dict[RecordCollection, List[Dict[str, Any]]]] = {}
        self._resumes: Dict[str, str] = {}

    # Seeding helpers --------------------------------------------------
    def add(self, user_id: str, collection: Union[RecordCollection, str], **fields: Any) -> Dict[str, Any]:
        collection = parse_collection(collection)
        if collection == RecordCollection.EVENTS:
            if "title" not in fields or "date" not in fields:
                raise ValidationError("events require title and date")
            fields["date"] = _as_utc(fields["date"])
        user_records = self._records.setdefault(user_id, {})
        bucket = user_records.setdefault(collection, [])
        record = {"id": str(len(bucket) + 1), **fields}
        bucket.append(record)
        return record

    def set_resume(self, user_id: str, content: Optional[str]) -> None:
        if content:
            self._resumes[user_id] = content
        else:
            self._resumes.pop(user_id, None)

    # Read interface ---------------------------------------------------
    def count(self, user_id: str, collection: Union[RecordCollection, str]) -> int:
        collection = parse_collection(collection)
        return len(self._records.get(user_id, {}).get(collection, []))

    def exists(self, user_id: str, key: str) -> bool:
        check_singleton_key(key)
        return bool(self._resumes.get(user_id))

    def list_upcoming(
        self,
        user_id: str,
        collection: Union[RecordCollection, str],
        after: datetime,
        limit: int,
    ) -> List[UpcomingEvent]:
        """Events strictly after `after`, soonest first, at most limit."""
        collection = parse_collection(collection)
        if collection != RecordCollection.EVENTS:
            raise ValidationError("Only the events collection has dates to list")
        cutoff = _as_utc(after)
        upcoming = sorted(
            (r for r in self._records.get(user_id, {}).get(collection, []) if r["date"] > cutoff),
            key=lambda r: r["date"],
        )
        return [UpcomingEvent(title=r["title"], date=r["date"]) for r in upcoming[:limit]]

    def clear(self) -> None:
        """FOR TESTING ONLY."""
        self._records.clear()
        self._resumes.clear()
