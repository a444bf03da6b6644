"""
careerhub/features/records/store_pg.py

SQL read adapter over the record tables the CRUD layer writes.
Same read interface as InMemoryRecordStore.
"""

from datetime import datetime
from typing import List, Union

from sqlalchemy import select, func

from careerhub.core.database import (
    Database,
    applications,
    interviews,
    documents,
    flashcard_decks,
    calendar_events,
    resumes,
)
from careerhub.core.errors import ValidationError
from careerhub.features.records.store import (
    RecordCollection,
    check_singleton_key,
    parse_collection,
    _as_utc,
)
from careerhub.models.stats import UpcomingEvent

_TABLES = {
    RecordCollection.APPLICATIONS: applications,
    RecordCollection.INTERVIEWS: interviews,
    RecordCollection.DOCUMENTS: documents,
    RecordCollection.FLASHCARD_DECKS: flashcard_decks,
    RecordCollection.EVENTS: calendar_events,
}


class SqlRecordStore:
    def __init__(self, db: Database):
        self.db = db

    def count(self, user_id: str, collection: Union[RecordCollection, str]) -> int:
        table = _TABLES[parse_collection(collection)]
        with self.db.session() as session:
            return session.execute(
                select(func.count()).select_from(table).where(table.c.user_id == user_id)
            ).scalar_one()

    def exists(self, user_id: str, key: str) -> bool:
        check_singleton_key(key)
        with self.db.session() as session:
            content = session.execute(
                select(resumes.c.content).where(resumes.c.user_id == user_id)
            ).scalar_one_or_none()
            return bool(content)

    def list_upcoming(
        self,
        user_id: str,
        collection: Union[RecordCollection, str],
        after: datetime,
        limit: int,
    ) -> List[UpcomingEvent]:
        if parse_collection(collection) != RecordCollection.EVENTS:
            raise ValidationError("Only the events collection has dates to list")
        with self.db.session() as session:
            query = (
                select(calendar_events.c.title, calendar_events.c.event_date)
                .where(
                    calendar_events.c.user_id == user_id,
                    calendar_events.c.event_date > _as_utc(after),
                )
                .order_by(calendar_events.c.event_date.asc(), calendar_events.c.id.asc())
                .limit(limit)
            )
            return [
                UpcomingEvent(title=row.title, date=_as_utc(row.event_date))
                for row in session.execute(query)
            ]
