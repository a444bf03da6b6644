"""
careerhub/features/streaks/store_pg.py

SQL-backed streak state store. Same interface as InMemoryStreakStore.
"""

from typing import Optional

from sqlalchemy import select, insert, update

from careerhub.core.database import Database, streak_states
from careerhub.models.streak import StreakState


class SqlStreakStore:
    """
    Streak rows keyed by user_id.

    set() is a read-then-write upsert inside one session. Two concurrent
    first-of-day writes can both increment from the same prior value; that
    race is accepted for a single-user dataset.
    """

    def __init__(self, db: Database):
        self.db = db

    def get(self, user_id: str) -> Optional[StreakState]:
        with self.db.session() as session:
            row = session.execute(
                select(streak_states).where(streak_states.c.user_id == user_id)
            ).first()
            if row is None:
                return None
            return StreakState(
                user_id=row.user_id,
                last_active_date=row.last_active_date,
                streak_count=row.streak_count,
            )

    def set(self, state: StreakState) -> None:
        values = {
            "last_active_date": state.last_active_date,
            "streak_count": state.streak_count,
        }
        with self.db.session() as session:
            exists = session.execute(
                select(streak_states.c.user_id).where(streak_states.c.user_id == state.user_id)
            ).first()
            if exists:
                session.execute(
                    update(streak_states)
                    .where(streak_states.c.user_id == state.user_id)
                    .values(**values)
                )
            else:
                session.execute(insert(streak_states).values(user_id=state.user_id, **values))

    def clear(self) -> None:
        """FOR TESTING ONLY."""
        with self.db.session() as session:
            session.execute(streak_states.delete())
