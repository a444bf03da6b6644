"""
Database configuration and connection management.

This module provides:
- A lazily-connected SQLAlchemy handle (Database) that stores receive explicitly
- Connection pooling with sane defaults
- Test database support (TEST_DATABASE_URL, SQLite static pool)
- Table definitions for the activity ledger, streaks and record collections
"""
from typing import Optional
from contextlib import contextmanager
from sqlalchemy import create_engine, MetaData, Table, Column, Integer, String, DateTime, Date, JSON, Text, Index, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.sql import func
import logging
import os

from careerhub.core.config import settings

logger = logging.getLogger("careerhub")

# SQLAlchemy metadata for table definitions
metadata = MetaData()

# Connection pooling configuration
POOL_SIZE = 10
MAX_OVERFLOW = 20
POOL_TIMEOUT = 30
POOL_RECYCLE = 3600  # Recycle connections after 1 hour


def get_database_url() -> Optional[str]:
    """
    Get the database URL from settings or environment.

    For testing, use TEST_DATABASE_URL if available.
    """
    test_url = os.getenv("TEST_DATABASE_URL")
    if test_url:
        return test_url

    return settings.DATABASE_URL


class Database:
    """
    Lazily-initialized database handle.

    Nothing connects until ensure_connected() (or a session) is first needed,
    and ensure_connected() is idempotent. Stores receive the handle explicitly.

    Usage:
        db = Database("postgresql://...")
        with db.session() as session:
            session.execute(...)
    """

    def __init__(self, url: Optional[str] = None):
        self.url = url or get_database_url()
        self._engine: Optional[Engine] = None
        self._session_factory = None

    @property
    def configured(self) -> bool:
        return bool(self.url)

    def ensure_connected(self) -> Engine:
        """Create the engine and session factory on first use."""
        if self._engine is not None:
            return self._engine

        if not self.url:
            raise ValueError(
                "DATABASE_URL is not configured. "
                "Set DATABASE_URL in environment or .env file."
            )

        if self.url.startswith("sqlite"):
            # Single shared connection so in-memory databases survive across sessions
            self._engine = create_engine(
                self.url,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
                echo=False,
            )
        else:
            self._engine = create_engine(
                self.url,
                poolclass=QueuePool,
                pool_size=POOL_SIZE,
                max_overflow=MAX_OVERFLOW,
                pool_timeout=POOL_TIMEOUT,
                pool_recycle=POOL_RECYCLE,
                echo=False,  # Set to True for SQL query logging
            )

        self._session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self._engine,
        )
        logger.info("database.connected", extra={"event_type": "database.connected"})
        return self._engine

    @property
    def engine(self) -> Engine:
        return self.ensure_connected()

    @contextmanager
    def session(self):
        """
        Context manager for database sessions.

        Commits on success, rolls back and re-raises on error.
        """
        self.ensure_connected()
        session: Session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_all_tables(self) -> None:
        """
        Create all tables defined in metadata.

        This is idempotent - tables that already exist will not be recreated.
        """
        metadata.create_all(bind=self.engine)

    def drop_all_tables(self) -> None:
        """
        Drop all tables defined in metadata.

        WARNING: This is destructive! Only use in tests or development.
        """
        metadata.drop_all(bind=self.engine)

    def check_connection(self) -> bool:
        """
        Check if database connection is available.

        Returns:
            True if connection successful, False otherwise
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"Database connection check failed: {e}")
            return False

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None


# Activity ledger (append-only)
activity_entries = Table(
    'activity_entries',
    metadata,
    Column('id', Integer, primary_key=True, autoincrement=True),
    Column('user_id', String(100), nullable=False),
    Column('category', String(50), nullable=False),
    Column('description', Text, nullable=False),
    Column('created_at', DateTime(timezone=True), nullable=False),
    # Composite index for list_recent pattern: (user_id, created_at)
    Index('idx_activity_entries_user_created', 'user_id', 'created_at'),
)

# Streak state, one row per user
streak_states = Table(
    'streak_states',
    metadata,
    Column('user_id', String(100), primary_key=True),
    Column('last_active_date', Date, nullable=False),
    Column('streak_count', Integer, nullable=False, server_default='0'),
    Column('updated_at', DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False),
)

# Dashboard display cache (never read to compute a score)
stats_cache = Table(
    'stats_cache',
    metadata,
    Column('user_id', String(100), primary_key=True),
    Column('placement_probability', Integer, nullable=False, server_default='0'),
    Column('streak', Integer, nullable=False, server_default='0'),
    Column('upcoming_deadlines', JSON, nullable=False),
    Column('updated_at', DateTime(timezone=True), nullable=False),
)

# Record collections below are written by the CRUD layer; the engine only reads them.
applications = Table(
    'applications',
    metadata,
    Column('id', Integer, primary_key=True, autoincrement=True),
    Column('user_id', String(100), nullable=False, index=True),
    Column('company', Text, nullable=False),
    Column('position', Text, nullable=False),
    Column('status', String(50), nullable=False),  # 'applied', 'interview', 'offer', 'rejected'
    Column('date_applied', DateTime(timezone=True), server_default=func.now(), nullable=False),
    Column('salary', Text, nullable=True),
    Column('notes', Text, nullable=True),
)

interviews = Table(
    'interviews',
    metadata,
    Column('id', Integer, primary_key=True, autoincrement=True),
    Column('user_id', String(100), nullable=False, index=True),
    Column('title', Text, nullable=False),
    Column('type', String(50), nullable=False),  # 'behavioral', 'technical'
    Column('messages', JSON, nullable=True),
    Column('created_at', DateTime(timezone=True), server_default=func.now(), nullable=False),
)

documents = Table(
    'documents',
    metadata,
    Column('id', Integer, primary_key=True, autoincrement=True),
    Column('user_id', String(100), nullable=False, index=True),
    Column('title', Text, nullable=False),
    Column('type', String(50), nullable=False),  # 'resume', 'cover_letter'
    Column('content', Text, nullable=False),
    Column('created_at', DateTime(timezone=True), server_default=func.now(), nullable=False),
)

flashcard_decks = Table(
    'flashcard_decks',
    metadata,
    Column('id', Integer, primary_key=True, autoincrement=True),
    Column('user_id', String(100), nullable=False, index=True),
    Column('title', Text, nullable=False),
)

calendar_events = Table(
    'calendar_events',
    metadata,
    Column('id', Integer, primary_key=True, autoincrement=True),
    Column('user_id', String(100), nullable=False),
    Column('title', Text, nullable=False),
    Column('event_date', DateTime(timezone=True), nullable=False),
    Column('notes', Text, nullable=True),
    Column('created_at', DateTime(timezone=True), server_default=func.now(), nullable=False),
    # Composite index for upcoming-deadline lookups
    Index('idx_calendar_events_user_date', 'user_id', 'event_date'),
)

# Profile resume singleton, one row per user
resumes = Table(
    'resumes',
    metadata,
    Column('user_id', String(100), primary_key=True),
    Column('content', Text, nullable=False),
    Column('updated_at', DateTime(timezone=True), server_default=func.now(), nullable=False),
)
