"""Database engine, session factory and declarative base."""
import logging
from datetime import datetime, timezone
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from school_registry.settings import settings

logger = logging.getLogger(__name__)

Base = declarative_base()

SessionLocal = sessionmaker(autocommit=False, autoflush=False)

_engine: Optional[Engine] = None


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def build_engine(database_url: str) -> Engine:
    """
    Create an engine for ``database_url``.

    SQLite gets foreign keys switched on and ``BEGIN IMMEDIATE`` transactions,
    so concurrent writers queue on the database lock instead of failing when
    they upgrade from a read lock.
    """
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False, "timeout": 30},
        )

        @event.listens_for(engine, "connect")
        def _sqlite_connect(dbapi_connection, connection_record):
            # let SQLAlchemy emit BEGIN itself
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        @event.listens_for(engine, "begin")
        def _sqlite_begin(conn):
            conn.exec_driver_sql("BEGIN IMMEDIATE")

    else:
        engine = create_engine(database_url, pool_pre_ping=True)

    host = database_url.split("@")[1] if "@" in database_url else database_url
    logger.info("Database engine initialized: %s", host)
    return engine


def get_engine() -> Engine:
    """Return the process-wide engine, creating it on first use."""
    global _engine
    if _engine is None:
        _engine = build_engine(settings.database_url)
    return _engine


def create_tables(engine: Optional[Engine] = None) -> None:
    """Create all tables known to the models."""
    # models register themselves on Base.metadata when imported
    from school_registry.accounts import models as _accounts  # noqa: F401
    from school_registry.cards import models as _cards  # noqa: F401
    from school_registry.numbering import models as _numbering  # noqa: F401
    from school_registry.students import models as _students  # noqa: F401

    Base.metadata.create_all(bind=engine or get_engine())


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding a session bound to the global engine."""
    db = SessionLocal(bind=get_engine())
    try:
        yield db
    finally:
        db.close()
