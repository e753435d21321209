from contextlib import contextmanager
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from clinic.core.config import get_database_url

logger = logging.getLogger(__name__)

# Create Base class for models
Base = declarative_base()

# Internal lazy globals
_engine = None
_SessionLocal = None
_database_url = None


def _unicode_lower(value):
    return value.lower() if value is not None else None


def enable_unicode_lower(engine):
    """Replace SQLite's ASCII-only ``lower()`` on every new connection.

    Case-insensitive searches compile to ``lower(col) LIKE lower(?)``, so
    accented names only match when ``lower`` folds non-ASCII letters too.
    """

    @event.listens_for(engine, "connect")
    def _register_lower(dbapi_connection, connection_record):
        dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)

    return engine


def _build_engine(database_url: str):
    url = make_url(database_url)
    if url.drivername.startswith("postgres"):
        return create_engine(
            database_url,
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,  # Detects and refreshes stale connections
            pool_recycle=3600,
            connect_args={"application_name": "clinic", "connect_timeout": 10},
        )
    if url.drivername.startswith("sqlite") and url.database in (None, "", ":memory:"):
        # Single shared in-memory database so DDL persists across sessions
        return enable_unicode_lower(
            create_engine(
                database_url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        )
    if url.drivername.startswith("sqlite"):
        return enable_unicode_lower(create_engine(database_url))
    return create_engine(database_url)


def get_engine():
    """Return a cached SQLAlchemy engine, creating it from DATABASE_URL on
    first call. This allows tests to set DATABASE_URL before the engine is
    constructed."""
    global _engine, _SessionLocal, _database_url
    database_url = get_database_url()
    if _engine is None or _database_url != database_url:
        if _engine is not None:
            _engine.dispose()
        _engine = _build_engine(database_url)
        _SessionLocal = None
        _database_url = database_url
        logger.debug(
            "Database engine created",
            extra={"context": {"dialect": _engine.dialect.name}},
        )
    return _engine


def get_sessionmaker():
    """Return a cached sessionmaker bound to the lazy engine."""
    global _SessionLocal
    engine = get_engine()
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
        )
    return _SessionLocal


def SessionLocal() -> Session:
    """Return a new Session bound to the configured engine."""
    return get_sessionmaker()()


def get_db():
    """Yield a database session and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create all tables in database using the lazy engine."""
    # Import models so Base.metadata is populated
    from clinic.db import base  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


@contextmanager
def atomic(session: Session):
    """Run several statements inside one transaction.

    Joins the session's current transaction when one is already open,
    otherwise begins a new one and commits it on exit (rolling back on error).
    """
    if session.in_transaction():
        yield session
    else:
        with session.begin():
            yield session
