import logging
import sqlite3

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from lecture_notes_database.config import get_settings

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def get_database_url():
    """
    Retrieves the database URL from the environment variable DATABASE_URL.
    """
    db_url = get_settings().database_url
    if not db_url:
        raise ValueError("DATABASE_URL environment variable not set.")
    return db_url


# PUBLIC_INTERFACE
def enable_sqlite_foreign_keys(engine: Engine) -> Engine:
    """Turns on foreign key enforcement for every new SQLite connection."""

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        if isinstance(dbapi_connection, sqlite3.Connection):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


# PUBLIC_INTERFACE
def build_engine(database_url=None, pool_size=None):
    """
    Creates the engine behind the shared, bounded connection pool.

    SQLite URLs keep SQLAlchemy's default pool for that dialect; every other
    backend gets a fixed-size QueuePool without overflow.
    """
    settings = get_settings()
    url = database_url or get_database_url()
    kwargs = {"future": True, "echo": False}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs["pool_size"] = pool_size or settings.db_pool_size
        kwargs["max_overflow"] = 0
        kwargs["pool_pre_ping"] = True
    engine = create_engine(url, **kwargs)
    if url.startswith("sqlite"):
        enable_sqlite_foreign_keys(engine)
    logger.info("Database engine created for %s", engine.url.render_as_string(hide_password=True))
    return engine


# PUBLIC_INTERFACE
def make_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


_engine = None
_session_factory = None


# PUBLIC_INTERFACE
def get_engine():
    """Returns the process-wide engine, creating it on first use."""
    global _engine
    if _engine is None:
        _engine = build_engine()
    return _engine


# PUBLIC_INTERFACE
def SessionLocal():
    """Opens a new session bound to the process-wide engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = make_session_factory(get_engine())
    return _session_factory()
