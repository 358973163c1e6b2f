"""SQLAlchemy engine for the relational address store.

Only used when DATABASE_URL is configured; otherwise addresses live in the
in-memory repository. The pricing service only reads addresses, so sessions
are short read scopes that are closed without a commit.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from delivery_pricing.logging import get_logger

from .exceptions import DatabaseConnectionError
from .schema import create_schema

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None

logger = get_logger(__name__, component="database")


def _parse_url(database_url: str) -> URL:
    if not database_url or not database_url.strip():
        raise DatabaseConnectionError("Database URL must be a non-empty string")
    try:
        return make_url(database_url)
    except ArgumentError as e:
        raise DatabaseConnectionError(f"Invalid database URL: {e}") from e


def init_database(database_url: str) -> None:
    """Open the address database and make sure the addresses table exists.

    The database itself must already be reachable: a SQLite file may be
    created, but never its directory.

    Args:
        database_url: SQLAlchemy URL, e.g. "sqlite:///./data/addresses.db"

    Raises:
        DatabaseConnectionError: If the URL is invalid or the database cannot be opened
    """
    global _engine, _session_factory

    url = _parse_url(database_url)
    display_url = url.render_as_string(hide_password=True)

    # FastAPI runs sync handlers on a thread pool
    connect_args = {"check_same_thread": False} if url.get_backend_name() == "sqlite" else {}

    try:
        engine = create_engine(url, pool_pre_ping=True, connect_args=connect_args)
        create_schema(engine)
    except SQLAlchemyError as e:
        logger.error(
            f"Cannot open address database {display_url}: {e}",
            extra={"event": "database.open_failed", "database_url": display_url},
        )
        raise DatabaseConnectionError(f"Cannot open address database {display_url}: {e}") from e

    close_database()
    _engine = engine
    _session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    logger.info(
        "Address database ready",
        extra={"event": "database.ready", "database_url": display_url},
    )


@contextmanager
def get_session() -> Iterator[Session]:
    """Yield a session for one lookup; it is closed (and any transaction rolled back) on exit.

    Raises:
        DatabaseConnectionError: If init_database() has not been called
    """
    if _session_factory is None:
        raise DatabaseConnectionError("Address database is not open; call init_database() first")

    with _session_factory() as session:
        yield session


def close_database() -> None:
    """Dispose of the engine's connection pool; safe to call when nothing is open."""
    global _engine, _session_factory

    if _engine is None:
        return
    _engine.dispose()
    _engine = None
    _session_factory = None
    logger.info("Address database closed", extra={"event": "database.closed"})
