"""
Database session management.

The engine (connection pool) is created once by the application lifespan and
disposed of on shutdown. Requests borrow sessions from it through ``get_db``.
"""

import logging
from typing import Generator, Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

logger = logging.getLogger(__name__)

engine: Optional[Engine] = None


def build_engine(database_url: str, echo: bool = False, pool_size: int = 5, max_overflow: int = 10) -> Engine:
    """
    Create an engine for ``database_url``.

    SQLite gets ``check_same_thread=False`` because FastAPI runs sync
    endpoints in a threadpool. Pool sizing applies to server databases only.
    """
    if database_url.startswith("sqlite"):
        return create_engine(database_url, echo=echo, connect_args={"check_same_thread": False})

    return create_engine(
        database_url,
        echo=echo,            # Log SQL queries in debug mode
        pool_pre_ping=True,   # Verify connections before using
        pool_size=pool_size,
        max_overflow=max_overflow,
    )


def init_engine(database_url: str, **kwargs) -> Engine:
    """Create the process-wide engine. Called once from the lifespan hook."""
    global engine
    if engine is not None:
        raise RuntimeError("Database engine already initialized")
    engine = build_engine(database_url, **kwargs)
    logger.info("Database engine initialized (%s)", engine.url.render_as_string(hide_password=True))
    return engine


def dispose_engine() -> None:
    """Release every pooled connection. Called once on shutdown."""
    global engine
    if engine is None:
        return
    engine.dispose()
    engine = None
    logger.info("Database engine disposed")


def create_session(bind: Engine) -> Session:
    # Objects stay readable after commit, so a deleted row can still be returned
    return Session(bind, expire_on_commit=False)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for FastAPI endpoints to get database session.

    Yields:
        SQLModel Session instance

    Raises:
        RuntimeError: If the engine was never initialized
    """
    if engine is None:
        raise RuntimeError("Database not initialized")
    with create_session(engine) as session:
        yield session
