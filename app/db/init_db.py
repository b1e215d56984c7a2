"""
Database initialization.

Creates all tables without going through Alembic (local development and tests).
"""

import logging
from typing import Optional

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

from app.core.config import settings
from app.db.session import build_engine

logger = logging.getLogger(__name__)


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Initialize database schema.

    Args:
        bind: Engine to create tables on. Defaults to one built from settings.
    """
    # Import all models so SQLModel.metadata has them
    import app.db.base  # noqa: F401

    if bind is None:
        bind = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(bind)
    logger.info("Tables created: %s", ", ".join(sorted(SQLModel.metadata.tables)))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
