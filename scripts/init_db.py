"""
Database initialization script.

Creates the tables directly from the models (use Alembic for real deployments).

Usage:
    python scripts/init_db.py
"""

import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from app.core.config import settings
from app.core.logging import setup_logging
from app.db.init_db import init_db

logger = logging.getLogger("init_db")

if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    try:
        init_db()
    except Exception:
        logger.exception("Database initialization failed")
        sys.exit(1)

    logger.info("Database initialized")
    sys.exit(0)
