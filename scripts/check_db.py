"""Check that DATABASE_URL is reachable and the users table exists."""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Load .env file
from dotenv import load_dotenv

load_dotenv()

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.db.session import build_engine

print("=" * 60)
print("Testing database connection")
print("=" * 60)

engine = build_engine(settings.DATABASE_URL, echo=True)
print(f"Database URL: {engine.url.render_as_string(hide_password=True)}")
print()

try:
    with engine.connect() as connection:
        print("✓ Connection successful!")
        if inspect(connection).has_table("users"):
            print("✓ 'users' table already exists")
        else:
            print("✗ 'users' table does not exist - run migration")
except SQLAlchemyError as e:
    print(f"✗ Connection failed: {e}")
    sys.exit(1)
finally:
    engine.dispose()

print("=" * 60)
