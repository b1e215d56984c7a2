"""Shared model helpers."""

from datetime import datetime, timezone

from sqlalchemy import DateTime

# Largest value a 32-bit INTEGER primary/foreign key column can hold
MAX_ID = 2**31 - 1


def utcnow() -> datetime:
    """Timezone-aware UTC timestamp for the created_at/updated_at columns."""
    return datetime.now(timezone.utc)


def timestamp_type() -> DateTime:
    return DateTime(timezone=True)
