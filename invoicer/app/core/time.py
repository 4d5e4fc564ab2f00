"""Clock helpers shared by model defaults and the invoice service."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current time as an aware UTC datetime; used for created_at/updated_at."""
    return datetime.now(UTC)
