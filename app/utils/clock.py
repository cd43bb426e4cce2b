"""Clock utilities for testability."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return current UTC time. Override in tests."""
    return datetime.now(UTC)


def db_timestamp(value: datetime | None = None) -> datetime:
    """Naive UTC timestamp for ``timestamp without time zone`` columns.

    asyncpg refuses aware datetimes for those columns, so the offset is
    applied and then dropped.
    """
    value = value or utc_now()
    if value.tzinfo is not None:
        value = value.astimezone(UTC).replace(tzinfo=None)
    return value
