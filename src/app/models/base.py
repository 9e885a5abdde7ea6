from datetime import UTC, datetime, timedelta


def utc_now() -> datetime:
    """Return current UTC time as naive datetime (for PostgreSQL TIMESTAMP).

    Database columns use TIMESTAMP WITHOUT TIME ZONE, so we strip tzinfo.
    All times are stored in UTC by convention.
    """
    return datetime.now(UTC).replace(tzinfo=None)


def utc_days_from_now(days: int) -> datetime:
    """Naive UTC timestamp ``days`` days in the future."""
    return utc_now() + timedelta(days=days)
