from datetime import UTC, datetime


def utcnow() -> datetime:
    """Naive UTC timestamp; columns are stored without timezone."""
    return datetime.now(UTC).replace(tzinfo=None)
