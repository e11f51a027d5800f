from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current instant as naive UTC, the form stored in DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime | None) -> datetime | None:
    # Naive values are taken to be UTC already
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
