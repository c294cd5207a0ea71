from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return current UTC time as a naive datetime.

    Timestamp columns are TIMESTAMP WITHOUT TIME ZONE; values are UTC by convention.
    """
    return datetime.now(UTC).replace(tzinfo=None)
