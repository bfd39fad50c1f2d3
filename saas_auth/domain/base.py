from datetime import UTC, datetime


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how DateTime columns round-trip."""
    return datetime.now(UTC).replace(tzinfo=None)


def to_timestamp(value: datetime) -> int:
    """Seconds since the epoch for a naive UTC datetime."""
    return int(value.replace(tzinfo=UTC).timestamp())


def from_timestamp(value: int) -> datetime:
    return datetime.fromtimestamp(value, UTC).replace(tzinfo=None)


def normalize_email(email: str) -> str:
    return email.strip().lower()
