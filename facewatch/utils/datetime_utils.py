"""
Centralized DateTime Utilities
==============================

Provides consistent datetime handling for detection logs, gallery records
and snapshot filenames. Everything persisted by the backend uses UTC so
that day-scoped log files never depend on the host timezone.

Functions:
- utc_now(): Returns timezone-aware UTC datetime
- now_iso(): Returns ISO 8601 string with millisecond precision and 'Z'
- today_key(): Returns the UTC calendar date as YYYY-MM-DD
- parse_iso(): Safely parse ISO 8601 string to datetime
- to_iso(): Convert datetime object to ISO 8601 string
- filename_timestamp(): ISO timestamp made safe for filenames
"""
from datetime import date, datetime, timezone as dt_timezone
from typing import Optional


DATE_KEY_FORMAT = "%Y-%m-%d"


def utc_now() -> datetime:
    """
    Get current UTC time as a timezone-aware datetime.
    """
    return datetime.now(dt_timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime into a timezone-aware UTC datetime.

    - If dt is None -> None
    - If dt is naive -> assume it represents UTC
    - If dt is aware -> convert to UTC
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=dt_timezone.utc)
    return dt.astimezone(dt_timezone.utc)


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Convert datetime object to ISO 8601 UTC string (e.g. "2024-01-01T10:30:00.123Z").

    Args:
        dt: datetime object (timezone-aware or naive, naive is treated as UTC)

    Returns:
        ISO 8601 formatted string, or None if dt is None
    """
    if dt is None:
        return None
    dt = ensure_utc(dt)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_iso() -> str:
    """Current UTC time as an ISO 8601 string."""
    return to_iso(utc_now())


def parse_iso(dt_str: Optional[str]) -> Optional[datetime]:
    """
    Parse ISO 8601 string to a UTC datetime object.
    Naive strings are assumed to be UTC.

    Args:
        dt_str: ISO 8601 string (e.g., "2024-01-01T10:30:00Z" or "2024-01-01T10:30:00+05:30")

    Returns:
        timezone-aware datetime object, or None if parsing fails
    """
    if not dt_str:
        return None

    try:
        normalized = dt_str.replace("Z", "+00:00")
        return ensure_utc(datetime.fromisoformat(normalized))
    except (TypeError, ValueError):
        return None


def date_key(dt: datetime) -> str:
    """UTC calendar date of dt formatted as YYYY-MM-DD."""
    return ensure_utc(dt).strftime(DATE_KEY_FORMAT)


def today_key() -> str:
    """Today's UTC calendar date formatted as YYYY-MM-DD."""
    return date_key(utc_now())


def is_valid_date_key(value: str) -> bool:
    """True when value is a real calendar date in YYYY-MM-DD form."""
    if not value or len(value) != 10:
        return False
    try:
        date.fromisoformat(value)
        return True
    except ValueError:
        return False


def filename_timestamp(dt: Optional[datetime] = None) -> str:
    """
    ISO timestamp with ':' and '.' replaced by '-' so it can be used in filenames.

    Example: 2024-01-01T10:30:00.123Z -> 2024-01-01T10-30-00-123Z
    """
    iso = to_iso(dt or utc_now())
    return iso.replace(":", "-").replace(".", "-")


def parse_filename_timestamp(value: str) -> Optional[str]:
    """
    Reverse filename_timestamp() back to an ISO 8601 string.

    Returns None when value does not look like a sanitized timestamp.
    """
    if "T" not in value:
        return None
    day, _, clock = value.partition("T")
    parts = clock.rstrip("Z").split("-")
    if len(parts) < 3:
        return None
    iso = f"{day}T{parts[0]}:{parts[1]}:{parts[2]}"
    if len(parts) > 3:
        iso += f".{parts[3]}"
    iso += "Z"
    return iso if parse_iso(iso) is not None else None
