"""
Centralized timezone utilities for consistent timestamp handling.

All timestamps are stored as naive UTC datetimes. API responses carry them
as ISO strings with a 'Z' suffix, which frontend JavaScript parses as UTC
and converts to the user's local timezone for display.
"""

from datetime import datetime
from typing import Annotated

import pytz
from pydantic import PlainSerializer

UTC = pytz.UTC


def format_datetime_for_api(dt: datetime) -> str | None:
    """
    Convert a datetime to UTC ISO string for API responses.

    Naive datetimes are assumed to already be UTC (see utcnow()).
    Returns format: "2026-01-06T20:43:50.245704Z"
    """
    if dt is None:
        return None

    if dt.tzinfo is not None:
        return dt.astimezone(UTC).isoformat().replace('+00:00', 'Z')

    return dt.isoformat() + 'Z'


def now_utc() -> datetime:
    """Get current time in UTC (timezone-aware)."""
    return datetime.now(UTC)


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the database."""
    return now_utc().replace(tzinfo=None)


def now_utc_iso() -> str:
    """Get current time as UTC ISO string with Z suffix."""
    return now_utc().isoformat().replace('+00:00', 'Z')


# Response-model field type: serializes to the 'Z'-suffixed UTC form
ApiDateTime = Annotated[datetime, PlainSerializer(format_datetime_for_api, return_type=str)]
