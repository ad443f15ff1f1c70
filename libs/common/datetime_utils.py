"""Datetime utilities for timezone-aware timestamps.

Usage:
    from libs.common.datetime_utils import utc_now, local_now

    generated_at = utc_now()
    today = local_now().date()
"""

from datetime import datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from libs.common.config import get_settings


def utc_now() -> datetime:
    """Return timezone-aware UTC datetime.

    This replaces the deprecated datetime.utcnow() which returns naive datetimes.
    """
    return datetime.now(timezone.utc)


def report_timezone() -> tzinfo:
    """Return the timezone the community's calendar days are counted in."""
    return ZoneInfo(get_settings().TIMEZONE)


def local_now(tz: Optional[tzinfo] = None) -> datetime:
    """Return the current time in the report timezone (or ``tz``)."""
    return datetime.now(tz or report_timezone())


def to_local(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Convert an aware datetime to the report timezone.

    Naive datetimes are assumed to already be local wall-clock time.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(tz or report_timezone())
