"""
Report window resolution.

Turns a period kind plus optional month/quarter/year selectors into an
inclusive date range. Start is normalized to 00:00:00.000 and end to
23:59:59.999 of their days, in the timezone of ``now``.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Iterator, Optional, Union

from libs.common.datetime_utils import local_now, to_local
from services.reports_service.errors import ConfigurationError, ValidationError
from services.reports_service.schemas.enums import PeriodKind

END_OF_DAY = time(23, 59, 59, 999000)

_PERIOD_ALIASES = {
    "ytd": PeriodKind.YEAR_TO_DATE,
    "year_to_date": PeriodKind.YEAR_TO_DATE,
    "yeartodate": PeriodKind.YEAR_TO_DATE,
    "year": PeriodKind.ANNUAL,
    "week": PeriodKind.WEEKLY,
    "month": PeriodKind.MONTHLY,
    "quarter": PeriodKind.QUARTERLY,
}


@dataclass(frozen=True)
class DateRange:
    """Inclusive window ``[start, end]``."""

    start: datetime
    end: datetime

    def days(self) -> Iterator[date]:
        current = self.start.date()
        last = self.end.date()
        while current <= last:
            yield current
            current += timedelta(days=1)

    def contains(self, moment: datetime) -> bool:
        return self.start <= self._align(moment) <= self.end

    def _align(self, moment: datetime) -> datetime:
        tz = self.start.tzinfo
        if tz is None:
            if moment.tzinfo is None:
                return moment
            return to_local(moment).replace(tzinfo=None)
        if moment.tzinfo is None:
            return moment.replace(tzinfo=tz)
        return moment.astimezone(tz)


def start_of_day(day: date, tz: Optional[tzinfo] = None) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz)


def end_of_day(day: date, tz: Optional[tzinfo] = None) -> datetime:
    return datetime.combine(day, END_OF_DAY, tzinfo=tz)


def day_range(first: date, last: date, tz: Optional[tzinfo] = None) -> DateRange:
    return DateRange(start=start_of_day(first, tz), end=end_of_day(last, tz))


def parse_period_kind(value: Union[str, PeriodKind, None]) -> PeriodKind:
    """Map a requested period name to a PeriodKind.

    Raises:
        ConfigurationError: the name is not a known period kind.
    """
    if isinstance(value, PeriodKind):
        return value
    key = (value or "").strip().lower()
    try:
        return PeriodKind(key)
    except ValueError:
        pass
    if key in _PERIOD_ALIASES:
        return _PERIOD_ALIASES[key]
    raise ConfigurationError(f"Unknown report period: {value!r}", field="period")


def validate_month(month: Optional[int]) -> Optional[int]:
    if month is None:
        return None
    if not 1 <= month <= 12:
        raise ValidationError(
            f"Month must be between 1 and 12, got {month}", field="month"
        )
    return month


def validate_year(year: Optional[int]) -> Optional[int]:
    if year is None:
        return None
    if not 1 <= year <= 9999:
        raise ValidationError(f"Year out of range: {year}", field="year")
    return year


def parse_quarter(quarter: Union[str, int, None]) -> Optional[int]:
    """Parse ``Q1``..``Q4`` (or bare ``1``..``4``) into a quarter number."""
    if quarter is None or quarter == "":
        return None
    text = str(quarter).strip().upper()
    if text.startswith("Q"):
        text = text[1:]
    if text in ("1", "2", "3", "4"):
        return int(text)
    raise ValidationError(
        f"Quarter must be one of Q1, Q2, Q3, Q4, got {quarter!r}", field="quarter"
    )


def resolve_period(
    period: Union[str, PeriodKind],
    *,
    month: Optional[int] = None,
    quarter: Union[str, int, None] = None,
    year: Optional[int] = None,
    now: Optional[datetime] = None,
) -> DateRange:
    """Resolve a period kind and its selectors into a report window.

    Selectors that are not supplied default to the ones containing ``now``.
    ``now`` defaults to the current time in the report timezone; the returned
    range carries the same tzinfo as ``now``.

    Raises:
        ConfigurationError: unknown period kind.
        ValidationError: month, quarter or year out of range.
    """
    kind = parse_period_kind(period)
    month = validate_month(month)
    quarter_number = parse_quarter(quarter)
    year = validate_year(year)

    now = now or local_now()
    tz = now.tzinfo
    today = now.date()
    target_year = year or today.year

    if kind is PeriodKind.WEEKLY:
        monday = today - timedelta(days=today.weekday())
        return day_range(monday, monday + timedelta(days=6), tz)

    if kind is PeriodKind.MONTHLY:
        target_month = month or today.month
        last_day = calendar.monthrange(target_year, target_month)[1]
        return day_range(
            date(target_year, target_month, 1),
            date(target_year, target_month, last_day),
            tz,
        )

    if kind is PeriodKind.QUARTERLY:
        q = quarter_number or (today.month - 1) // 3 + 1
        first_month = (q - 1) * 3 + 1
        last_month = first_month + 2
        last_day = calendar.monthrange(target_year, last_month)[1]
        return day_range(
            date(target_year, first_month, 1),
            date(target_year, last_month, last_day),
            tz,
        )

    if kind is PeriodKind.YEAR_TO_DATE:
        if target_year == today.year:
            return day_range(date(target_year, 1, 1), today, tz)
        return day_range(date(target_year, 1, 1), date(target_year, 12, 31), tz)

    # PeriodKind.ANNUAL
    return day_range(date(target_year, 1, 1), date(target_year, 12, 31), tz)


def resolve_explicit_range(
    start: Union[date, datetime],
    end: Union[date, datetime],
    *,
    tz: Optional[tzinfo] = None,
    max_days: Optional[int] = None,
) -> DateRange:
    """Normalize a caller-supplied start/end pair to whole days.

    Raises:
        ValidationError: start is after end, or the window exceeds ``max_days``.
    """
    first = start.date() if isinstance(start, datetime) else start
    last = end.date() if isinstance(end, datetime) else end
    if first > last:
        raise ValidationError(
            f"Start date {first.isoformat()} is after end date {last.isoformat()}",
            field="start_date",
        )
    if max_days is not None and (last - first).days + 1 > max_days:
        raise ValidationError(
            f"Report window is limited to {max_days} days", field="end_date"
        )
    return day_range(first, last, tz)
