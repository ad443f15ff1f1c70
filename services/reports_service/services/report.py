"""
Recurring attendance report generation.

Validates a report request, fetches the cohort and the window's check-ins
through an ``AttendanceRepository``, and runs the pure pipeline:
dedup -> expected instances -> per-member summaries -> ordering -> roll-up.
"""

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Iterable, Optional, Sequence, Union

from libs.common.config import get_settings
from libs.common.datetime_utils import local_now, utc_now
from libs.common.logging import get_logger
from services.reports_service.errors import ConfigurationError, ValidationError
from services.reports_service.repository import AttendanceRepository
from services.reports_service.schemas import (
    AttendanceEntry,
    CommunityRollupRow,
    InstanceTotals,
    MemberAttendanceSummary,
    MemberRecord,
    MonthlyTrendPoint,
    PeriodKind,
    RecurringAttendanceReport,
    RecurringReportRequest,
    ReportFilters,
    ReportScope,
    ReportStatistics,
)
from services.reports_service.services.aggregation import (
    aggregate_members,
    percentage,
    rounded_mean,
)
from services.reports_service.services.constants import MONTH_LABELS
from services.reports_service.services.dedup import deduplicate_attendance
from services.reports_service.services.instances import (
    InstanceCounts,
    count_expected_instances,
)
from services.reports_service.services.periods import (
    DateRange,
    parse_period_kind,
    parse_quarter,
    resolve_explicit_range,
    resolve_period,
    validate_month,
    validate_year,
)
from services.reports_service.services.rollup import reduce_unit, rollup_community
from services.reports_service.services.sorting import sort_cohort

logger = get_logger(__name__)


@dataclass(frozen=True)
class ResolvedRequest:
    scope: ReportScope
    period: PeriodKind
    window: DateRange
    request: RecurringReportRequest

    @property
    def sort_ministry(self) -> Optional[str]:
        if self.scope is ReportScope.MINISTRY:
            return self.request.ministry
        return None


def parse_scope(value: Union[str, ReportScope, None]) -> ReportScope:
    if isinstance(value, ReportScope):
        return value
    try:
        return ReportScope((value or "").strip().lower())
    except ValueError:
        raise ConfigurationError(f"Unknown report scope: {value!r}", field="scope")


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def resolve_request(
    request: RecurringReportRequest, *, now: Optional[datetime] = None
) -> ResolvedRequest:
    """
    Check a request and resolve its report window. Nothing is fetched.

    Raises:
        ConfigurationError: unknown scope or period.
        ValidationError: missing member id / ministry, bad selectors or range.
    """
    scope = parse_scope(request.scope)
    period = parse_period_kind(request.period)
    now = now or local_now()

    if scope is ReportScope.INDIVIDUAL and _blank(request.member_id):
        raise ValidationError(
            "member_id is required for an individual report", field="member_id"
        )
    if scope is ReportScope.MINISTRY and _blank(request.ministry):
        raise ValidationError(
            "ministry is required for a ministry report", field="ministry"
        )

    has_start = request.start_date is not None
    has_end = request.end_date is not None
    if has_start and has_end:
        # Selectors are still checked so a bad value is never silently ignored.
        validate_month(request.month)
        parse_quarter(request.quarter)
        validate_year(request.year)
        window = resolve_explicit_range(
            request.start_date,
            request.end_date,
            tz=now.tzinfo,
            max_days=get_settings().REPORT_MAX_WINDOW_DAYS,
        )
    elif has_start or has_end:
        raise ValidationError(
            "start_date and end_date must be supplied together",
            field="end_date" if has_start else "start_date",
        )
    else:
        window = resolve_period(
            period,
            month=request.month,
            quarter=request.quarter,
            year=request.year,
            now=now,
        )

    return ResolvedRequest(scope=scope, period=period, window=window, request=request)


def summarize_cohort(
    members: Sequence[MemberRecord],
    attendance: Iterable[AttendanceEntry],
    window: DateRange,
    *,
    tz: Optional[tzinfo] = None,
) -> tuple[list[MemberAttendanceSummary], InstanceCounts]:
    """Run classification, dedup, instance counting and aggregation for a window."""
    cohort_ids = {m.id for m in members}
    in_scope = (
        entry
        for entry in attendance
        if entry.member_id in cohort_ids and window.contains(entry.check_in_time)
    )
    deduplicated = deduplicate_attendance(in_scope, tz)
    counts = count_expected_instances(window)
    return aggregate_members(members, deduplicated, counts), counts


async def _fetch_cohort(
    repository: AttendanceRepository, resolved: ResolvedRequest
) -> list[MemberRecord]:
    request = resolved.request
    if resolved.scope is ReportScope.INDIVIDUAL:
        return await repository.find_members(member_public_id=request.member_id.strip())
    if resolved.scope is ReportScope.MINISTRY:
        return await repository.find_members(ministry=request.ministry.strip())
    return await repository.find_members(apostolate=request.apostolate or None)


def _member_statistics(
    rows: Sequence[MemberAttendanceSummary], counts: InstanceCounts
) -> ReportStatistics:
    return ReportStatistics(
        total_members=len(rows),
        total_instances=InstanceTotals(
            community_worship=counts.community_worship,
            word_sharing_circle=counts.word_sharing_circle,
        ),
        average_attendance=rounded_mean([r.overall_percentage for r in rows]),
        total_community_worship_attended=sum(
            r.community_worship_attended for r in rows
        ),
        total_word_sharing_circle_attended=sum(
            r.word_sharing_circle_attended for r in rows
        ),
    )


def _community_statistics(
    units: Sequence[CommunityRollupRow], counts: InstanceCounts
) -> ReportStatistics:
    total_members = sum(u.total_members for u in units)
    cw_attended = sum(u.community_worship_attended for u in units)
    wsc_attended = sum(u.word_sharing_circle_attended for u in units)
    return ReportStatistics(
        total_members=total_members,
        total_instances=InstanceTotals(
            community_worship=counts.community_worship,
            word_sharing_circle=counts.word_sharing_circle,
        ),
        average_attendance=rounded_mean([u.overall_percentage for u in units]),
        total_community_worship_attended=cw_attended,
        total_word_sharing_circle_attended=wsc_attended,
        total_ministries=len(units),
        community_cw_percentage=percentage(
            cw_attended, total_members * counts.community_worship
        ),
        community_wsc_percentage=percentage(
            wsc_attended, total_members * counts.word_sharing_circle
        ),
        average_cw_percentage_by_ministry=rounded_mean(
            [u.community_worship_percentage for u in units]
        ),
        average_wsc_percentage_by_ministry=rounded_mean(
            [u.word_sharing_circle_percentage for u in units]
        ),
    )


def _filters(resolved: ResolvedRequest) -> ReportFilters:
    request = resolved.request
    return ReportFilters(
        scope=resolved.scope.value,
        period=resolved.period.value,
        start_date=resolved.window.start,
        end_date=resolved.window.end,
        month=request.month,
        quarter=request.quarter,
        year=request.year,
        member_id=request.member_id,
        ministry=request.ministry,
        apostolate=request.apostolate,
    )


async def generate_recurring_report(
    repository: AttendanceRepository,
    request: RecurringReportRequest,
    *,
    now: Optional[datetime] = None,
) -> RecurringAttendanceReport:
    """
    Build the Community Worship / Word Sharing Circle attendance report.

    Individual and ministry scopes return one row per member; community scope
    returns one row per apostolate/ministry unit. An empty cohort is not an
    error and yields an empty report with zero statistics.
    """
    resolved = resolve_request(request, now=now)
    window = resolved.window
    tz = window.start.tzinfo

    members = await _fetch_cohort(repository, resolved)
    attendance = await repository.find_attendance_in_range(window.start, window.end)

    rows, counts = summarize_cohort(members, attendance, window, tz=tz)
    rows = sort_cohort(rows, resolved.sort_ministry)

    if resolved.scope is ReportScope.COMMUNITY:
        units = rollup_community(rows, counts)
        data: list = units
        statistics = _community_statistics(units, counts)
    else:
        data = rows
        statistics = _member_statistics(rows, counts)

    logger.info(
        "Generated recurring attendance report",
        extra={"extra_fields": {
            "scope": resolved.scope.value,
            "period": resolved.period.value,
            "start": window.start.isoformat(),
            "end": window.end.isoformat(),
            "members": len(members),
            "check_ins": len(attendance),
            "rows": len(data),
        }},
    )

    return RecurringAttendanceReport(
        data=data,
        statistics=statistics,
        generated_at=utc_now(),
        filters=_filters(resolved),
    )


async def generate_monthly_trend(
    repository: AttendanceRepository,
    ministry: str,
    year: Optional[int] = None,
    *,
    now: Optional[datetime] = None,
) -> list[MonthlyTrendPoint]:
    """
    Month-by-month Community Worship and Word Sharing Circle percentages for a
    ministry: the monthly report for each of the twelve months, with the
    ministry's members taken as one unit.
    """
    if _blank(ministry):
        raise ValidationError("ministry is required for a monthly trend", field="ministry")
    validate_year(year)

    now = now or local_now()
    year = year or now.year
    ministry = ministry.strip()

    year_window = resolve_period(PeriodKind.ANNUAL, year=year, now=now)
    members = await repository.find_members(ministry=ministry)
    attendance = await repository.find_attendance_in_range(
        year_window.start, year_window.end
    )

    points = []
    for month in range(1, 13):
        window = resolve_period(PeriodKind.MONTHLY, month=month, year=year, now=now)
        rows, counts = summarize_cohort(members, attendance, window, tz=now.tzinfo)
        unit = reduce_unit(rows, counts)
        points.append(
            MonthlyTrendPoint(
                month=month,
                month_label=MONTH_LABELS[month - 1],
                cw_percentage=unit.community_worship_percentage,
                wsc_percentage=unit.word_sharing_circle_percentage,
            )
        )
    return points
