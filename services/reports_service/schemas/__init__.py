"""Reports Service schemas package."""

from services.reports_service.schemas.enums import (
    ActivityCategory,
    PeriodKind,
    ReportScope,
)
from services.reports_service.schemas.main import (
    AttendanceEntry,
    CommunityRollupRow,
    InstanceTotals,
    MemberAttendanceSummary,
    MemberRecord,
    MonthlyTrendPoint,
    RecurringAttendanceReport,
    RecurringReportRequest,
    ReportFilters,
    ReportStatistics,
)

__all__ = [
    "ActivityCategory",
    "AttendanceEntry",
    "CommunityRollupRow",
    "InstanceTotals",
    "MemberAttendanceSummary",
    "MemberRecord",
    "MonthlyTrendPoint",
    "PeriodKind",
    "RecurringAttendanceReport",
    "RecurringReportRequest",
    "ReportFilters",
    "ReportScope",
    "ReportStatistics",
]
