"""Reports Service business logic package."""

from services.reports_service.services.aggregation import (
    aggregate_member,
    aggregate_members,
    percentage,
)
from services.reports_service.services.classification import classify_event
from services.reports_service.services.dedup import (
    ClassifiedAttendance,
    deduplicate_attendance,
)
from services.reports_service.services.instances import (
    InstanceCounts,
    count_expected_instances,
)
from services.reports_service.services.periods import (
    DateRange,
    resolve_explicit_range,
    resolve_period,
)
from services.reports_service.services.report import (
    generate_monthly_trend,
    generate_recurring_report,
    resolve_request,
)
from services.reports_service.services.rollup import rollup_community
from services.reports_service.services.sorting import sort_cohort

__all__ = [
    "ClassifiedAttendance",
    "DateRange",
    "InstanceCounts",
    "aggregate_member",
    "aggregate_members",
    "classify_event",
    "count_expected_instances",
    "deduplicate_attendance",
    "generate_monthly_trend",
    "generate_recurring_report",
    "percentage",
    "resolve_explicit_range",
    "resolve_period",
    "resolve_request",
    "rollup_community",
    "sort_cohort",
]
