"""
Per-member attendance summaries.

Pure functions; the deduplicated attendance and the expected instance counts
are computed by the caller for the whole run.
"""

import uuid
from collections import Counter, defaultdict
from typing import Iterable, Optional, Sequence

from libs.common.logging import get_logger
from services.reports_service.schemas.enums import ActivityCategory
from services.reports_service.schemas.main import MemberAttendanceSummary, MemberRecord
from services.reports_service.services.dedup import ClassifiedAttendance
from services.reports_service.services.instances import InstanceCounts

logger = get_logger(__name__)


def percentage(attended: int, expected: int) -> int:
    """Whole-number percentage, rounded half up; 0 when nothing was expected."""
    if expected <= 0:
        return 0
    return (200 * attended + expected) // (2 * expected)


def rounded_mean(values: Sequence[int]) -> int:
    if not values:
        return 0
    return (2 * sum(values) + len(values)) // (2 * len(values))


def resolve_middle_initial(member: MemberRecord) -> str:
    if member.middle_initial and member.middle_initial.strip():
        return member.middle_initial.strip()
    if member.middle_name and member.middle_name.strip():
        return member.middle_name.strip()[0].upper()
    return ""


def resolve_me_class(member: MemberRecord) -> Optional[str]:
    label = f"{member.encounter_type or ''}{member.class_number or ''}".strip()
    return label or None


def _bounded(
    attended: int,
    expected: int,
    member: MemberRecord,
    category: ActivityCategory,
) -> int:
    # More attended than scheduled means a check-in landed on an unscheduled
    # day; the count can never exceed the calendar.
    if attended > expected:
        logger.warning(
            "Attendance exceeds expected instances; capping",
            extra={"extra_fields": {
                "member_id": str(member.id),
                "category": category.value,
                "attended": attended,
                "expected": expected,
            }},
        )
        return expected
    return attended


def aggregate_member(
    member: MemberRecord,
    attended: Counter,
    counts: InstanceCounts,
) -> MemberAttendanceSummary:
    """Build one member's summary from their per-category attended counts."""
    cw_attended = _bounded(
        attended.get(ActivityCategory.COMMUNITY_WORSHIP, 0),
        counts.community_worship,
        member,
        ActivityCategory.COMMUNITY_WORSHIP,
    )
    wsc_attended = _bounded(
        attended.get(ActivityCategory.WORD_SHARING_CIRCLE, 0),
        counts.word_sharing_circle,
        member,
        ActivityCategory.WORD_SHARING_CIRCLE,
    )
    total_attended = cw_attended + wsc_attended

    return MemberAttendanceSummary(
        member_id=member.id,
        community_id=member.community_id,
        first_name=member.first_name,
        last_name=member.last_name,
        middle_name=member.middle_name,
        middle_initial=resolve_middle_initial(member),
        class_number=member.class_number,
        me_class=resolve_me_class(member),
        ministry=member.ministry,
        apostolate=member.apostolate,
        community_worship_attended=cw_attended,
        community_worship_instances=counts.community_worship,
        community_worship_percentage=percentage(cw_attended, counts.community_worship),
        word_sharing_circle_attended=wsc_attended,
        word_sharing_circle_instances=counts.word_sharing_circle,
        word_sharing_circle_percentage=percentage(
            wsc_attended, counts.word_sharing_circle
        ),
        total_attended=total_attended,
        total_expected=counts.total,
        overall_percentage=percentage(total_attended, counts.total),
    )


def aggregate_members(
    members: Iterable[MemberRecord],
    attendance: Iterable[ClassifiedAttendance],
    counts: InstanceCounts,
) -> list[MemberAttendanceSummary]:
    """
    Summarize every member of the cohort, in input order.

    ``attendance`` must already be deduplicated; records of members outside the
    cohort are ignored.
    """
    by_member: dict[uuid.UUID, Counter] = defaultdict(Counter)
    for record in attendance:
        by_member[record.member_id][record.category] += 1

    return [
        aggregate_member(member, by_member.get(member.id, Counter()), counts)
        for member in members
    ]
