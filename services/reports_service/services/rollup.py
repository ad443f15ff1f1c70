"""Community roll-up of member rows into apostolate/ministry units."""

from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, Sequence

from libs.common.logging import get_logger
from services.reports_service.schemas.main import CommunityRollupRow, MemberAttendanceSummary
from services.reports_service.services.aggregation import percentage
from services.reports_service.services.constants import APOSTOLATE_ORDER
from services.reports_service.services.instances import InstanceCounts
from services.reports_service.services.sorting import collation_key

logger = get_logger(__name__)


@dataclass(frozen=True)
class UnitTotals:
    """Attendance of a group of members reduced to a single line."""

    total_members: int
    community_worship_attended: int
    word_sharing_circle_attended: int
    community_worship_percentage: int
    word_sharing_circle_percentage: int
    overall_percentage: int


def reduce_unit(
    rows: Sequence[MemberAttendanceSummary], counts: InstanceCounts
) -> UnitTotals:
    """
    Sum attended counts over ``rows``. Percentages are taken against every
    member attending every expected instance.
    """
    n = len(rows)
    cw = sum(r.community_worship_attended for r in rows)
    wsc = sum(r.word_sharing_circle_attended for r in rows)
    return UnitTotals(
        total_members=n,
        community_worship_attended=cw,
        word_sharing_circle_attended=wsc,
        community_worship_percentage=percentage(cw, n * counts.community_worship),
        word_sharing_circle_percentage=percentage(wsc, n * counts.word_sharing_circle),
        overall_percentage=percentage(cw + wsc, n * counts.total),
    )


def _apostolate_rank(apostolate: str) -> tuple:
    try:
        return (APOSTOLATE_ORDER.index(apostolate), collation_key(""))
    except ValueError:
        return (len(APOSTOLATE_ORDER), collation_key(apostolate))


def rollup_community(
    rows: Iterable[MemberAttendanceSummary], counts: InstanceCounts
) -> list[CommunityRollupRow]:
    """
    One row per (apostolate, ministry) with at least one member.

    Apostolates follow the community's canonical order, with any others after
    them alphabetically; ministries are alphabetical within an apostolate.
    """
    units: dict[tuple[str, str], list[MemberAttendanceSummary]] = defaultdict(list)
    unplaced = 0
    for row in rows:
        apostolate = (row.apostolate or "").strip()
        ministry = (row.ministry or "").strip()
        if not apostolate or not ministry:
            unplaced += 1
            continue
        units[(apostolate, ministry)].append(row)

    if unplaced:
        logger.info(
            "Members without apostolate or ministry left out of community roll-up",
            extra={"extra_fields": {"count": unplaced}},
        )

    result = []
    for (apostolate, ministry), members in units.items():
        totals = reduce_unit(members, counts)
        result.append(
            CommunityRollupRow(
                apostolate=apostolate,
                ministry=ministry,
                total_members=totals.total_members,
                community_worship_attended=totals.community_worship_attended,
                community_worship_instances=counts.community_worship,
                community_worship_percentage=totals.community_worship_percentage,
                word_sharing_circle_attended=totals.word_sharing_circle_attended,
                word_sharing_circle_instances=counts.word_sharing_circle,
                word_sharing_circle_percentage=totals.word_sharing_circle_percentage,
                overall_percentage=totals.overall_percentage,
            )
        )

    result.sort(
        key=lambda r: _apostolate_rank(r.apostolate) + (collation_key(r.ministry),)
    )
    return result
