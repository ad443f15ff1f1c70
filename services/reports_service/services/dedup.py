"""Collapsing of repeated check-ins."""

import uuid
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Iterable, Optional, Union

from libs.common.datetime_utils import to_local
from services.reports_service.schemas.enums import ActivityCategory
from services.reports_service.schemas.main import AttendanceEntry
from services.reports_service.services.classification import classify_event


@dataclass(frozen=True)
class ClassifiedAttendance:
    """A check-in labelled with its activity and local calendar day."""

    entry: AttendanceEntry
    category: ActivityCategory
    day: date

    @property
    def member_id(self) -> uuid.UUID:
        return self.entry.member_id

    @property
    def check_in_time(self) -> datetime:
        return self.entry.check_in_time

    @property
    def key(self) -> tuple[uuid.UUID, ActivityCategory, date]:
        return (self.entry.member_id, self.category, self.day)


def classify_attendance(
    entry: AttendanceEntry, tz: Optional[tzinfo] = None
) -> ClassifiedAttendance:
    return ClassifiedAttendance(
        entry=entry,
        category=classify_event(entry.event_title, entry.event_category),
        day=to_local(entry.check_in_time, tz).date(),
    )


def deduplicate_attendance(
    entries: Iterable[Union[AttendanceEntry, ClassifiedAttendance]],
    tz: Optional[tzinfo] = None,
) -> list[ClassifiedAttendance]:
    """
    Keep one check-in per (member, activity, calendar day).

    QR re-scans and duplicate event rows for the same occurrence collapse into
    the earliest check-in. Check-ins to events that are neither Community
    Worship nor a Word Sharing Circle are dropped. Already classified input is
    reused as-is, so running this on its own output returns the same list.
    """
    earliest: dict[tuple, ClassifiedAttendance] = {}
    for item in entries:
        if isinstance(item, ClassifiedAttendance):
            classified = item
        else:
            classified = classify_attendance(item, tz)

        if classified.category is ActivityCategory.OTHER:
            continue

        current = earliest.get(classified.key)
        if current is None or classified.check_in_time < current.check_in_time:
            earliest[classified.key] = classified

    return list(earliest.values())
