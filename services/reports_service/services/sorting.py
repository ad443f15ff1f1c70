"""Roster ordering for per-member report rows."""

import math
import unicodedata
from typing import Iterable, Optional

from services.reports_service.schemas.main import MemberAttendanceSummary
from services.reports_service.services.constants import CLASS_GROUPED_MINISTRIES


def collation_key(value: Optional[str]) -> tuple[str, str, str]:
    """
    Sort key approximating locale collation for names.

    Compares letters first ignoring accents and case ("Álvarez" beside
    "Alvarez", "dela Cruz" beside "Dela Cruz"), then accents, then case with
    lowercase first.
    """
    text = value or ""
    folded = text.casefold()
    base = "".join(
        ch
        for ch in unicodedata.normalize("NFKD", folded)
        if not unicodedata.combining(ch)
    )
    return (base, folded, text.swapcase())


def parse_class_number(value: Optional[str]) -> int:
    """Encounter class number as an int; missing or unparsable values are 0.

    Decimal text such as "5.0" is truncated to its whole part.
    """
    if value is None:
        return 0
    text = str(value).strip()
    if not text or "_" in text:
        return 0
    try:
        number = float(text)
    except ValueError:
        return 0
    if not math.isfinite(number):
        return 0
    return int(number)


def _by_name(row: MemberAttendanceSummary):
    return (collation_key(row.last_name), collation_key(row.first_name))


def _by_class_then_name(row: MemberAttendanceSummary):
    return (parse_class_number(row.class_number),) + _by_name(row)


def sort_cohort(
    rows: Iterable[MemberAttendanceSummary],
    ministry: Optional[str] = None,
) -> list[MemberAttendanceSummary]:
    """
    Order report rows for printing.

    Ministries that seat members by encounter class (PLSG, Service,
    Intercessory) are ordered by class number, then last name, then first
    name. Everyone else is ordered by last name, then first name.
    """
    if ministry and ministry.strip() in CLASS_GROUPED_MINISTRIES:
        return sorted(rows, key=_by_class_then_name)
    return sorted(rows, key=_by_name)
