"""Reports Service models package."""

from services.reports_service.models.core import AttendanceRef, EventRef, MemberRef

__all__ = [
    "AttendanceRef",
    "EventRef",
    "MemberRef",
]
