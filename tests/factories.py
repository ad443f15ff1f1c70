"""
Factories for creating valid test data.

Record factories build the pydantic inputs the engine consumes; the ``*Ref``
factories build insertable SQLAlchemy rows for repository tests.
Override any field via kwargs.

Usage:
    member = MemberRecordFactory.create(ministry="Service Ministry")
    check_in = AttendanceEntryFactory.create(member_id=member.id, event_title="Community Worship")
"""

import uuid
from datetime import datetime, timezone

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _uuid() -> uuid.UUID:
    return uuid.uuid4()


def _community_id() -> str:
    return f"CFC-{uuid.uuid4().hex[:6].upper()}"


# ---------------------------------------------------------------------------
# Engine inputs
# ---------------------------------------------------------------------------


class MemberRecordFactory:
    @staticmethod
    def create(**overrides):
        from services.reports_service.schemas import MemberRecord

        defaults = {
            "id": _uuid(),
            "community_id": _community_id(),
            "first_name": "Test",
            "last_name": "Member",
            "middle_name": None,
            "middle_initial": None,
            "encounter_type": None,
            "class_number": None,
            "ministry": "Service Ministry",
            "apostolate": "Management Apostolate",
        }
        defaults.update(overrides)
        return MemberRecord(**defaults)


class AttendanceEntryFactory:
    @staticmethod
    def create(**overrides):
        from services.reports_service.schemas import AttendanceEntry

        defaults = {
            "id": _uuid(),
            "member_id": _uuid(),
            "event_id": _uuid(),
            # Tuesday
            "check_in_time": datetime(2024, 1, 2, 8, 0),
            "event_title": "Community Worship",
            "event_category": "Community Worship",
            "event_start_date": datetime(2024, 1, 2, 7, 30),
        }
        defaults.update(overrides)
        return AttendanceEntry(**defaults)


# ---------------------------------------------------------------------------
# Database rows
# ---------------------------------------------------------------------------


class MemberRefFactory:
    @staticmethod
    def create(**overrides):
        from services.reports_service.models import MemberRef

        defaults = {
            "id": _uuid(),
            "community_id": _community_id(),
            "first_name": "Test",
            "last_name": "Member",
            "middle_name": "Reyes",
            "ministry": "Service Ministry",
            "apostolate": "Management Apostolate",
        }
        defaults.update(overrides)
        return MemberRef(**defaults)


class EventRefFactory:
    @staticmethod
    def create(**overrides):
        from services.reports_service.models import EventRef

        defaults = {
            "id": _uuid(),
            "title": "Community Worship",
            "category": "Community Worship",
            "start_date": datetime(2024, 1, 2, 11, 0, tzinfo=timezone.utc),
        }
        defaults.update(overrides)
        return EventRef(**defaults)


class AttendanceRefFactory:
    @staticmethod
    def create(member_id=None, event_id=None, **overrides):
        from services.reports_service.models import AttendanceRef

        defaults = {
            "id": _uuid(),
            "member_id": member_id or _uuid(),
            "event_id": event_id,
            "check_in_time": datetime(2024, 1, 2, 11, 5, tzinfo=timezone.utc),
        }
        defaults.update(overrides)
        return AttendanceRef(**defaults)
