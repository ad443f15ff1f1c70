"""Read access to members and check-ins for the reports service.

The engine only depends on the ``AttendanceRepository`` protocol; the SQL
implementation reads tables owned by the membership, events and check-in
services.
"""

from datetime import datetime
from typing import Optional, Protocol

from libs.common.logging import get_logger
from services.reports_service.models import AttendanceRef, MemberRef
from services.reports_service.schemas import AttendanceEntry, MemberRecord
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

logger = get_logger(__name__)


class AttendanceRepository(Protocol):
    async def find_members(
        self,
        *,
        apostolate: Optional[str] = None,
        ministry: Optional[str] = None,
        member_public_id: Optional[str] = None,
    ) -> list[MemberRecord]:
        ...

    async def find_attendance_in_range(
        self, start: datetime, end: datetime
    ) -> list[AttendanceEntry]:
        ...


class SqlAttendanceRepository:
    """AttendanceRepository backed by the shared Postgres database."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_members(
        self,
        *,
        apostolate: Optional[str] = None,
        ministry: Optional[str] = None,
        member_public_id: Optional[str] = None,
    ) -> list[MemberRecord]:
        query = select(MemberRef)

        if member_public_id:
            query = query.where(MemberRef.community_id == member_public_id)
        if ministry:
            query = query.where(MemberRef.ministry == ministry)
        if apostolate:
            query = query.where(MemberRef.apostolate == apostolate)

        query = query.order_by(MemberRef.last_name.asc(), MemberRef.first_name.asc())

        result = await self.db.execute(query)
        return [MemberRecord.model_validate(m) for m in result.scalars().all()]

    async def find_attendance_in_range(
        self, start: datetime, end: datetime
    ) -> list[AttendanceEntry]:
        """
        Check-ins between ``start`` and ``end`` (inclusive), joined with their
        event. Rows without an event or a check-in time are skipped.
        """
        query = (
            select(AttendanceRef)
            .options(joinedload(AttendanceRef.event))
            .where(
                AttendanceRef.check_in_time >= start,
                AttendanceRef.check_in_time <= end,
            )
            .order_by(AttendanceRef.check_in_time.asc())
        )
        result = await self.db.execute(query)

        entries = []
        skipped = 0
        for record in result.scalars().all():
            if record.event is None or record.check_in_time is None:
                skipped += 1
                logger.warning(
                    "Skipping attendance record without event or check-in time",
                    extra={"extra_fields": {
                        "attendance_id": str(record.id),
                        "event_id": str(record.event_id) if record.event_id else None,
                    }},
                )
                continue

            entries.append(
                AttendanceEntry(
                    id=record.id,
                    member_id=record.member_id,
                    event_id=record.event_id,
                    check_in_time=record.check_in_time,
                    event_title=record.event.title or "",
                    event_category=record.event.category,
                    event_start_date=record.event.start_date,
                )
            )

        logger.debug(
            "Loaded attendance for report window",
            extra={"extra_fields": {"loaded": len(entries), "skipped": skipped}},
        )
        return entries
