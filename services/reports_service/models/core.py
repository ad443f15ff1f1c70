import uuid
from datetime import datetime
from typing import Optional

from libs.db.base import Base
from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

# These tables are owned by the membership, events and check-in services.
# The reports service maps only the columns it reads and never writes them.
_READ_ONLY = {"extend_existing": True, "info": {"skip_autogenerate": True}}


class MemberRef(Base):
    """Member identity and organizational placement."""

    __tablename__ = "members"
    __table_args__ = _READ_ONLY

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    community_id: Mapped[str] = mapped_column(
        String, unique=True, index=True, nullable=False
    )
    first_name: Mapped[str] = mapped_column(String, nullable=False)
    last_name: Mapped[str] = mapped_column(String, nullable=False)
    middle_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    middle_initial: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    # Encounter class, e.g. "ME" + "12"
    encounter_type: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    class_number: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    apostolate: Mapped[Optional[str]] = mapped_column(String, nullable=True, index=True)
    ministry: Mapped[Optional[str]] = mapped_column(String, nullable=True, index=True)

    def __repr__(self):
        return f"<MemberRef {self.community_id} {self.last_name}, {self.first_name}>"


class EventRef(Base):
    __tablename__ = "events"
    __table_args__ = _READ_ONLY

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    title: Mapped[str] = mapped_column(String, nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    def __repr__(self):
        return f"<EventRef {self.title}>"


class AttendanceRef(Base):
    """A single check-in scan. Re-scans produce additional rows."""

    __tablename__ = "attendance_records"
    __table_args__ = _READ_ONLY

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    member_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("members.id"), nullable=False, index=True
    )
    event_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), ForeignKey("events.id"), nullable=True, index=True
    )
    check_in_time: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )

    event: Mapped[Optional[EventRef]] = relationship(EventRef, lazy="joined")

    def __repr__(self):
        return f"<AttendanceRef Event={self.event_id} Member={self.member_id}>"
