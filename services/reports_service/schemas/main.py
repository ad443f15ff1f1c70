import uuid
from datetime import date, datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Collaborator records (read-only inputs)
# ---------------------------------------------------------------------------


class MemberRecord(BaseModel):
    """Member as supplied by the membership subsystem."""

    id: uuid.UUID
    community_id: str
    first_name: str
    last_name: str
    middle_name: Optional[str] = None
    middle_initial: Optional[str] = None
    encounter_type: Optional[str] = None
    class_number: Optional[str] = None
    ministry: Optional[str] = None
    apostolate: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("class_number", mode="before")
    @classmethod
    def coerce_class_number(cls, v):
        if v is None:
            return None
        return str(v)


class AttendanceEntry(BaseModel):
    """A check-in joined with the title/category/start date of its event."""

    id: Optional[uuid.UUID] = None
    member_id: uuid.UUID
    event_id: Optional[uuid.UUID] = None
    check_in_time: datetime
    event_title: str = ""
    event_category: Optional[str] = None
    event_start_date: Optional[datetime] = None

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


class RecurringReportRequest(BaseModel):
    """Parameters of a recurring attendance report.

    ``scope`` and ``period`` stay plain strings here so an unknown value is
    reported by the engine as a configuration error rather than a schema error.
    """

    scope: str
    period: str = "monthly"
    month: Optional[int] = None
    quarter: Optional[str] = None
    year: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    member_id: Optional[str] = None
    ministry: Optional[str] = None
    apostolate: Optional[str] = None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class MemberAttendanceSummary(BaseModel):
    """One member's Community Worship / Word Sharing Circle attendance."""

    member_id: uuid.UUID
    community_id: str
    first_name: str
    last_name: str
    middle_name: Optional[str] = None
    middle_initial: str = ""
    class_number: Optional[str] = None
    me_class: Optional[str] = None
    ministry: Optional[str] = None
    apostolate: Optional[str] = None

    community_worship_attended: int = Field(ge=0)
    community_worship_instances: int = Field(ge=0)
    community_worship_percentage: int = Field(ge=0, le=100)

    word_sharing_circle_attended: int = Field(ge=0)
    word_sharing_circle_instances: int = Field(ge=0)
    word_sharing_circle_percentage: int = Field(ge=0, le=100)

    total_attended: int = Field(ge=0)
    total_expected: int = Field(ge=0)
    overall_percentage: int = Field(ge=0, le=100)


class CommunityRollupRow(BaseModel):
    """Attendance of one ministry within an apostolate."""

    apostolate: str
    ministry: str
    total_members: int = Field(ge=0)

    community_worship_attended: int = Field(ge=0)
    community_worship_instances: int = Field(ge=0)
    community_worship_percentage: int = Field(ge=0, le=100)

    word_sharing_circle_attended: int = Field(ge=0)
    word_sharing_circle_instances: int = Field(ge=0)
    word_sharing_circle_percentage: int = Field(ge=0, le=100)

    overall_percentage: int = Field(ge=0, le=100)


class InstanceTotals(BaseModel):
    community_worship: int = 0
    word_sharing_circle: int = 0


class ReportStatistics(BaseModel):
    total_members: int = 0
    total_instances: InstanceTotals = Field(default_factory=InstanceTotals)
    average_attendance: int = 0
    total_community_worship_attended: int = 0
    total_word_sharing_circle_attended: int = 0

    # Community scope only
    total_ministries: Optional[int] = None
    community_cw_percentage: Optional[int] = None
    community_wsc_percentage: Optional[int] = None
    average_cw_percentage_by_ministry: Optional[int] = None
    average_wsc_percentage_by_ministry: Optional[int] = None


class ReportFilters(BaseModel):
    """The request parameters after resolution."""

    scope: str
    period: str
    start_date: datetime
    end_date: datetime
    month: Optional[int] = None
    quarter: Optional[str] = None
    year: Optional[int] = None
    member_id: Optional[str] = None
    ministry: Optional[str] = None
    apostolate: Optional[str] = None


class RecurringAttendanceReport(BaseModel):
    data: Union[List[MemberAttendanceSummary], List[CommunityRollupRow]]
    statistics: ReportStatistics
    generated_at: datetime
    filters: ReportFilters


class MonthlyTrendPoint(BaseModel):
    month: int = Field(ge=1, le=12)
    month_label: str
    cw_percentage: int = Field(ge=0, le=100)
    wsc_percentage: int = Field(ge=0, le=100)
