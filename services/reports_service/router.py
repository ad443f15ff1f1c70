"""Reports Service router/endpoints."""

from datetime import date
from typing import List, NoReturn, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from libs.common.logging import get_logger
from libs.db.session import get_async_db
from services.reports_service.errors import (
    AnalyticsError,
    ConfigurationError,
    ValidationError,
)
from services.reports_service.repository import (
    AttendanceRepository,
    SqlAttendanceRepository,
)
from services.reports_service.schemas import (
    MonthlyTrendPoint,
    RecurringAttendanceReport,
    RecurringReportRequest,
)
from services.reports_service.services import (
    generate_monthly_trend,
    generate_recurring_report,
)
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/reports", tags=["reports"])
logger = get_logger(__name__)


def get_attendance_repository(
    db: AsyncSession = Depends(get_async_db),
) -> AttendanceRepository:
    return SqlAttendanceRepository(db)


def _raise_http(exc: AnalyticsError) -> NoReturn:
    if isinstance(exc, ConfigurationError):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, ValidationError):
        code = status.HTTP_422_UNPROCESSABLE_ENTITY
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    logger.info("Rejected report request: %s", exc.message)
    raise HTTPException(
        status_code=code, detail={"message": exc.message, "field": exc.field}
    ) from exc


@router.get("/recurring-attendance", response_model=RecurringAttendanceReport)
async def get_recurring_attendance_report(
    scope: str = Query(..., description="individual | ministry | community"),
    period: str = Query(
        "monthly", description="weekly | monthly | quarterly | year-to-date | annual"
    ),
    month: Optional[int] = Query(None, description="Month number, 1-12"),
    quarter: Optional[str] = Query(None, description="Q1 | Q2 | Q3 | Q4"),
    year: Optional[int] = Query(None),
    start_date: Optional[date] = Query(
        None, description="Explicit window start; overrides the period"
    ),
    end_date: Optional[date] = Query(
        None, description="Explicit window end; overrides the period"
    ),
    member_id: Optional[str] = Query(None, description="Member community ID"),
    ministry: Optional[str] = Query(None),
    apostolate: Optional[str] = Query(None),
    repository: AttendanceRepository = Depends(get_attendance_repository),
):
    """
    Community Worship and Word Sharing Circle attendance for a member, a
    ministry, or the whole community over the requested window.
    """
    request = RecurringReportRequest(
        scope=scope,
        period=period,
        month=month,
        quarter=quarter,
        year=year,
        start_date=start_date,
        end_date=end_date,
        member_id=member_id,
        ministry=ministry,
        apostolate=apostolate,
    )
    try:
        return await generate_recurring_report(repository, request)
    except AnalyticsError as exc:
        _raise_http(exc)


@router.get(
    "/recurring-attendance/monthly-trend", response_model=List[MonthlyTrendPoint]
)
async def get_monthly_attendance_trend(
    ministry: str = Query(...),
    year: Optional[int] = Query(None),
    repository: AttendanceRepository = Depends(get_attendance_repository),
):
    """Monthly CW % and WSC % for a ministry across one year."""
    try:
        return await generate_monthly_trend(repository, ministry, year)
    except AnalyticsError as exc:
        _raise_http(exc)
