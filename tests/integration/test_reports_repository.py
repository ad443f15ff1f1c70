"""Integration tests for the SQL-backed attendance repository.

These need a reachable Postgres (DATABASE_URL); they are skipped otherwise.
"""

from datetime import datetime, timezone

import pytest
from services.reports_service.repository import SqlAttendanceRepository
from tests.factories import AttendanceRefFactory, EventRefFactory, MemberRefFactory

JAN_START = datetime(2024, 1, 1, tzinfo=timezone.utc)
JAN_END = datetime(2024, 1, 31, 23, 59, 59, tzinfo=timezone.utc)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _seed(db_session):
    santos = MemberRefFactory.create(
        community_id="CFC-1001",
        first_name="Ana",
        last_name="Santos",
        class_number="5",
        ministry="Service Ministry",
        apostolate="Management Apostolate",
    )
    cruz = MemberRefFactory.create(
        community_id="CFC-1002",
        first_name="Ben",
        last_name="Cruz",
        ministry="Service Ministry",
        apostolate="Management Apostolate",
    )
    reyes = MemberRefFactory.create(
        community_id="CFC-1003",
        first_name="Carla",
        last_name="Reyes",
        ministry="Music Ministry",
        apostolate="Pastoral Apostolate",
    )
    worship = EventRefFactory.create()
    sharing = EventRefFactory.create(
        title="Word Sharing Circle",
        category="WSC",
        start_date=datetime(2024, 1, 4, 11, 0, tzinfo=timezone.utc),
    )
    db_session.add_all([santos, cruz, reyes, worship, sharing])
    await db_session.flush()

    db_session.add_all(
        [
            AttendanceRefFactory.create(member_id=santos.id, event_id=worship.id),
            AttendanceRefFactory.create(
                member_id=santos.id,
                event_id=worship.id,
                check_in_time=datetime(2024, 1, 2, 11, 9, tzinfo=timezone.utc),
            ),
            AttendanceRefFactory.create(
                member_id=santos.id,
                event_id=sharing.id,
                check_in_time=datetime(2024, 1, 4, 11, 2, tzinfo=timezone.utc),
            ),
            # No event
            AttendanceRefFactory.create(member_id=cruz.id, event_id=None),
            # Outside January
            AttendanceRefFactory.create(
                member_id=reyes.id,
                event_id=worship.id,
                check_in_time=datetime(2024, 2, 6, 11, 0, tzinfo=timezone.utc),
            ),
        ]
    )
    await db_session.commit()
    return santos, cruz, reyes


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_find_members_by_ministry_ordered_by_name(db_session):
    await _seed(db_session)
    repository = SqlAttendanceRepository(db_session)

    members = await repository.find_members(ministry="Service Ministry")

    assert [m.last_name for m in members] == ["Cruz", "Santos"]
    assert members[1].class_number == "5"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_find_members_by_public_id_and_apostolate(db_session):
    await _seed(db_session)
    repository = SqlAttendanceRepository(db_session)

    by_id = await repository.find_members(member_public_id="CFC-1003")
    by_apostolate = await repository.find_members(apostolate="Pastoral Apostolate")
    missing = await repository.find_members(member_public_id="CFC-0000")

    assert [m.first_name for m in by_id] == ["Carla"]
    assert [m.first_name for m in by_apostolate] == ["Carla"]
    assert missing == []


@pytest.mark.asyncio
@pytest.mark.integration
async def test_find_attendance_in_range_joins_event(db_session):
    santos, _, _ = await _seed(db_session)
    repository = SqlAttendanceRepository(db_session)

    entries = await repository.find_attendance_in_range(JAN_START, JAN_END)

    # The row without an event is skipped; February is out of range
    assert len(entries) == 3
    assert {e.member_id for e in entries} == {santos.id}
    assert sorted(e.event_title for e in entries) == [
        "Community Worship",
        "Community Worship",
        "Word Sharing Circle",
    ]
    assert entries == sorted(entries, key=lambda e: e.check_in_time)


# ---------------------------------------------------------------------------
# End to end
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_ministry_report_over_http(db_client, db_session):
    await _seed(db_session)

    response = await db_client.get(
        "/reports/recurring-attendance",
        params={
            "scope": "ministry",
            "ministry": "Service Ministry",
            "start_date": "2024-01-01",
            "end_date": "2024-01-31",
        },
    )

    assert response.status_code == 200, response.text
    body = response.json()
    # Service Ministry is ordered by class number; Cruz has none
    assert [r["last_name"] for r in body["data"]] == ["Cruz", "Santos"]
    santos_row = body["data"][1]
    assert santos_row["community_worship_attended"] == 1
    assert santos_row["community_worship_percentage"] == 20
    assert santos_row["word_sharing_circle_attended"] == 1
    assert santos_row["word_sharing_circle_percentage"] == 25
    assert body["statistics"]["total_members"] == 2
