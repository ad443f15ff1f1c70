"""Unit tests for event classification and expected instance counting."""

from datetime import date

import pytest
from services.reports_service.schemas import ActivityCategory
from services.reports_service.services import classify_event, count_expected_instances
from services.reports_service.services.periods import resolve_explicit_range

CW = ActivityCategory.COMMUNITY_WORSHIP
WSC = ActivityCategory.WORD_SHARING_CIRCLE
OTHER = ActivityCategory.OTHER


@pytest.mark.unit
@pytest.mark.parametrize(
    "title,category,expected",
    [
        ("Community Worship", None, CW),
        ("CW", None, CW),
        ("corporate worship", None, CW),
        ("Tuesday Corporate Prayer", None, CW),
        ("Weekly gathering", "Community Worship", CW),
        ("Word Sharing Circle", None, WSC),
        ("WSC", None, WSC),
        ("Word Sharing - Group A", None, WSC),
        ("Thursday meeting", "wsc", WSC),
        ("Leaders Meeting", "Formation", OTHER),
        ("", None, OTHER),
        (None, None, OTHER),
    ],
)
def test_classify_event(title, category, expected):
    assert classify_event(title, category) is expected


@pytest.mark.unit
def test_community_worship_rule_wins_when_both_match():
    assert classify_event("Corporate WSC night", None) is CW


@pytest.mark.unit
class TestExpectedInstances:
    def test_january_2024(self):
        """Jan 2024 starts on a Monday: five Tuesdays, four Thursdays."""
        counts = count_expected_instances(
            resolve_explicit_range(date(2024, 1, 1), date(2024, 1, 31))
        )
        assert counts.community_worship == 5
        assert counts.word_sharing_circle == 4
        assert counts.total == 9

    def test_february_2024(self):
        counts = count_expected_instances(
            resolve_explicit_range(date(2024, 2, 1), date(2024, 2, 29))
        )
        assert counts.community_worship == 4
        assert counts.word_sharing_circle == 5

    def test_single_monday_has_no_instances(self):
        counts = count_expected_instances(
            resolve_explicit_range(date(2024, 1, 1), date(2024, 1, 1))
        )
        assert counts.community_worship == 0
        assert counts.word_sharing_circle == 0

    def test_endpoints_are_inclusive(self):
        counts = count_expected_instances(
            resolve_explicit_range(date(2024, 1, 2), date(2024, 1, 4))
        )
        assert counts.community_worship == 1
        assert counts.word_sharing_circle == 1

    def test_for_category(self):
        counts = count_expected_instances(
            resolve_explicit_range(date(2024, 1, 1), date(2024, 1, 31))
        )
        assert counts.for_category(CW) == 5
        assert counts.for_category(WSC) == 4
        assert counts.for_category(OTHER) == 0
