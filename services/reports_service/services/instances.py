"""Expected occurrence counting for the weekly activities."""

from dataclasses import dataclass

from services.reports_service.schemas.enums import ActivityCategory
from services.reports_service.services.constants import (
    COMMUNITY_WORSHIP_WEEKDAY,
    WORD_SHARING_CIRCLE_WEEKDAY,
)
from services.reports_service.services.periods import DateRange


@dataclass(frozen=True)
class InstanceCounts:
    """How many times each activity was scheduled to happen in a window."""

    community_worship: int = 0
    word_sharing_circle: int = 0

    @property
    def total(self) -> int:
        return self.community_worship + self.word_sharing_circle

    def for_category(self, category: ActivityCategory) -> int:
        if category is ActivityCategory.COMMUNITY_WORSHIP:
            return self.community_worship
        if category is ActivityCategory.WORD_SHARING_CIRCLE:
            return self.word_sharing_circle
        return 0


def count_expected_instances(window: DateRange) -> InstanceCounts:
    """
    Count Tuesdays (Community Worship) and Thursdays (Word Sharing Circle)
    between the window's start and end days, both inclusive.

    Computed from the calendar alone; whether an event was actually held does
    not matter.
    """
    cw = wsc = 0
    for day in window.days():
        weekday = day.weekday()
        if weekday == COMMUNITY_WORSHIP_WEEKDAY:
            cw += 1
        elif weekday == WORD_SHARING_CIRCLE_WEEKDAY:
            wsc += 1
    return InstanceCounts(community_worship=cw, word_sharing_circle=wsc)
