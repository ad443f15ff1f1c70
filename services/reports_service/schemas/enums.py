"""Enum definitions for the reports service."""

import enum


class ReportScope(str, enum.Enum):
    INDIVIDUAL = "individual"
    MINISTRY = "ministry"
    COMMUNITY = "community"


class PeriodKind(str, enum.Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEAR_TO_DATE = "year-to-date"
    ANNUAL = "annual"


class ActivityCategory(str, enum.Enum):
    """Recurring activity an event belongs to."""

    COMMUNITY_WORSHIP = "community_worship"
    WORD_SHARING_CIRCLE = "word_sharing_circle"
    OTHER = "other"
