"""Fixed community structure used by the recurring attendance reports."""

import calendar

# Weekday numbers follow date.weekday(): Monday is 0.
COMMUNITY_WORSHIP_WEEKDAY = calendar.TUESDAY
WORD_SHARING_CIRCLE_WEEKDAY = calendar.THURSDAY

APOSTOLATE_ORDER = (
    "Pastoral Apostolate",
    "Evangelization Apostolate",
    "Formation Apostolate",
    "Management Apostolate",
    "Mission Apostolate",
    "Others",
)

# Ministries whose rosters and seating are arranged by encounter class.
CLASS_GROUPED_MINISTRIES = frozenset(
    {
        "Post-LSS Group (PLSG)",
        "Service Ministry",
        "Intercessory Ministry",
    }
)

MONTH_LABELS = tuple(calendar.month_abbr[m] for m in range(1, 13))
