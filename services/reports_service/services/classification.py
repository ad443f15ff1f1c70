"""Event category classification for the recurring activities."""

from typing import Optional

from services.reports_service.schemas.enums import ActivityCategory

# (category, exact titles, substrings), checked in order; first match wins.
_RULES = (
    (
        ActivityCategory.COMMUNITY_WORSHIP,
        frozenset({"community worship", "corporate worship", "cw"}),
        ("community worship", "corporate worship", "corporate"),
    ),
    (
        ActivityCategory.WORD_SHARING_CIRCLE,
        frozenset({"word sharing circle", "wsc"}),
        ("word sharing", "wsc"),
    ),
)


def classify_event(title: Optional[str], category: Optional[str]) -> ActivityCategory:
    """
    Decide which recurring activity an event belongs to.

    The title is matched exactly and by substring, the category by substring,
    both case-insensitively. Events matching neither activity are OTHER.
    """
    title_key = (title or "").strip().lower()
    category_key = (category or "").strip().lower()

    for activity, exact_titles, keywords in _RULES:
        if title_key in exact_titles:
            return activity
        if any(k in title_key or k in category_key for k in keywords):
            return activity

    return ActivityCategory.OTHER
