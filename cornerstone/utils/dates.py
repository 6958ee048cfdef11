"""Calendar-day helpers for the scheduler.

Inside the engine every date is a ``datetime.date``: whole calendar days, no
time of day. ISO ``YYYY-MM-DD`` strings only exist at the JSON boundary, so
parsing and formatting live here and nowhere else.
"""

from datetime import date, datetime, timedelta
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo


ISO_DATE_FORMAT = '%Y-%m-%d'


@lru_cache(maxsize=8)
def _get_tz(tz_name):
    return ZoneInfo(tz_name)


def parse_date(value) -> Optional[date]:
    """Parse an ISO date string into a ``date``.

    ``None`` and empty strings map to ``None``; ``date`` instances pass through
    (``datetime`` values are truncated to their date).

    Raises:
        ValueError: If the string is not a valid YYYY-MM-DD date.
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def format_date(value: Optional[date]) -> Optional[str]:
    """Format a ``date`` as YYYY-MM-DD, or ``None``."""
    if value is None:
        return None
    return value.strftime(ISO_DATE_FORMAT)


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def diff_days(start: date, end: date) -> int:
    """Whole days from ``start`` to ``end`` (negative when end is earlier)."""
    return (end - start).days


def today_in_timezone(tz_name=None) -> date:
    """Return today's calendar date in the given IANA timezone.

    Args:
        tz_name: IANA timezone name. Falls back to the app's SCHEDULE_TIMEZONE,
            then UTC when no app context is active.
    """
    if tz_name is None:
        from flask import current_app, has_app_context
        tz_name = current_app.config.get('SCHEDULE_TIMEZONE', 'UTC') if has_app_context() else 'UTC'
    return datetime.now(_get_tz(tz_name)).date()
