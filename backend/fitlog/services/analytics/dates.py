"""
Calendar helpers for date-keyed exercise records.

Dates are plain calendar days (no time of day). Weeks follow ISO-8601
and start on Monday.
"""
import calendar
from datetime import date, timedelta
from typing import List, Optional

DATE_FORMAT = "%Y-%m-%d"

# Sunday-first, matching the weekly board layout
DAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def today() -> date:
    """Current local calendar day. The only clock read in this module."""
    return date.today()


def parse_date(value: str) -> date:
    """Parse a canonical YYYY-MM-DD string."""
    return date.fromisoformat(value)


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def format_short(value: date) -> str:
    """Compact board label, e.g. 3/7."""
    return f"{value.month}/{value.day}"


def iso_week_start(value: date) -> date:
    """Monday on or before the given day."""
    return value - timedelta(days=value.weekday())


def week_days(week_start: date) -> List[date]:
    """The 7 consecutive days starting at week_start."""
    return [week_start + timedelta(days=offset) for offset in range(7)]


def month_days(year: int, month: int) -> List[date]:
    """Every day of the month, ascending."""
    _, day_count = calendar.monthrange(year, month)
    return [date(year, month, day) for day in range(1, day_count + 1)]


def is_today(value: date, reference: Optional[date] = None) -> bool:
    return value == (reference or today())


def day_of_week_index(value: date) -> int:
    """0 = Sunday ... 6 = Saturday."""
    return (value.weekday() + 1) % 7


def day_of_week_label(value: date) -> str:
    return DAY_LABELS[day_of_week_index(value)]
