"""
Exercise analytics - weekly, monthly and streak figures.

All functions are pure: they take the full record list and a window,
and recompute from scratch on every call. A completed day is a calendar
day with at least one record; several records on one day count once
toward days but every record counts toward minutes.
"""
from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence, Set

from fitlog.models import Exercise, MonthlyStats, StreakInfo, WeeklyStats
from fitlog.services.analytics import dates

WEEKLY_GOAL = 5


def records_for_date(records: Iterable[Exercise], day: date) -> List[Exercise]:
    """Records logged on one calendar day."""
    return [record for record in records if record.date == day]


def records_for_week(records: Iterable[Exercise], week_start: date) -> List[Exercise]:
    """Records in the 7 days starting at week_start."""
    days = set(dates.week_days(week_start))
    return [record for record in records if record.date in days]


def _completed_days(records: Iterable[Exercise]) -> Set[date]:
    return {record.date for record in records}


def _total_minutes(records: Iterable[Exercise]) -> int:
    return sum(record.minutes for record in records)


def weekly_stats(
    records: Iterable[Exercise],
    week_start: date,
    goal: int = WEEKLY_GOAL,
) -> WeeklyStats:
    """
    Aggregate one week.

    Args:
        records: Full record list
        week_start: First day of the window (normally a Monday)
        goal: Completed-days target reported alongside

    Returns:
        WeeklyStats for the 7-day window
    """
    in_week = records_for_week(records, week_start)
    return WeeklyStats(
        week_start=week_start,
        completed_days=len(_completed_days(in_week)),
        total_minutes=_total_minutes(in_week),
        goal=goal,
    )


def monthly_stats(records: Iterable[Exercise], year: int, month: int) -> MonthlyStats:
    """Aggregate one calendar month."""
    days = dates.month_days(year, month)
    in_month = [record for record in records if record.date.year == year and record.date.month == month]
    return MonthlyStats(
        year=year,
        month=month,
        completed_days=len(_completed_days(in_month)),
        total_minutes=_total_minutes(in_month),
        total_days=len(days),
    )


def _current_streak(active_days: Set[date], today: date) -> int:
    # today itself must be active, yesterday alone does not count
    streak = 0
    day = today
    while day in active_days:
        streak += 1
        day -= timedelta(days=1)
    return streak


def _longest_run(active_days: Sequence[date]) -> int:
    """Longest run of consecutive days in a descending date list."""
    if not active_days:
        return 0
    longest = run = 1
    for newer, older in zip(active_days, active_days[1:]):
        if (newer - older).days == 1:
            run += 1
            longest = max(longest, run)
        else:
            run = 1
    return longest


def streak(records: Iterable[Exercise], today: Optional[date] = None) -> StreakInfo:
    """
    Compute current and longest streaks.

    The clock is read once per call; pass `today` to pin it.

    Args:
        records: Full record list
        today: Reference day for the current streak

    Returns:
        StreakInfo with current, longest and the reference day
    """
    today = today or dates.today()
    active_days = _completed_days(records)

    if not active_days:
        return StreakInfo(current=0, longest=0, last_updated=today)

    current = _current_streak(active_days, today)
    longest = _longest_run(sorted(active_days, reverse=True))

    return StreakInfo(
        current=current,
        longest=max(longest, current),
        last_updated=today,
    )
