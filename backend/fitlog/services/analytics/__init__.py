"""
Analytics module - calendar helpers and exercise statistics.

This module provides:
- Calendar helpers for ISO weeks, months and day labels
- Weekly and monthly aggregates over the record list
- Current and longest streak computation
"""
from fitlog.services.analytics import dates
from fitlog.services.analytics.calculator import (
    WEEKLY_GOAL,
    monthly_stats,
    records_for_date,
    records_for_week,
    streak,
    weekly_stats,
)

__all__ = [
    "dates",
    "WEEKLY_GOAL",
    "monthly_stats",
    "records_for_date",
    "records_for_week",
    "streak",
    "weekly_stats",
]
