"""
Statistics API endpoints.
"""
import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from fitlog.core.session import get_store
from fitlog.models import MonthlyStats, StreakInfo, WeeklyStats
from fitlog.services.analytics import dates
from fitlog.services.store import ExerciseStore
from fitlog.api.records import RecordResponse

router = APIRouter()


class BoardDayResponse(BaseModel):
    """One column of the weekly board."""
    date: dt.date
    label: str
    shortDate: str
    isToday: bool
    records: list[RecordResponse]


class WeeklyBoardResponse(BaseModel):
    stats: WeeklyStats
    days: list[BoardDayResponse]


@router.get("/weekly", response_model=WeeklyStats)
async def get_weekly_stats(
    week_start: Optional[dt.date] = Query(None, description="Defaults to the week of the displayed date"),
    store: ExerciseStore = Depends(get_store),
):
    """Get completed days and minutes of one week."""
    if week_start is None:
        return store.current_week_stats()
    return store.weekly_stats(week_start)


@router.get("/monthly", response_model=MonthlyStats)
async def get_monthly_stats(
    year: Optional[int] = Query(None, ge=1, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    store: ExerciseStore = Depends(get_store),
):
    """Get completed days and minutes of one calendar month."""
    if year is None or month is None:
        return store.current_month_stats()
    return store.monthly_stats(year, month)


@router.get("/streak", response_model=StreakInfo)
async def get_streak(store: ExerciseStore = Depends(get_store)):
    """Get current and longest streak."""
    return store.streak_info()


@router.get("/board", response_model=WeeklyBoardResponse)
async def get_weekly_board(store: ExerciseStore = Depends(get_store)):
    """
    Get the weekly board for the displayed date.

    Days are listed Monday first; labels use the Sunday-first names.
    """
    week_start = dates.iso_week_start(store.displayed_date)
    today = dates.today()
    days = [
        BoardDayResponse(
            date=day,
            label=dates.day_of_week_label(day),
            shortDate=dates.format_short(day),
            isToday=dates.is_today(day, reference=today),
            records=[RecordResponse.from_record(record) for record in store.records_for_date(day)],
        )
        for day in dates.week_days(week_start)
    ]
    return WeeklyBoardResponse(stats=store.weekly_stats(week_start), days=days)
