"""
Derived statistics models.

None of these are stored; they are recomputed from the record list
on every read.
"""
import datetime as dt

from pydantic import BaseModel, computed_field


def _ratio(part: int, whole: int, scale: int = 1) -> int:
    # Half rounds up, counts are never negative
    if whole <= 0:
        return 0
    return int(part * scale / whole + 0.5)


class WeeklyStats(BaseModel):
    """Aggregates for one ISO week (Monday through Sunday)."""
    week_start: dt.date
    completed_days: int
    total_minutes: int
    goal: int

    @computed_field
    @property
    def goal_reached(self) -> bool:
        return self.completed_days >= self.goal

    @computed_field
    @property
    def remaining_days(self) -> int:
        """Completed days still missing to reach the goal."""
        return max(self.goal - self.completed_days, 0)

    @computed_field
    @property
    def completion_rate(self) -> int:
        """Goal progress in percent; exceeds 100 past the goal."""
        return _ratio(self.completed_days, self.goal, scale=100)

    @computed_field
    @property
    def average_minutes(self) -> int:
        """Minutes per completed day."""
        return _ratio(self.total_minutes, self.completed_days)


class MonthlyStats(BaseModel):
    """Aggregates for one calendar month."""
    year: int
    month: int
    completed_days: int
    total_minutes: int
    total_days: int

    @computed_field
    @property
    def completion_rate(self) -> int:
        """Share of the month's days with a workout, in percent."""
        return _ratio(self.completed_days, self.total_days, scale=100)

    @computed_field
    @property
    def average_minutes(self) -> int:
        return _ratio(self.total_minutes, self.completed_days)


class StreakInfo(BaseModel):
    current: int
    longest: int
    last_updated: dt.date
