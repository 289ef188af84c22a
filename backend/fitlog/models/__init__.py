from fitlog.models.exercise import (
    DEFAULT_EXERCISE_TYPES,
    Exercise,
    ExerciseCreate,
    ExerciseType,
    ExerciseTypeCreate,
    ExerciseUpdate,
    Intensity,
    ViewWindow,
    generate_local_id,
    quick_add_minutes,
)
from fitlog.models.state import StoreSnapshot
from fitlog.models.stats import MonthlyStats, StreakInfo, WeeklyStats

__all__ = [
    "DEFAULT_EXERCISE_TYPES",
    "Exercise",
    "ExerciseCreate",
    "ExerciseType",
    "ExerciseTypeCreate",
    "ExerciseUpdate",
    "Intensity",
    "ViewWindow",
    "generate_local_id",
    "quick_add_minutes",
    "StoreSnapshot",
    "MonthlyStats",
    "StreakInfo",
    "WeeklyStats",
]
