"""
Durable store snapshot.
"""
from typing import List

from pydantic import BaseModel, Field

from fitlog.models.exercise import (
    DEFAULT_EXERCISE_TYPES,
    Exercise,
    ExerciseType,
    ViewWindow,
)


class StoreSnapshot(BaseModel):
    """
    The part of the store state that survives a restart.

    The displayed calendar date is deliberately absent: every session
    opens on today.
    """
    records: List[Exercise] = Field(default_factory=list)
    exercise_types: List[ExerciseType] = Field(
        default_factory=lambda: list(DEFAULT_EXERCISE_TYPES)
    )
    view_window: ViewWindow = ViewWindow.WEEKLY
