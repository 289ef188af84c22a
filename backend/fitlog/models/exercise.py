"""
Exercise record and exercise type models.
"""
import uuid
import datetime as dt
from enum import Enum, IntEnum
from typing import Optional

from pydantic import BaseModel, Field

LOCAL_ID_PREFIX = "local-"


def generate_local_id() -> str:
    """Id for records that never reached remote storage."""
    return f"{LOCAL_ID_PREFIX}{uuid.uuid4().hex}"


class Intensity(IntEnum):
    """Discrete workout intensity."""
    LOW = 1
    MEDIUM = 2
    HIGH = 3

    @property
    def label(self) -> str:
        return self.name.lower()


class ViewWindow(str, Enum):
    """Aggregation granularity shown by the presentation layer."""
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class ExerciseCreate(BaseModel):
    """Fields supplied by the user when logging a workout."""
    date: dt.date
    type: str
    minutes: int = Field(..., gt=0)
    intensity: Intensity
    memo: Optional[str] = None


class ExerciseUpdate(BaseModel):
    """Partial update; only fields explicitly set are applied."""
    date: Optional[dt.date] = None
    type: Optional[str] = None
    minutes: Optional[int] = Field(None, gt=0)
    intensity: Optional[Intensity] = None
    memo: Optional[str] = None

    def changes(self) -> dict:
        # memo is the only column that may be cleared
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None or key == "memo"
        }


class Exercise(ExerciseCreate):
    """Workout record held by the store."""
    id: str
    created_at: dt.datetime

    @property
    def is_local(self) -> bool:
        """True when the record only exists on this device."""
        return self.id.startswith(LOCAL_ID_PREFIX)


class ExerciseTypeCreate(BaseModel):
    name: str = Field(..., min_length=1)
    default_intensity: Intensity


class ExerciseType(ExerciseTypeCreate):
    id: str


# Always present, ahead of user-defined types
DEFAULT_EXERCISE_TYPES: tuple[ExerciseType, ...] = (
    ExerciseType(id="1", name="Running", default_intensity=Intensity.MEDIUM),
    ExerciseType(id="2", name="Weight Training", default_intensity=Intensity.HIGH),
    ExerciseType(id="3", name="Yoga", default_intensity=Intensity.LOW),
    ExerciseType(id="4", name="Cycling", default_intensity=Intensity.MEDIUM),
    ExerciseType(id="5", name="Swimming", default_intensity=Intensity.HIGH),
    ExerciseType(id="6", name="Walking", default_intensity=Intensity.LOW),
)

# Preset durations of the one-click actions, by built-in type id
QUICK_ADD_MINUTES = {"1": 30, "2": 60, "3": 45, "6": 20}
DEFAULT_QUICK_ADD_MINUTES = 30


def quick_add_minutes(type_id: str) -> int:
    return QUICK_ADD_MINUTES.get(type_id, DEFAULT_QUICK_ADD_MINUTES)
