"""
Row schemas of the hosted tables.

Rows coming back from the wire are parsed against these models before
they reach the store; anything that does not fit is rejected with
RemoteDecodeError instead of being trusted.
"""
import datetime as dt
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fitlog.models import (
    Exercise,
    ExerciseCreate,
    ExerciseType,
    ExerciseTypeCreate,
    Intensity,
)
from fitlog.services.remote.base import RemoteDecodeError

EXERCISES_TABLE = "exercises"
EXERCISE_TYPES_TABLE = "exercise_types"


class ExerciseRow(BaseModel):
    """exercises: id, user_id, date, type, minutes, intensity, memo, created_at"""
    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str
    date: dt.date
    type: str
    minutes: int = Field(..., gt=0)
    intensity: Intensity
    memo: Optional[str] = None
    created_at: dt.datetime

    def to_exercise(self) -> Exercise:
        return Exercise(
            id=self.id,
            date=self.date,
            type=self.type,
            minutes=self.minutes,
            intensity=self.intensity,
            memo=self.memo or None,
            created_at=self.created_at,
        )


class ExerciseTypeRow(BaseModel):
    """exercise_types: id, user_id, name, default_intensity, created_at"""
    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str
    name: str
    default_intensity: Intensity
    created_at: Optional[dt.datetime] = None

    def to_exercise_type(self) -> ExerciseType:
        return ExerciseType(
            id=self.id,
            name=self.name,
            default_intensity=self.default_intensity,
        )


def decode_exercise(raw: Any) -> Exercise:
    """Parse one exercises row or raise RemoteDecodeError."""
    try:
        return ExerciseRow.model_validate(raw).to_exercise()
    except ValidationError as e:
        raise RemoteDecodeError(
            f"Malformed {EXERCISES_TABLE} row: {e.error_count()} error(s)",
            response_body=raw,
        ) from e


def decode_exercise_type(raw: Any) -> ExerciseType:
    """Parse one exercise_types row or raise RemoteDecodeError."""
    try:
        return ExerciseTypeRow.model_validate(raw).to_exercise_type()
    except ValidationError as e:
        raise RemoteDecodeError(
            f"Malformed {EXERCISE_TYPES_TABLE} row: {e.error_count()} error(s)",
            response_body=raw,
        ) from e


def decode_rows(raw: Any, table: str) -> List[Dict[str, Any]]:
    """Check that a response body is a list of row objects."""
    if not isinstance(raw, list) or not all(isinstance(row, dict) for row in raw):
        raise RemoteDecodeError(f"Expected a list of {table} rows", response_body=raw)
    return raw


def decode_single_row(raw: Any, table: str) -> Dict[str, Any]:
    """Insert responses come back as a one-element list."""
    rows = decode_rows(raw, table)
    if len(rows) != 1:
        raise RemoteDecodeError(
            f"Expected exactly one {table} row, got {len(rows)}",
            response_body=raw,
        )
    return rows[0]


def exercise_insert(user_id: str, data: ExerciseCreate) -> Dict[str, Any]:
    """Insert payload for the exercises table."""
    return {
        "user_id": user_id,
        "date": data.date.isoformat(),
        "type": data.type,
        "minutes": data.minutes,
        "intensity": int(data.intensity),
        "memo": data.memo,
    }


def exercise_update(changes: Dict[str, Any]) -> Dict[str, Any]:
    """Update payload; only the mutable columns are sent."""
    payload: Dict[str, Any] = {}
    for key in ("date", "type", "minutes", "intensity", "memo"):
        if key not in changes:
            continue
        value = changes[key]
        if isinstance(value, dt.date):
            value = value.isoformat()
        elif isinstance(value, Intensity):
            value = int(value)
        payload[key] = value
    return payload


def exercise_type_insert(user_id: str, data: ExerciseTypeCreate) -> Dict[str, Any]:
    return {
        "user_id": user_id,
        "name": data.name,
        "default_intensity": int(data.default_intensity),
    }
