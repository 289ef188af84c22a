"""
Exercise Records API endpoints.
"""
import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import BaseModel, Field

from fitlog.core.logging import get_logger
from fitlog.core.session import get_store
from fitlog.models import (
    Exercise,
    ExerciseCreate,
    ExerciseType,
    ExerciseTypeCreate,
    ExerciseUpdate,
    Intensity,
)
from fitlog.services.store import ExerciseStore

logger = get_logger(__name__)
router = APIRouter()

MAX_MINUTES = 600


def _clean_memo(memo: Optional[str]) -> Optional[str]:
    return (memo or "").strip() or None


# ========================================
# Request/Response Schemas
# ========================================

class CreateRecordRequest(BaseModel):
    """Request to log a workout."""
    date: dt.date = Field(..., description="Calendar day, YYYY-MM-DD")
    type: str = Field(..., min_length=1, description="Exercise type name")
    minutes: int = Field(..., ge=1, le=MAX_MINUTES)
    intensity: Intensity
    memo: Optional[str] = None

    def to_create(self) -> ExerciseCreate:
        return ExerciseCreate(
            date=self.date,
            type=self.type,
            minutes=self.minutes,
            intensity=self.intensity,
            memo=_clean_memo(self.memo),
        )


class UpdateRecordRequest(BaseModel):
    """Request to update a workout; omitted fields are left alone."""
    date: Optional[dt.date] = None
    type: Optional[str] = Field(None, min_length=1)
    minutes: Optional[int] = Field(None, ge=1, le=MAX_MINUTES)
    intensity: Optional[Intensity] = None
    memo: Optional[str] = None

    def to_update(self) -> ExerciseUpdate:
        fields = self.model_dump(exclude_unset=True)
        if "memo" in fields:
            fields["memo"] = _clean_memo(fields["memo"])
        return ExerciseUpdate(**fields)


class QuickAddRequest(BaseModel):
    """Request to log a workout from an exercise type's defaults."""
    typeId: str = Field(..., min_length=1)
    minutes: Optional[int] = Field(None, ge=1, le=MAX_MINUTES, description="Defaults to the type's preset")
    date: Optional[dt.date] = Field(None, description="Defaults to today")


class RecordResponse(BaseModel):
    """Exercise record response."""
    id: str
    date: dt.date
    type: str
    minutes: int
    intensity: Intensity
    memo: Optional[str]
    createdAt: dt.datetime
    local: bool

    @classmethod
    def from_record(cls, record: Exercise) -> "RecordResponse":
        return cls(
            id=record.id,
            date=record.date,
            type=record.type,
            minutes=record.minutes,
            intensity=record.intensity,
            memo=record.memo,
            createdAt=record.created_at,
            local=record.is_local,
        )


class SyncResultResponse(BaseModel):
    """Outcome of a remote-backed command."""
    applied: bool


# ========================================
# API Endpoints
# ========================================

@router.get("/records", response_model=list[RecordResponse])
async def list_records(
    date: Optional[dt.date] = Query(None, description="Only records of this day"),
    store: ExerciseStore = Depends(get_store),
):
    """
    Get all exercise records, or those of a single day.
    """
    records = store.records_for_date(date) if date else store.records
    return [RecordResponse.from_record(record) for record in records]


@router.get("/records/week/{week_start}", response_model=list[RecordResponse])
async def list_week_records(
    week_start: dt.date,
    store: ExerciseStore = Depends(get_store),
):
    """
    Get the records of the 7 days starting at week_start.
    """
    return [RecordResponse.from_record(record) for record in store.records_for_week(week_start)]


@router.get("/records/{record_id}", response_model=RecordResponse)
async def get_record(
    record_id: str,
    store: ExerciseStore = Depends(get_store),
):
    """
    Get a specific exercise record by ID.
    """
    record = store.find(record_id)
    if not record:
        raise HTTPException(status_code=404, detail="Record not found")
    return RecordResponse.from_record(record)


@router.post("/records", response_model=Optional[RecordResponse])
async def create_record(
    request: CreateRecordRequest,
    response: Response,
    store: ExerciseStore = Depends(get_store),
):
    """
    Log a workout.

    The record is kept locally even if remote storage is unreachable.
    Without a signed-in user nothing is recorded and the body is null.
    """
    record = await store.add(request.to_create())
    if record is None:
        response.status_code = 202
        return None
    return RecordResponse.from_record(record)


@router.post("/records/quick", response_model=Optional[RecordResponse])
async def quick_add_record(
    request: QuickAddRequest,
    response: Response,
    store: ExerciseStore = Depends(get_store),
):
    """
    Log a workout with the type's default intensity and preset minutes.
    """
    if store.find_exercise_type(request.typeId) is None:
        raise HTTPException(status_code=404, detail="Exercise type not found")

    record = await store.quick_add(request.typeId, minutes=request.minutes, day=request.date)
    if record is None:
        response.status_code = 202
        return None
    return RecordResponse.from_record(record)


@router.patch("/records/{record_id}", response_model=SyncResultResponse)
async def update_record(
    record_id: str,
    request: UpdateRecordRequest,
    store: ExerciseStore = Depends(get_store),
):
    """
    Update an exercise record.
    """
    applied = await store.update(record_id, request.to_update())
    return SyncResultResponse(applied=applied)


@router.delete("/records/{record_id}", response_model=SyncResultResponse)
async def delete_record(
    record_id: str,
    store: ExerciseStore = Depends(get_store),
):
    """
    Delete an exercise record.
    """
    applied = await store.delete(record_id)
    return SyncResultResponse(applied=applied)


@router.get("/exercise-types", response_model=list[ExerciseType])
async def list_exercise_types(store: ExerciseStore = Depends(get_store)):
    """
    Get built-in and user-defined exercise types.
    """
    return list(store.exercise_types)


@router.post("/exercise-types", response_model=Optional[ExerciseType])
async def create_exercise_type(
    request: ExerciseTypeCreate,
    response: Response,
    store: ExerciseStore = Depends(get_store),
):
    """
    Add a user-defined exercise type.
    """
    exercise_type = await store.add_exercise_type(request)
    if exercise_type is None:
        response.status_code = 202
    return exercise_type
