"""
Session state API endpoints.
"""
import datetime as dt

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from fitlog.core.logging import get_logger
from fitlog.core.session import get_store
from fitlog.models import ViewWindow
from fitlog.services.store import ExerciseStore

logger = get_logger(__name__)
router = APIRouter()


class StateResponse(BaseModel):
    viewWindow: ViewWindow
    displayedDate: dt.date
    loading: bool
    recordCount: int
    localRecordCount: int
    exerciseTypeCount: int

    @classmethod
    def from_store(cls, store: ExerciseStore) -> "StateResponse":
        records = store.records
        return cls(
            viewWindow=store.view_window,
            displayedDate=store.displayed_date,
            loading=store.loading,
            recordCount=len(records),
            localRecordCount=sum(1 for record in records if record.is_local),
            exerciseTypeCount=len(store.exercise_types),
        )


class ViewWindowRequest(BaseModel):
    viewWindow: ViewWindow


class DisplayedDateRequest(BaseModel):
    displayedDate: dt.date


@router.get("", response_model=StateResponse)
async def get_state(store: ExerciseStore = Depends(get_store)):
    """Get view selection and record counts."""
    return StateResponse.from_store(store)


@router.post("/refresh", response_model=StateResponse)
async def refresh_state(store: ExerciseStore = Depends(get_store)):
    """Reload records and exercise types from remote storage."""
    logger.info("Refreshing from remote storage")
    await store.load()
    return StateResponse.from_store(store)


@router.put("/view-window", response_model=StateResponse)
async def set_view_window(
    request: ViewWindowRequest,
    store: ExerciseStore = Depends(get_store),
):
    store.set_view_window(request.viewWindow)
    return StateResponse.from_store(store)


@router.put("/displayed-date", response_model=StateResponse)
async def set_displayed_date(
    request: DisplayedDateRequest,
    store: ExerciseStore = Depends(get_store),
):
    store.set_displayed_date(request.displayedDate)
    return StateResponse.from_store(store)
