"""
Exercise Store - Local state of one signed-in session with remote sync.

Mutations are applied to the in-memory record list and mirrored to
remote storage on a best-effort basis:

- add: remote insert first; on any failure a local-only record is kept
- update / delete: applied locally only after the remote call succeeded
- load: replaces local state with the remote rows; on failure local
  state is left as is

Remote failures, snapshot write errors and listener errors never
propagate to callers, they are logged. Without a signed-in user every
remote-backed operation is a silent no-op.

The store is single-owner and not locked: concurrent mutations on the
same record resolve as last write wins, in completion order.
"""
from datetime import date, datetime, timezone
from typing import Callable, List, Optional, Tuple

from fitlog.core.config import settings
from fitlog.core.logging import get_logger
from fitlog.models import (
    DEFAULT_EXERCISE_TYPES,
    Exercise,
    ExerciseCreate,
    ExerciseType,
    ExerciseTypeCreate,
    ExerciseUpdate,
    MonthlyStats,
    StoreSnapshot,
    StreakInfo,
    ViewWindow,
    WeeklyStats,
    generate_local_id,
    quick_add_minutes,
)
from fitlog.services.analytics import calculator, dates
from fitlog.services.remote import ExerciseRepository, IdentityProvider
from fitlog.services.store.cache import SnapshotCache

logger = get_logger(__name__)

Listener = Callable[["ExerciseStore"], None]


class ExerciseStore:
    """
    Authoritative in-memory records and exercise types.

    Usage:
        store = ExerciseStore(repository, identity, cache=SnapshotCache(path))
        unsubscribe = store.subscribe(lambda s: render(s.records))
        await store.load()
        await store.add(ExerciseCreate(date=..., type="Running", minutes=30, intensity=2))
        stats = store.weekly_stats(dates.iso_week_start(dates.today()))
    """

    def __init__(
        self,
        repository: ExerciseRepository,
        identity: IdentityProvider,
        cache: Optional[SnapshotCache] = None,
        weekly_goal: Optional[int] = None,
    ):
        self.repository = repository
        self.identity = identity
        self.cache = cache
        self.weekly_goal = weekly_goal if weekly_goal is not None else settings.WEEKLY_GOAL

        snapshot = (cache.load() if cache else None) or StoreSnapshot()
        self._records: List[Exercise] = list(snapshot.records)
        self._exercise_types: List[ExerciseType] = list(snapshot.exercise_types)
        self._view_window: ViewWindow = snapshot.view_window

        # Never restored: every session opens on today
        self._displayed_date: date = dates.today()
        self._loading = False
        self._listeners: List[Listener] = []

    # ========================================
    # State surface
    # ========================================

    @property
    def records(self) -> Tuple[Exercise, ...]:
        return tuple(self._records)

    @property
    def exercise_types(self) -> Tuple[ExerciseType, ...]:
        return tuple(self._exercise_types)

    @property
    def view_window(self) -> ViewWindow:
        return self._view_window

    @property
    def displayed_date(self) -> date:
        return self._displayed_date

    @property
    def loading(self) -> bool:
        return self._loading

    def snapshot(self) -> StoreSnapshot:
        """The persisted part of the state."""
        return StoreSnapshot(
            records=list(self._records),
            exercise_types=list(self._exercise_types),
            view_window=self._view_window,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called after every state change.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, persist: bool = True) -> None:
        # In-memory state is already updated; neither step may fail the command
        if persist and self.cache is not None:
            try:
                self.cache.save(self.snapshot())
            except OSError as e:
                logger.error(
                    "Failed to save snapshot",
                    path=str(self.cache.path),
                    error_type=type(e).__name__,
                    error=str(e),
                )
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as e:
                logger.error(
                    "Store listener failed",
                    listener=getattr(listener, "__qualname__", repr(listener)),
                    error_type=type(e).__name__,
                    error=str(e),
                )

    def _set_loading(self, loading: bool) -> None:
        self._loading = loading
        self._commit(persist=False)

    async def _user_id(self) -> Optional[str]:
        try:
            return await self.identity.get_user_id()
        except Exception as e:
            logger.warning("Identity lookup failed", error_type=type(e).__name__, error=str(e))
            return None

    # ========================================
    # Loading
    # ========================================

    async def load(self) -> None:
        """Refresh records and exercise types from remote storage."""
        await self.load_exercises()
        await self.load_exercise_types()

    async def load_exercises(self) -> bool:
        """
        Replace local records with the user's remote rows.

        Returns:
            True if local records were replaced
        """
        user_id = await self._user_id()
        if not user_id:
            logger.debug("No signed-in user, skipping exercise load")
            return False

        loaded = False
        self._set_loading(True)
        try:
            self._records = await self.repository.list_exercises(user_id)
            loaded = True
        except Exception as e:
            logger.error(
                "Failed to load exercises",
                user_id=user_id,
                error_type=type(e).__name__,
                error=str(e),
            )
        finally:
            self._loading = False
            self._commit(persist=loaded)

        if loaded:
            logger.info("Loaded exercises", user_id=user_id, count=len(self._records))
        return loaded

    async def load_exercise_types(self) -> bool:
        """Replace the type list with the built-ins plus the user's types."""
        user_id = await self._user_id()
        if not user_id:
            return False

        try:
            remote_types = await self.repository.list_exercise_types(user_id)
        except Exception as e:
            logger.error(
                "Failed to load exercise types",
                user_id=user_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            return False

        self._exercise_types = [*DEFAULT_EXERCISE_TYPES, *remote_types]
        self._commit()
        return True

    # ========================================
    # Commands
    # ========================================

    async def add(self, data: ExerciseCreate) -> Optional[Exercise]:
        """
        Log a workout.

        Args:
            data: Workout fields

        Returns:
            The appended record (remote or local-only), or None without a user
        """
        user_id = await self._user_id()
        if not user_id:
            logger.debug("No signed-in user, skipping add")
            return None

        try:
            record = await self.repository.insert_exercise(user_id, data)
        except Exception as e:
            record = Exercise(
                **data.model_dump(),
                id=generate_local_id(),
                created_at=datetime.now(timezone.utc),
            )
            logger.error(
                "Failed to save exercise remotely, keeping local copy",
                user_id=user_id,
                local_id=record.id,
                error_type=type(e).__name__,
                error=str(e),
            )

        self._records = [*self._records, record]
        self._commit()
        logger.info("Exercise added", record_id=record.id, local=record.is_local)
        return record

    async def quick_add(
        self,
        type_id: str,
        minutes: Optional[int] = None,
        day: Optional[date] = None,
    ) -> Optional[Exercise]:
        """
        Log a workout from an exercise type's defaults.

        Args:
            type_id: Id of a known exercise type
            minutes: Duration; defaults to the type's preset
            day: Calendar day; defaults to today

        Returns:
            Same as add()

        Raises:
            LookupError: If no exercise type has this id
        """
        exercise_type = self.find_exercise_type(type_id)
        if exercise_type is None:
            raise LookupError(f"Unknown exercise type: {type_id}")

        data = ExerciseCreate(
            date=day or dates.today(),
            type=exercise_type.name,
            minutes=minutes or quick_add_minutes(type_id),
            intensity=exercise_type.default_intensity,
        )
        return await self.add(data)

    async def update(self, exercise_id: str, changes: ExerciseUpdate) -> bool:
        """
        Update a record; dropped unless the remote update succeeds.

        Returns:
            True if the local record list was updated
        """
        user_id = await self._user_id()
        if not user_id:
            return False

        fields = changes.changes()
        try:
            await self.repository.update_exercise(user_id, exercise_id, fields)
        except Exception as e:
            logger.error(
                "Failed to update exercise",
                record_id=exercise_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            return False

        self._records = [
            record.model_copy(update=fields) if record.id == exercise_id else record
            for record in self._records
        ]
        self._commit()
        logger.info("Exercise updated", record_id=exercise_id, fields=sorted(fields))
        return True

    async def delete(self, exercise_id: str) -> bool:
        """
        Delete a record; kept locally unless the remote delete succeeds.

        Returns:
            True if the record was removed locally
        """
        user_id = await self._user_id()
        if not user_id:
            return False

        try:
            await self.repository.delete_exercise(user_id, exercise_id)
        except Exception as e:
            logger.error(
                "Failed to delete exercise",
                record_id=exercise_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            return False

        self._records = [record for record in self._records if record.id != exercise_id]
        self._commit()
        logger.info("Exercise deleted", record_id=exercise_id)
        return True

    async def add_exercise_type(self, data: ExerciseTypeCreate) -> Optional[ExerciseType]:
        """Append a user-defined type; kept locally if the remote insert fails."""
        user_id = await self._user_id()
        if not user_id:
            return None

        try:
            exercise_type = await self.repository.insert_exercise_type(user_id, data)
        except Exception as e:
            exercise_type = ExerciseType(**data.model_dump(), id=generate_local_id())
            logger.error(
                "Failed to save exercise type remotely, keeping local copy",
                name=data.name,
                error_type=type(e).__name__,
                error=str(e),
            )

        self._exercise_types = [*self._exercise_types, exercise_type]
        self._commit()
        return exercise_type

    def set_view_window(self, view_window: ViewWindow) -> None:
        self._view_window = view_window
        self._commit()

    def set_displayed_date(self, displayed_date: date) -> None:
        self._displayed_date = displayed_date
        self._commit(persist=False)

    # ========================================
    # Derived queries (no remote I/O)
    # ========================================

    def find(self, exercise_id: str) -> Optional[Exercise]:
        return next((record for record in self._records if record.id == exercise_id), None)

    def find_exercise_type(self, type_id: str) -> Optional[ExerciseType]:
        return next((t for t in self._exercise_types if t.id == type_id), None)

    def records_for_date(self, day: date) -> List[Exercise]:
        return calculator.records_for_date(self._records, day)

    def records_for_week(self, week_start: date) -> List[Exercise]:
        return calculator.records_for_week(self._records, week_start)

    def weekly_stats(self, week_start: date) -> WeeklyStats:
        return calculator.weekly_stats(self._records, week_start, goal=self.weekly_goal)

    def monthly_stats(self, year: int, month: int) -> MonthlyStats:
        return calculator.monthly_stats(self._records, year, month)

    def streak_info(self, today: Optional[date] = None) -> StreakInfo:
        return calculator.streak(self._records, today=today)

    def current_week_stats(self) -> WeeklyStats:
        """Stats of the week containing the displayed date."""
        return self.weekly_stats(dates.iso_week_start(self._displayed_date))

    def current_month_stats(self) -> MonthlyStats:
        return self.monthly_stats(self._displayed_date.year, self._displayed_date.month)

    def today_records(self) -> List[Exercise]:
        return self.records_for_date(dates.today())
