"""
Remote persistence contract.

The store talks to remote storage only through these interfaces, so
tests and alternative backends can stand in for the hosted table API.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from fitlog.models import Exercise, ExerciseCreate, ExerciseType, ExerciseTypeCreate


class RemoteError(RuntimeError):
    """Transport failure or non-success response from remote storage."""

    def __init__(self, message: str, status_code: Optional[int] = None, response_body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class RemoteDecodeError(RemoteError):
    """A remote row did not match the expected schema."""


class MissingIdentityError(RuntimeError):
    """A user-scoped call was made without a user id."""


class IdentityProvider(ABC):
    """Ambient identity lookup."""

    @abstractmethod
    async def get_user_id(self) -> Optional[str]:
        """Return the signed-in user's id, or None when nobody is signed in."""
        pass


class ExerciseRepository(ABC):
    """
    Row store for exercises and exercise types, scoped per user.

    Every method raises RemoteError (or a subclass) on failure.
    """

    @abstractmethod
    async def list_exercises(self, user_id: str) -> List[Exercise]:
        """All of the user's exercises, newest date first."""
        pass

    @abstractmethod
    async def insert_exercise(self, user_id: str, data: ExerciseCreate) -> Exercise:
        """Insert a row and return it with its assigned id and timestamp."""
        pass

    @abstractmethod
    async def update_exercise(self, user_id: str, exercise_id: str, changes: Dict[str, Any]) -> None:
        pass

    @abstractmethod
    async def delete_exercise(self, user_id: str, exercise_id: str) -> None:
        pass

    @abstractmethod
    async def list_exercise_types(self, user_id: str) -> List[ExerciseType]:
        pass

    @abstractmethod
    async def insert_exercise_type(self, user_id: str, data: ExerciseTypeCreate) -> ExerciseType:
        pass
