"""
Supabase Service - Hosted table API and identity lookup over httpx.

Tables are reached through the PostgREST endpoint (`/rest/v1/<table>`),
the signed-in user through the auth endpoint (`/auth/v1/user`). Every
table call is scoped by `user_id`.
"""
from typing import Any, Dict, List, Optional

import httpx

from fitlog.core.config import settings
from fitlog.core.logging import get_logger, track_remote_call
from fitlog.models import Exercise, ExerciseCreate, ExerciseType, ExerciseTypeCreate
from fitlog.services.remote.base import (
    ExerciseRepository,
    IdentityProvider,
    MissingIdentityError,
    RemoteError,
)
from fitlog.services.remote.rows import (
    EXERCISE_TYPES_TABLE,
    EXERCISES_TABLE,
    decode_exercise,
    decode_exercise_type,
    decode_rows,
    decode_single_row,
    exercise_insert,
    exercise_type_insert,
    exercise_update,
)

logger = get_logger(__name__)


def build_http_client(
    base_url: Optional[str] = None,
    api_key: Optional[str] = None,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create the shared HTTP client for the hosted backend.

    Args:
        base_url: Project URL, defaults to SUPABASE_URL
        api_key: Project API key, defaults to SUPABASE_ANON_KEY
        timeout: Transport timeout in seconds
        transport: Optional transport override (tests use httpx.MockTransport)
    """
    return httpx.AsyncClient(
        base_url=(base_url or settings.SUPABASE_URL).rstrip("/"),
        headers={"apikey": api_key if api_key is not None else settings.SUPABASE_ANON_KEY},
        timeout=timeout or settings.REMOTE_TIMEOUT_SECONDS,
        transport=transport,
    )


def _bearer(token: Optional[str], api_key: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token or api_key}"}


class SupabaseIdentity(IdentityProvider):
    """Resolve the signed-in user from a session access token."""

    def __init__(self, client: httpx.AsyncClient, access_token: Optional[str] = None):
        self.client = client
        self.access_token = access_token

    async def get_user_id(self) -> Optional[str]:
        if not self.access_token:
            return None

        try:
            response = await self.client.get(
                "/auth/v1/user",
                headers={"Authorization": f"Bearer {self.access_token}"},
            )
        except httpx.HTTPError as e:
            logger.warning("Identity lookup failed", error_type=type(e).__name__, error=str(e))
            return None

        if response.status_code in (401, 403):
            logger.info("Session token rejected", status_code=response.status_code)
            return None
        if response.is_error:
            logger.warning("Identity lookup failed", status_code=response.status_code)
            return None

        try:
            user_id = response.json().get("id")
        except (ValueError, AttributeError):
            logger.warning("Identity response was not a user object")
            return None

        return str(user_id) if user_id else None


class SupabaseExerciseRepository(ExerciseRepository):
    """
    Exercise tables on the hosted backend.

    Usage:
        client = build_http_client()
        repo = SupabaseExerciseRepository(client, access_token=token)
        rows = await repo.list_exercises(user_id)
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        access_token: Optional[str] = None,
        api_key: Optional[str] = None,
    ):
        self.client = client
        self.access_token = access_token
        self.api_key = api_key if api_key is not None else settings.SUPABASE_ANON_KEY

    async def _request(
        self,
        method: str,
        table: str,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
        returning: bool = False,
    ) -> Any:
        headers = _bearer(self.access_token, self.api_key)
        if returning:
            headers["Prefer"] = "return=representation"

        try:
            response = await self.client.request(
                method,
                f"/rest/v1/{table}",
                params=params,
                json=json,
                headers=headers,
            )
        except httpx.HTTPError as e:
            raise RemoteError(f"{method} {table} failed: {e}") from e

        if response.is_error:
            try:
                body: Any = response.json()
            except ValueError:
                body = response.text
            raise RemoteError(
                f"{method} {table} failed with status {response.status_code}",
                status_code=response.status_code,
                response_body=body,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RemoteError(f"{method} {table} returned invalid JSON") from e

    @staticmethod
    def _require_user(user_id: str) -> str:
        if not user_id:
            raise MissingIdentityError("A user id is required for remote table access")
        return user_id

    async def list_exercises(self, user_id: str) -> List[Exercise]:
        user_id = self._require_user(user_id)
        with track_remote_call(logger, EXERCISES_TABLE, "select", user_id=user_id):
            raw = await self._request(
                "GET",
                EXERCISES_TABLE,
                params={"select": "*", "user_id": f"eq.{user_id}", "order": "date.desc"},
            )
            return [decode_exercise(row) for row in decode_rows(raw, EXERCISES_TABLE)]

    async def insert_exercise(self, user_id: str, data: ExerciseCreate) -> Exercise:
        user_id = self._require_user(user_id)
        with track_remote_call(logger, EXERCISES_TABLE, "insert", user_id=user_id):
            raw = await self._request(
                "POST",
                EXERCISES_TABLE,
                json=exercise_insert(user_id, data),
                returning=True,
            )
            return decode_exercise(decode_single_row(raw, EXERCISES_TABLE))

    async def update_exercise(self, user_id: str, exercise_id: str, changes: Dict[str, Any]) -> None:
        user_id = self._require_user(user_id)
        with track_remote_call(logger, EXERCISES_TABLE, "update", user_id=user_id, record_id=exercise_id):
            await self._request(
                "PATCH",
                EXERCISES_TABLE,
                params={"id": f"eq.{exercise_id}", "user_id": f"eq.{user_id}"},
                json=exercise_update(changes),
            )

    async def delete_exercise(self, user_id: str, exercise_id: str) -> None:
        user_id = self._require_user(user_id)
        with track_remote_call(logger, EXERCISES_TABLE, "delete", user_id=user_id, record_id=exercise_id):
            await self._request(
                "DELETE",
                EXERCISES_TABLE,
                params={"id": f"eq.{exercise_id}", "user_id": f"eq.{user_id}"},
            )

    async def list_exercise_types(self, user_id: str) -> List[ExerciseType]:
        user_id = self._require_user(user_id)
        with track_remote_call(logger, EXERCISE_TYPES_TABLE, "select", user_id=user_id):
            raw = await self._request(
                "GET",
                EXERCISE_TYPES_TABLE,
                params={"select": "*", "user_id": f"eq.{user_id}"},
            )
            return [decode_exercise_type(row) for row in decode_rows(raw, EXERCISE_TYPES_TABLE)]

    async def insert_exercise_type(self, user_id: str, data: ExerciseTypeCreate) -> ExerciseType:
        user_id = self._require_user(user_id)
        with track_remote_call(logger, EXERCISE_TYPES_TABLE, "insert", user_id=user_id):
            raw = await self._request(
                "POST",
                EXERCISE_TYPES_TABLE,
                json=exercise_type_insert(user_id, data),
                returning=True,
            )
            return decode_exercise_type(decode_single_row(raw, EXERCISE_TYPES_TABLE))
