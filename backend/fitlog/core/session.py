"""
Session store lifecycle.

One ExerciseStore is built per application instance and handed to
request handlers through the `get_store` dependency.
"""
from typing import Optional

import httpx
from fastapi import Request

from fitlog.core.config import settings
from fitlog.core.logging import get_logger
from fitlog.services.remote import (
    SupabaseExerciseRepository,
    SupabaseIdentity,
    build_http_client,
)
from fitlog.services.store import ExerciseStore, SnapshotCache

logger = get_logger(__name__)


def create_store(
    client: httpx.AsyncClient,
    access_token: Optional[str] = None,
    cache: Optional[SnapshotCache] = None,
) -> ExerciseStore:
    """Wire a store to the hosted backend."""
    return ExerciseStore(
        repository=SupabaseExerciseRepository(client, access_token=access_token),
        identity=SupabaseIdentity(client, access_token=access_token),
        cache=cache,
    )


async def init_store() -> tuple[ExerciseStore, httpx.AsyncClient]:
    """Build the application store and run the initial load."""
    client = build_http_client()
    store = create_store(
        client,
        access_token=settings.SUPABASE_ACCESS_TOKEN,
        cache=SnapshotCache(settings.CACHE_PATH),
    )
    if not settings.has_identity():
        logger.info("No session token configured, running on cached state")
    await store.load()
    return store, client


def get_store(request: Request) -> ExerciseStore:
    """FastAPI dependency returning the application store."""
    return request.app.state.store
