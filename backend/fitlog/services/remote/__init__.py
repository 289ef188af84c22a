"""
Remote module - persistence and identity on the hosted backend.

Provides:
- ExerciseRepository / IdentityProvider contracts
- Row schemas with parse-or-reject decoding
- httpx implementations against the hosted table API
"""
from fitlog.services.remote.base import (
    ExerciseRepository,
    IdentityProvider,
    MissingIdentityError,
    RemoteDecodeError,
    RemoteError,
)
from fitlog.services.remote.supabase import (
    SupabaseExerciseRepository,
    SupabaseIdentity,
    build_http_client,
)

__all__ = [
    "ExerciseRepository",
    "IdentityProvider",
    "MissingIdentityError",
    "RemoteDecodeError",
    "RemoteError",
    "SupabaseExerciseRepository",
    "SupabaseIdentity",
    "build_http_client",
]
