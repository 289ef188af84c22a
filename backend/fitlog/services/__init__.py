"""
Services module - Application business logic layer.

Modules:
- analytics: Calendar helpers and exercise statistics
- remote: Hosted table API adapter and identity lookup
- store: Exercise store with optimistic local state and remote sync
"""
from fitlog.services.store import ExerciseStore, SnapshotCache

__all__ = [
    "ExerciseStore",
    "SnapshotCache",
]
