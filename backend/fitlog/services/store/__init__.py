"""
Store module - session state for the presentation layer.
"""
from fitlog.services.store.cache import SnapshotCache
from fitlog.services.store.exercise_store import ExerciseStore, Listener

__all__ = [
    "ExerciseStore",
    "Listener",
    "SnapshotCache",
]
