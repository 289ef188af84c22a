"""
Snapshot Cache - Durable copy of the store state between sessions.
"""
import os
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from fitlog.core.logging import get_logger
from fitlog.models import StoreSnapshot

logger = get_logger(__name__)


class SnapshotCache:
    """
    JSON file holding the last saved StoreSnapshot.

    A missing or unreadable file means "no snapshot"; the store then
    starts from defaults.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Optional[StoreSnapshot]:
        if not self.path.exists():
            return None

        raw = self.path.read_text(encoding="utf-8").strip()
        if not raw:
            return None

        try:
            snapshot = StoreSnapshot.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(
                "Ignoring unreadable snapshot cache",
                path=str(self.path),
                error_count=e.error_count(),
            )
            return None

        logger.debug(
            "Restored snapshot",
            path=str(self.path),
            records=len(snapshot.records),
            exercise_types=len(snapshot.exercise_types),
        )
        return snapshot

    def save(self, snapshot: StoreSnapshot) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(snapshot.model_dump_json(indent=2) + "\n", encoding="utf-8")
        os.replace(tmp_path, self.path)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
