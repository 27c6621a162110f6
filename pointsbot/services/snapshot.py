"""
Read-only points snapshot loaded from a JSON export.

The file holds either a list of rows or {"participants": [rows]}, each row in
the export shape {"id", "name", "points", "updatedAt"}. The file is re-read
only when its modification time changes.
"""

import json
import threading
from pathlib import Path
from typing import Optional, Tuple, Union

from pointsbot.data_models.points import PointRecord
from pointsbot.utils.exceptions import SnapshotFormatError
from pointsbot.utils.logger import setup_logger

logger = setup_logger(__name__)

class JsonSnapshotSource:
    """Loads PointRecords from a JSON file, reloading on change."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._records: Tuple[PointRecord, ...] = ()
        self._mtime: Optional[float] = None

    def load(self) -> Tuple[PointRecord, ...]:
        """Return the current snapshot, reading the file if it changed."""
        self.refresh()
        return self._records

    def refresh(self) -> bool:
        """
        Re-read the file if its mtime moved.

        Returns:
            True if a new snapshot was loaded

        Raises:
            SnapshotFormatError: If the file is missing or malformed
        """
        with self._lock:
            try:
                mtime = self.path.stat().st_mtime
            except OSError as e:
                raise SnapshotFormatError(str(self.path), f"cannot stat file: {e}") from e

            if self._mtime is not None and mtime == self._mtime:
                return False

            self._records = self._read()
            self._mtime = mtime
            logger.info(f"Loaded {len(self._records)} participants from {self.path}")
            return True

    def _read(self) -> Tuple[PointRecord, ...]:
        try:
            with self.path.open(encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SnapshotFormatError(str(self.path), str(e)) from e

        if isinstance(data, dict):
            data = data.get('participants')
        if not isinstance(data, list):
            raise SnapshotFormatError(str(self.path), "expected a list of participants")

        return tuple(PointRecord.from_dict(row) for row in data)
