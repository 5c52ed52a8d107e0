"""Metadata store holding the id and row counters of one table."""

import json
import logging
from enum import Enum
from pathlib import Path

from src.json_db.constants import DEFAULT_META
from src.json_db.utils import load_json, save_json

logger = logging.getLogger(__name__)


class SaveResult(Enum):
    """Outcome of a save call."""

    NOOP = "noop"
    SUCCESS = "success"
    FAILED = "failed"


class Meta:
    """Counters persisted next to a table as `{"current_id": n, "rows": m}`."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.current_id = DEFAULT_META["current_id"]
        self.rows = DEFAULT_META["rows"]
        self.load()

    def load(self) -> None:
        """Read counters from disk, falling back to zeros.

        A missing, empty or unreadable file is a valid empty state.
        """
        self.current_id = DEFAULT_META["current_id"]
        self.rows = DEFAULT_META["rows"]

        try:
            data = load_json(self.path, default={})
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as error:
            logger.warning("Ignoring unreadable metadata %s: %s", self.path, error)
            return

        if not isinstance(data, dict):
            logger.warning("Ignoring malformed metadata %s", self.path)
            return

        current_id = data.get("current_id", 0)
        rows = data.get("rows", 0)
        if not _is_counter(current_id) or not _is_counter(rows):
            logger.warning("Ignoring malformed metadata %s", self.path)
            return

        self.current_id = current_id
        self.rows = rows

    def allocate_id(self) -> int:
        """Advance and return the id counter."""
        self.current_id += 1
        return self.current_id

    def increment_row_count(self) -> None:
        self.rows += 1

    def to_dict(self) -> dict[str, int]:
        return {"current_id": self.current_id, "rows": self.rows}

    def save(self) -> SaveResult:
        """Write the counters. There is no dirty tracking here: always writes."""
        try:
            save_json(self.path, self.to_dict())
        except OSError as error:
            logger.warning("Failed to write metadata %s: %s", self.path, error)
            return SaveResult.FAILED
        return SaveResult.SUCCESS

    def __repr__(self) -> str:
        return f"Meta(current_id={self.current_id}, rows={self.rows})"


def _is_counter(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0
