"""Project-wide constants."""

from pathlib import Path

DATA_DIR = Path("data")
DB_EXT = "json"
META_EXT = "meta"
ID_FIELD = "id"
JSON_INDENT = 2
DEFAULT_META = {"current_id": 0, "rows": 0}
