"""File helpers for table data and metadata."""

import json
import os
from pathlib import Path

from src.json_db.constants import JSON_INDENT


def load_json(filepath: Path, default: object = None) -> object:
    """Load a JSON document, return `default` if the file is missing or blank.

    Decoding and permission problems propagate to the caller.
    """
    try:
        with Path(filepath).open("r", encoding="utf-8") as file:
            text = file.read()
    except FileNotFoundError:
        return default

    if not text.strip():
        return default
    return json.loads(text)


def save_json(filepath: Path, data: object) -> None:
    """Write JSON through a temporary sibling file and swap it in place."""
    filepath = Path(filepath)
    tmp = filepath.with_name(filepath.name + ".tmp")
    try:
        with tmp.open("w", encoding="utf-8") as file:
            json.dump(data, file, ensure_ascii=False, indent=JSON_INDENT)
        os.replace(tmp, filepath)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


def table_path(directory: Path, name: str, extension: str) -> Path:
    """Build `<directory>/<name>.<extension>`."""
    return Path(directory) / f"{name}.{extension}"
