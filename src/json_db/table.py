"""JSON file backed table."""

import json
import logging
import os
from collections.abc import Callable, Iterator, Mapping

from src.json_db.constants import DB_EXT, ID_FIELD, META_EXT
from src.json_db.decorators import log_time
from src.json_db.errors import (
    FileReadError,
    FileSystemError,
    FileWriteError,
    NameCollisionError,
)
from src.json_db.meta import Meta, SaveResult
from src.json_db.row import Collection, Row
from src.json_db.utils import load_json, save_json, table_path

logger = logging.getLogger(__name__)


class Table:
    """One named table: `<name>.json` rows plus `<name>.meta` counters.

    The whole table lives in memory. Changes reach the disk only through
    `save()`, which writes nothing unless the table is dirty.
    """

    def __init__(self, database, name: str) -> None:
        self.database = database
        self.name = name
        self.data_path = table_path(database.path, name, DB_EXT)
        self.meta_path = table_path(database.path, name, META_EXT)
        self.is_dirty = False
        self.last_error: FileWriteError | None = None

        self.meta = Meta(self.meta_path)
        self.data = Collection()
        self._load_all()

    @classmethod
    def open(cls, database, name: str) -> "Table":
        return cls(database, name)

    @log_time
    def _load_all(self) -> None:
        """Load every row from the data file.

        A missing data file is created empty. Anything unreadable raises
        FileReadError.
        """
        if not self.data_path.exists():
            try:
                save_json(self.data_path, [])
            except OSError as error:
                raise FileWriteError(
                    f'Table "{self.name}" could not be created: {error}'
                ) from error
            logger.info("Created empty table file %s", self.data_path)

        try:
            records = load_json(self.data_path, default=[])
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as error:
            raise FileReadError(
                f'Table "{self.name}" could not be read: {error}'
            ) from error

        if not isinstance(records, list) or not all(
            isinstance(record, dict) for record in records
        ):
            raise FileReadError(
                f'Table "{self.name}" is not a JSON array of objects.'
            )

        self.data.replace_all(
            Row(self, self.data, record, index)
            for index, record in enumerate(records)
        )
        self._reconcile_meta()
        logger.debug("Loaded table %s with %d rows", self.name, len(self.data))

    def _reconcile_meta(self) -> None:
        """Keep the id counter ahead of every id already on disk."""
        ids = [row.id for row in self.data if isinstance(row.id, int)]
        highest = max(ids, default=0)
        if highest > self.meta.current_id:
            logger.warning(
                "Table %s: metadata current_id %d is behind row id %d, adjusting",
                self.name,
                self.meta.current_id,
                highest,
            )
            self.meta.current_id = highest
            self.meta.rows = len(self.data)

    def all(self) -> Collection:
        """Return the underlying row collection."""
        return self.data

    def insert(self, *records: Mapping) -> "Table":
        """Append records, giving each a fresh id. Does not save."""
        for record in records:
            if not isinstance(record, Mapping):
                raise TypeError(
                    f"Table rows must be mappings, got {type(record).__name__}"
                )

        for record in records:
            row_id = self.meta.allocate_id()
            self.meta.increment_row_count()
            item = {**record, ID_FIELD: row_id}
            self.data.append(Row(self, self.data, item, len(self.data)))

        self.is_dirty = True
        return self

    def touch(self) -> None:
        """Mark the table dirty after editing rows in place."""
        self.is_dirty = True

    @log_time
    def save(self) -> SaveResult:
        """Persist rows and then metadata.

        Returns NOOP when nothing changed, SUCCESS when both files were
        written and FAILED otherwise. A failed save leaves the table dirty.
        """
        if not self.is_dirty:
            return SaveResult.NOOP

        try:
            save_json(self.data_path, self.data.to_array())
        except (OSError, TypeError, ValueError) as error:
            self.last_error = FileWriteError(
                f'Table "{self.name}" could not be written: {error}'
            )
            logger.warning("%s", self.last_error)
            return SaveResult.FAILED

        if self.meta.save() not in (SaveResult.SUCCESS, SaveResult.NOOP):
            self.last_error = FileWriteError(
                f'Metadata of table "{self.name}" could not be written.'
            )
            return SaveResult.FAILED

        self.is_dirty = False
        self.last_error = None
        logger.info("Saved table %s (%d rows)", self.name, len(self.data))
        return SaveResult.SUCCESS

    def size(self) -> int:
        """Return the data file size in bytes."""
        return os.stat(self.data_path).st_size

    def times(self) -> dict[str, float]:
        """Return creation, access and modification times of the data file."""
        stat = os.stat(self.data_path)
        return {
            "created": stat.st_ctime,
            "accessed": stat.st_atime,
            "modified": stat.st_mtime,
        }

    def rename(self, new_name: str) -> bool:
        """Rename both table files.

        The metadata file is moved on a best-effort basis: if that move
        fails the data file keeps its new name and the failure is only
        logged.
        """
        new_path = table_path(self.database.path, new_name, DB_EXT)
        new_meta_path = table_path(self.database.path, new_name, META_EXT)

        if new_path.exists():
            raise NameCollisionError(
                f"Because {new_name} is already in use, "
                f"{self.database.name}.{self.name} can not be renamed to {new_name}."
            )

        try:
            os.rename(self.data_path, new_path)
        except OSError as error:
            raise FileSystemError(
                f'Renaming table "{self.name}" failed: {error}'
            ) from error

        if not self.meta_path.exists():
            logger.debug("Table %s has no metadata file to move", self.name)
        else:
            try:
                os.rename(self.meta_path, new_meta_path)
            except OSError as error:
                logger.warning(
                    "Metadata of table %s was not moved to %s: %s",
                    self.name,
                    new_meta_path,
                    error,
                )

        logger.info("Renamed table %s to %s", self.name, new_name)
        self.name = new_name
        self.data_path = new_path
        self.meta_path = new_meta_path
        self.meta.path = new_meta_path
        return True

    # Re-exported collection operations.

    def to_array(self) -> list[dict]:
        return self.data.to_array()

    def length(self) -> int:
        return self.data.length()

    def map(self, callback: Callable) -> list:
        return self.data.map(callback)

    def filter(self, callback: Callable) -> Collection:
        return self.data.filter(callback)

    def find(self, callback: Callable) -> Row | None:
        return self.data.find(callback)

    def reduce(self, callback: Callable, initial: object = None) -> object:
        return self.data.reduce(callback, initial)

    def each(self, callback: Callable) -> None:
        self.data.each(callback)

    def some(self, callback: Callable) -> bool:
        return self.data.some(callback)

    def every(self, callback: Callable) -> bool:
        return self.data.every(callback)

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.data)

    def __repr__(self) -> str:
        return f"Table({self.name!r}, rows={len(self.data)}, dirty={self.is_dirty})"
