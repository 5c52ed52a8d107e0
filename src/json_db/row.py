"""Rows and the ordered collection a table keeps them in."""

import weakref
from collections.abc import Callable, Iterable, Iterator, Mapping, MutableMapping

from src.json_db.constants import ID_FIELD


class Row(MutableMapping):
    """A single record of a table.

    Holds the field mapping plus weak references to the owning table and
    collection, so rows never keep a table alive. The `id` field cannot be
    changed or removed once set.
    """

    def __init__(self, table, collection, data: Mapping, index: int) -> None:
        if not isinstance(data, Mapping):
            raise TypeError(f"Row data must be a mapping, got {type(data).__name__}")
        self._fields: dict = dict(data)
        self.index = index
        self._table_ref = _weak(table)
        self._collection_ref = _weak(collection)

    def bind(self, collection: "Collection", index: int) -> None:
        """Attach the row to `collection` at position `index`."""
        self._collection_ref = _weak(collection)
        self.index = index

    @property
    def table(self):
        return self._table_ref() if self._table_ref else None

    @property
    def collection(self):
        return self._collection_ref() if self._collection_ref else None

    @property
    def id(self) -> int | None:
        return self._fields.get(ID_FIELD)

    def __getitem__(self, field: str) -> object:
        return self._fields[field]

    def __setitem__(self, field: str, value: object) -> None:
        if field == ID_FIELD and ID_FIELD in self._fields:
            raise ValueError("Row id cannot be changed.")
        self._fields[field] = value

    def __delitem__(self, field: str) -> None:
        if field == ID_FIELD:
            raise ValueError("Row id cannot be removed.")
        del self._fields[field]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def to_value(self) -> dict:
        """Return the plain field mapping, ready for JSON encoding."""
        return dict(self._fields)

    def __repr__(self) -> str:
        return f"Row(index={self.index}, {self._fields!r})"


class Collection:
    """Ordered, insertion-order preserving container of rows.

    Query helpers take callbacks called as `callback(row, index)` and never
    modify the collection they are called on.
    """

    def __init__(self, rows: Iterable[Row] = ()) -> None:
        self._rows: list[Row] = list(rows)

    def append(self, row: Row) -> None:
        self._rows.append(row)

    def replace_all(self, rows: Iterable[Row]) -> None:
        """Swap in new rows, re-binding each to this collection in order."""
        self._rows = list(rows)
        for index, row in enumerate(self._rows):
            row.bind(self, index)

    def length(self) -> int:
        return len(self._rows)

    def to_array(self) -> list[dict]:
        return [row.to_value() for row in self._rows]

    def map(self, callback: Callable) -> list:
        return [callback(row, index) for index, row in enumerate(self._rows)]

    def filter(self, callback: Callable) -> "Collection":
        """Return a new collection of matching rows.

        The result is a view: rows keep their owning collection and index.
        """
        return Collection(
            row for index, row in enumerate(self._rows) if callback(row, index)
        )

    def find(self, callback: Callable) -> Row | None:
        for index, row in enumerate(self._rows):
            if callback(row, index):
                return row
        return None

    def reduce(self, callback: Callable, initial: object = None) -> object:
        accumulator = initial
        for index, row in enumerate(self._rows):
            accumulator = callback(accumulator, row, index)
        return accumulator

    def each(self, callback: Callable) -> None:
        for index, row in enumerate(self._rows):
            callback(row, index)

    def some(self, callback: Callable) -> bool:
        return any(callback(row, index) for index, row in enumerate(self._rows))

    def every(self, callback: Callable) -> bool:
        return all(callback(row, index) for index, row in enumerate(self._rows))

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    def __getitem__(self, index: int) -> Row:
        return self._rows[index]

    def __repr__(self) -> str:
        return f"Collection({len(self._rows)} rows)"


def _weak(target):
    return weakref.ref(target) if target is not None else None
