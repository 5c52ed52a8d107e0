"""Directory of tables."""

import logging
from pathlib import Path

from src.json_db.constants import DATA_DIR, DB_EXT
from src.json_db.errors import NameCollisionError
from src.json_db.table import Table
from src.json_db.utils import table_path

logger = logging.getLogger(__name__)


class Database:
    """A directory whose `<name>.json` files are tables."""

    def __init__(self, path: Path | str = DATA_DIR, name: str | None = None) -> None:
        self.path = Path(path)
        self.path.mkdir(parents=True, exist_ok=True)
        self.name = name or self.path.resolve().name

    def has_table(self, name: str) -> bool:
        return table_path(self.path, name, DB_EXT).exists()

    def list_tables(self) -> list[str]:
        """Return sorted table names."""
        return sorted(path.stem for path in self.path.glob(f"*.{DB_EXT}"))

    def table(self, name: str) -> Table:
        """Open a table, creating an empty one if it does not exist yet."""
        return Table.open(self, name)

    def create_table(self, name: str) -> Table:
        if self.has_table(name):
            raise NameCollisionError(f'Table "{name}" already exists.')
        logger.info("Creating table %s in %s", name, self.path)
        return Table.open(self, name)

    def __repr__(self) -> str:
        return f"Database({self.name!r}, path={str(self.path)!r})"
