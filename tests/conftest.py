import json

import pytest

from src.json_db.database import Database


@pytest.fixture
def db(tmp_path):
    return Database(tmp_path / "db", name="test_db")


@pytest.fixture
def users_db(db):
    """Database holding a two-row `users` table."""
    (db.path / "users.json").write_text(
        json.dumps([{"id": 1, "name": "a"}, {"id": 2, "name": "b"}]),
        encoding="utf-8",
    )
    (db.path / "users.meta").write_text(
        json.dumps({"current_id": 2, "rows": 2}), encoding="utf-8"
    )
    return db
