"""Tests for the table directory."""

import pytest

from src.json_db.database import Database
from src.json_db.errors import NameCollisionError
from src.json_db.table import Table


class TestDatabase:
    def test_creates_directory(self, tmp_path):
        db = Database(tmp_path / "nested" / "db")

        assert db.path.is_dir()
        assert db.name == "db"

    def test_list_tables(self, users_db):
        users_db.table("orders")
        (users_db.path / "notes.txt").write_text("x", encoding="utf-8")

        assert users_db.list_tables() == ["orders", "users"]

    def test_has_table(self, users_db):
        assert users_db.has_table("users")
        assert not users_db.has_table("ghosts")

    def test_table_returns_handle(self, users_db):
        table = users_db.table("users")

        assert isinstance(table, Table)
        assert table.database is users_db
        assert len(table) == 2

    def test_create_table(self, db):
        table = db.create_table("items")

        assert len(table) == 0
        assert db.has_table("items")

    def test_create_existing_table_fails(self, users_db):
        with pytest.raises(NameCollisionError):
            users_db.create_table("users")
