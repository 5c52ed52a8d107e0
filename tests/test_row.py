"""Tests for rows and row collections."""

import gc

import pytest

from src.json_db.row import Collection, Row


def make_collection(*records):
    collection = Collection()
    collection.replace_all(
        Row(None, None, record, index) for index, record in enumerate(records)
    )
    return collection


class TestRow:
    """Field access and id protection."""

    def test_field_access(self):
        row = Row(None, None, {"id": 1, "name": "a"}, 0)

        row["name"] = "b"
        row["age"] = 3

        assert row["name"] == "b"
        assert row.get("missing") is None
        assert row.id == 1
        assert list(row) == ["id", "name", "age"]
        assert row == {"id": 1, "name": "b", "age": 3}

    def test_id_cannot_change(self):
        row = Row(None, None, {"id": 1}, 0)

        with pytest.raises(ValueError):
            row["id"] = 2
        with pytest.raises(ValueError):
            del row["id"]

        assert row.id == 1

    def test_to_value_is_a_copy(self):
        row = Row(None, None, {"id": 1, "tags": ["x"]}, 0)

        value = row.to_value()
        value["id"] = 99

        assert type(value) is dict
        assert row.id == 1

    def test_rejects_non_mapping(self):
        with pytest.raises(TypeError):
            Row(None, None, [1, 2], 0)

    def test_back_references_are_weak(self, db):
        table = db.table("items").insert({"name": "a"})
        collection = table.all()
        row = collection[0]

        assert row.table is table
        assert row.collection is collection

        del table
        gc.collect()

        assert row.table is None
        assert row.collection is collection


class TestCollection:
    """Ordering, binding and query helpers."""

    def test_replace_all_rebinds_rows(self):
        collection = make_collection({"id": 1}, {"id": 2}, {"id": 3})

        assert [row.index for row in collection] == [0, 1, 2]
        assert all(row.collection is collection for row in collection)

        collection.replace_all([collection[2], collection[0]])

        assert collection.to_array() == [{"id": 3}, {"id": 1}]
        assert [row.index for row in collection] == [0, 1]

    def test_append_and_length(self):
        collection = make_collection({"id": 1})
        collection.append(Row(None, collection, {"id": 2}, 1))

        assert collection.length() == 2
        assert len(collection) == 2
        assert collection.to_array() == [{"id": 1}, {"id": 2}]

    def test_map_passes_index(self):
        collection = make_collection({"id": 1}, {"id": 2})

        assert collection.map(lambda row, index: (row.id, index)) == [(1, 0), (2, 1)]

    def test_filter_returns_view(self):
        collection = make_collection({"id": 1, "x": 1}, {"id": 2, "x": 2})

        result = collection.filter(lambda row, _index: row["x"] > 1)

        assert isinstance(result, Collection)
        assert result.to_array() == [{"id": 2, "x": 2}]
        assert result[0].index == 1
        assert result[0].collection is collection
        assert len(collection) == 2

    def test_find(self):
        collection = make_collection({"id": 1}, {"id": 2})

        assert collection.find(lambda row, _index: row.id == 2) is collection[1]
        assert collection.find(lambda row, _index: row.id == 5) is None

    def test_reduce_some_every(self):
        collection = make_collection({"id": 1, "n": 2}, {"id": 2, "n": 3})

        total = collection.reduce(lambda acc, row, _index: acc + row["n"], 0)

        assert total == 5
        assert collection.some(lambda row, _index: row["n"] == 3)
        assert not collection.every(lambda row, _index: row["n"] == 3)

    def test_each(self):
        collection = make_collection({"id": 1}, {"id": 2})
        seen = []

        collection.each(lambda row, index: seen.append((index, row.id)))

        assert seen == [(0, 1), (1, 2)]
