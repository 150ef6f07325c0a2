from __future__ import annotations

import pytest

from guest_import.db.batch_insert import BatchInsertError, BatchMetrics, InsertResult, batch_insert


class DummyCursor:
    def __init__(self) -> None:
        self.queries: list[str] = []
        self.rows: list[tuple] = []
        self.page_sizes: list[int] = []

# execute_values is monkeypatched inside the module so no database is needed


@pytest.fixture(autouse=True)
def patch_execute_values(monkeypatch):
    import guest_import.db.batch_insert as bi

    def fake_execute_values(cursor, sql, rows, page_size=100, fetch=False):
        cursor.queries.append(sql)
        cursor.rows.extend(rows)
        cursor.page_sizes.append(page_size)
        if fetch:
            return [(i + 1,) + tuple(r[:1]) for i, r in enumerate(rows)]
        return None
    monkeypatch.setattr(bi, "execute_values", fake_execute_values)
    return fake_execute_values


def test_batch_insert_basic():
    cur = DummyCursor()
    res = batch_insert(cur, table="guests", columns=["first_name", "last_name"], rows=[["Jan", "Kowalski"], ["Ala", "Nowak"]])
    assert isinstance(res, InsertResult)
    assert res.inserted_rows == 2
    assert res.returned_values is None
    assert cur.queries == ['INSERT INTO "guests" ("first_name","last_name") VALUES %s']
    assert cur.rows == [("Jan", "Kowalski"), ("Ala", "Nowak")]


def test_batch_insert_returning():
    cur = DummyCursor()
    res = batch_insert(cur, table="guests", columns=["first_name"], rows=[["Jan"], ["Ala"]], returning=["id", "first_name"])
    assert cur.queries[0].endswith(' RETURNING "id","first_name"')
    assert res.returned_values == [(1, "Jan"), (2, "Ala")]


def test_batch_insert_schema_qualified_table():
    cur = DummyCursor()
    batch_insert(cur, table="app.guests", columns=["c"], rows=[[1]], page_size=50)
    assert cur.queries[0].startswith('INSERT INTO "app"."guests"')
    assert cur.page_sizes == [50]


def test_batch_insert_empty_rows():
    cur = DummyCursor()
    calls = []
    res = batch_insert(cur, table="guests", columns=["c"], rows=[], returning=["id"], metrics_callback=calls.append)
    assert res.inserted_rows == 0
    assert res.returned_values == []
    assert cur.queries == []
    assert calls == []


def test_batch_insert_driver_error(monkeypatch):
    import guest_import.db.batch_insert as bi

    def failing(*args, **kwargs):
        raise RuntimeError("connection lost")
    monkeypatch.setattr(bi, "execute_values", failing)
    with pytest.raises(BatchInsertError, match="connection lost"):
        batch_insert(DummyCursor(), table="guests", columns=["c"], rows=[[1]])


def test_batch_insert_with_metrics_callback():
    captured: list[BatchMetrics] = []
    batch_insert(DummyCursor(), table="guests", columns=["c"], rows=[[1], [2], [3]], metrics_callback=captured.append)
    assert len(captured) == 1
    assert captured[0].batch_size == 3
    assert captured[0].elapsed_seconds >= 0
