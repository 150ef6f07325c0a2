from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from psycopg2.extras import execute_values

"""Batched INSERT via psycopg2.extras.execute_values.

Table and column names come from configuration / code constants, never from
spreadsheet content, and are quoted as identifiers. RETURNING rows are
collected across all pages (fetch=True).
"""

__all__ = [
    "BatchInsertError",
    "BatchMetrics",
    "InsertResult",
    "batch_insert",
]


class BatchInsertError(Exception):
    pass


@dataclass(frozen=True)
class BatchMetrics:
    """Timing of one batch_insert call."""
    batch_size: int
    elapsed_seconds: float


@dataclass(frozen=True)
class InsertResult:
    inserted_rows: int
    returned_values: list[tuple[Any, ...]] | None = None


def _quote_table(table: str) -> str:
    return ".".join(f'"{part}"' for part in table.split("."))


def batch_insert(
    cursor: Any,
    table: str,
    columns: Sequence[str],
    rows: Iterable[Sequence[Any]],
    returning: Sequence[str] | None = None,
    page_size: int = 500,
    metrics_callback: Callable[[BatchMetrics], None] | None = None,
) -> InsertResult:
    """Insert ``rows`` into ``table``.

    Parameters
    ----------
    cursor: psycopg2 cursor (transaction handled by the caller)
    table: target table, optionally schema-qualified
    columns: insert columns, same order as every row
    rows: row value sequences
    returning: columns for a RETURNING clause; their values come back in
        ``InsertResult.returned_values`` in insert order
    page_size: execute_values page size
    metrics_callback: receives BatchMetrics after the statement ran (not
        called for empty input)
    """
    rows_list = [tuple(r) for r in rows]
    if not rows_list:
        return InsertResult(inserted_rows=0, returned_values=[] if returning else None)

    cols_sql = ",".join(f'"{c}"' for c in columns)
    sql = f"INSERT INTO {_quote_table(table)} ({cols_sql}) VALUES %s"
    if returning:
        sql += " RETURNING " + ",".join(f'"{c}"' for c in returning)

    start = time.perf_counter()
    try:
        returned = execute_values(cursor, sql, rows_list, page_size=page_size, fetch=bool(returning))
    except Exception as e:
        raise BatchInsertError(f"insert into {table} failed: {e}") from e
    finally:
        if metrics_callback is not None:
            metrics_callback(BatchMetrics(batch_size=len(rows_list), elapsed_seconds=time.perf_counter() - start))

    if returning:
        return InsertResult(inserted_rows=len(rows_list), returned_values=list(returned or []))
    return InsertResult(inserted_rows=len(rows_list))
