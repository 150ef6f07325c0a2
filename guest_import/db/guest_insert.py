from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..models.config_models import PARENT_MATCH_NORMALIZED
from ..models.guest_item import ItemKind, NormalizedImportItem
from ..models.import_result import ImportResult
from ..services.parent_refs import parent_lookup_key
from .batch_insert import BatchInsertError, BatchMetrics, batch_insert

"""Persist a validated ImportResult for one event.

Guests are inserted first with RETURNING (id, first_name, last_name); the
returned ids build an in-memory "FirstName LastName" -> id map that gives
every sub-guest its parent_guest_id. Parent ids come only from this import,
never from guests already stored for the event.

Transaction boundaries belong to the caller: on any exception nothing
should be committed.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "GuestInsertError",
    "ImportBlockedError",
    "GuestInsertResult",
    "GUEST_COLUMNS",
    "insert_import_result",
]

GUEST_COLUMNS = (
    "event_id",
    "parent_guest_id",
    "first_name",
    "last_name",
    "phone",
    "email",
    "relation",
    "side",
    "rsvp",
    "allergens",
    "notes",
)


class GuestInsertError(Exception):
    """Driver failure or a sub-guest whose parent id cannot be found."""


class ImportBlockedError(Exception):
    """The result has errors (or no items) and must not be persisted."""


@dataclass(frozen=True)
class GuestInsertResult:
    guests: int
    subguests: int


def _log_batch_metrics(metrics: BatchMetrics) -> None:
    logger.debug("insert batch rows=%d elapsed=%.3fs", metrics.batch_size, metrics.elapsed_seconds)


def _row(event_id: str, item: NormalizedImportItem, parent_id: Any) -> tuple[Any, ...]:
    return (
        event_id,
        parent_id,
        item.first_name,
        item.last_name,
        item.phone,
        item.email,
        item.relation,
        item.side,
        item.rsvp,
        item.allergens,
        item.notes,
    )


def insert_import_result(
    cursor: Any,
    event_id: str,
    result: ImportResult,
    *,
    table: str = "guests",
    parent_match: str = PARENT_MATCH_NORMALIZED,
    page_size: int = 500,
) -> GuestInsertResult:
    """Insert guests, then sub-guests linked to them.

    Raises:
        ImportBlockedError: ``result.can_import`` is False
        GuestInsertError: database failure or unresolved parent
    """
    if not result.can_import:
        raise ImportBlockedError(
            f"import blocked: errors={len(result.errors)} items={len(result.items)}"
        )

    guests = result.items_of(ItemKind.GUEST)
    subguests = result.items_of(ItemKind.SUBGUEST)

    try:
        inserted = batch_insert(
            cursor,
            table,
            GUEST_COLUMNS,
            [_row(event_id, g, None) for g in guests],
            returning=("id", "first_name", "last_name"),
            page_size=page_size,
            metrics_callback=_log_batch_metrics,
        )
    except BatchInsertError as e:
        raise GuestInsertError(str(e)) from e

    parent_ids: dict[str, Any] = {}
    for guest_id, first, last in inserted.returned_values or []:
        # first guest with a given name wins, same as the ambiguity warning says
        parent_ids.setdefault(parent_lookup_key(f"{first} {last}", parent_match), guest_id)
    logger.debug("event=%s inserted guests=%d parent_map=%d", event_id, inserted.inserted_rows, len(parent_ids))

    sub_rows = []
    for sub in subguests:
        parent_id = parent_ids.get(parent_lookup_key(sub.parent_key or "", parent_match))
        if parent_id is None:
            raise GuestInsertError(
                f'row {sub.row_number}: parent "{sub.parent_key}" not found among inserted guests'
            )
        sub_rows.append(_row(event_id, sub, parent_id))

    try:
        sub_inserted = batch_insert(
            cursor,
            table,
            GUEST_COLUMNS,
            sub_rows,
            page_size=page_size,
            metrics_callback=_log_batch_metrics,
        )
    except BatchInsertError as e:
        raise GuestInsertError(str(e)) from e

    return GuestInsertResult(guests=inserted.inserted_rows, subguests=sub_inserted.inserted_rows)
