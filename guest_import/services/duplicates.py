from __future__ import annotations

from collections.abc import Sequence

from ..models.config_models import PARENT_MATCH_NORMALIZED
from ..models.guest_item import NormalizedImportItem
from ..models.validation_issue import DUPLICATE_RECORD, ValidationIssue
from .parent_refs import parent_lookup_key

"""Duplicate detection within one imported file.

Composite key: kind | first | last | phone | email | parent_key, all
lower-cased. The parent part is keyed the way parent references are
matched, so under the normalized policy "Jan  Kowalski" and "jan kowalski"
name the same parent. Items are processed in row order; the first
occurrence of a key is kept and every later one is reported and dropped.
Nothing is merged.
"""

__all__ = [
    "DUPLICATE_MESSAGE",
    "duplicate_key",
    "drop_duplicates",
]

DUPLICATE_MESSAGE = "duplicate record in file"


def duplicate_key(item: NormalizedImportItem, policy: str = PARENT_MATCH_NORMALIZED) -> str:
    return "|".join((
        item.kind.value,
        item.first_name.lower(),
        item.last_name.lower(),
        (item.phone or "").lower(),
        (item.email or "").lower(),
        parent_lookup_key(item.parent_key or "", policy).lower(),
    ))


def drop_duplicates(
    items: Sequence[NormalizedImportItem],
    policy: str = PARENT_MATCH_NORMALIZED,
) -> tuple[list[NormalizedImportItem], list[ValidationIssue]]:
    """Return (kept items, one error per dropped later occurrence)."""
    seen: set[str] = set()
    kept: list[NormalizedImportItem] = []
    errors: list[ValidationIssue] = []
    for item in items:
        key = duplicate_key(item, policy)
        if key in seen:
            errors.append(ValidationIssue(item.row_number, DUPLICATE_MESSAGE, DUPLICATE_RECORD))
            continue
        seen.add(key)
        kept.append(item)
    return kept, errors
