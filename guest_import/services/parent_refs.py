from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..models.config_models import PARENT_MATCH_EXACT, PARENT_MATCH_NORMALIZED
from ..models.guest_item import ItemKind, NormalizedImportItem
from ..models.validation_issue import AMBIGUOUS_PARENT, UNRESOLVED_PARENT, ValidationIssue
from .normalizers import collapse_spaces

"""Parent reference resolution for sub-guests.

A sub-guest's ParentKey must name a guest of the same file as
"FirstName LastName". Only guests from the import are considered, never
guests already stored.

Two comparison policies:
- normalized (default): case-insensitive, whitespace collapsed on both sides
- exact: plain string equality

Unresolved sub-guests are reported but stay in the accepted item list; the
error count alone blocks the import. When a key matches several guests a
warning is emitted and persistence links the first of them.
"""

__all__ = [
    "ParentMatchError",
    "ParentResolution",
    "parent_lookup_key",
    "build_guest_name_map",
    "resolve_parents",
]


class ParentMatchError(ValueError):
    """Unknown parent_match policy."""


@dataclass(frozen=True)
class ParentResolution:
    errors: list[ValidationIssue]
    warnings: list[ValidationIssue]


def parent_lookup_key(name: str, policy: str = PARENT_MATCH_NORMALIZED) -> str:
    if policy == PARENT_MATCH_EXACT:
        return name
    if policy == PARENT_MATCH_NORMALIZED:
        return collapse_spaces(name).lower()
    raise ParentMatchError(f"unknown parent_match policy: {policy!r}")


def build_guest_name_map(
    items: Sequence[NormalizedImportItem], policy: str = PARENT_MATCH_NORMALIZED
) -> dict[str, list[NormalizedImportItem]]:
    """Lookup key -> guest items (row order) carrying that display name."""
    name_map: dict[str, list[NormalizedImportItem]] = {}
    for item in items:
        if item.kind is not ItemKind.GUEST:
            continue
        name_map.setdefault(parent_lookup_key(item.display_name, policy), []).append(item)
    return name_map


def resolve_parents(
    items: Sequence[NormalizedImportItem], policy: str = PARENT_MATCH_NORMALIZED
) -> ParentResolution:
    name_map = build_guest_name_map(items, policy)
    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []
    for item in items:
        if item.kind is not ItemKind.SUBGUEST:
            continue
        parent_key = item.parent_key or ""
        matches = name_map.get(parent_lookup_key(parent_key, policy), [])
        if not matches:
            errors.append(ValidationIssue(
                item.row_number,
                f'ParentKey "{parent_key}" does not match any guest in this file',
                UNRESOLVED_PARENT,
            ))
        elif len(matches) > 1:
            rows = ", ".join(str(m.row_number) for m in matches)
            warnings.append(ValidationIssue(
                item.row_number,
                f'ParentKey "{parent_key}" matches {len(matches)} guests (rows {rows}); '
                f"linking to row {matches[0].row_number}",
                AMBIGUOUS_PARENT,
            ))
    return ParentResolution(errors=errors, warnings=warnings)
