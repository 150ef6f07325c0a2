from __future__ import annotations

from collections.abc import Sequence

from ..models.guest_item import ItemKind, NormalizedImportItem
from ..models.import_result import ImportResult
from ..models.validation_issue import NO_CONTACT, ValidationIssue

"""Report builder: pure aggregation into ImportResult."""

__all__ = [
    "contact_warnings",
    "build_result",
]


def contact_warnings(items: Sequence[NormalizedImportItem]) -> list[ValidationIssue]:
    """One warning per guest without phone and email. Never for sub-guests."""
    return [
        ValidationIssue(
            item.row_number,
            "guest has neither phone nor email (allowed, but adding one is recommended)",
            NO_CONTACT,
        )
        for item in items
        if item.kind is ItemKind.GUEST and not item.phone and not item.email
    ]


def build_result(
    items: Sequence[NormalizedImportItem],
    errors: Sequence[ValidationIssue],
    warnings: Sequence[ValidationIssue] = (),
) -> ImportResult:
    """Concatenate diagnostics, add contact warnings and count items by kind."""
    accepted = list(items)
    return ImportResult(
        items=accepted,
        errors=list(errors),
        warnings=list(warnings) + contact_warnings(accepted),
        guest_count=sum(1 for i in accepted if i.kind is ItemKind.GUEST),
        subguest_count=sum(1 for i in accepted if i.kind is ItemKind.SUBGUEST),
    )
