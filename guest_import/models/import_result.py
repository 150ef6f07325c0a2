from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .guest_item import ItemKind, NormalizedImportItem
from .validation_issue import ValidationIssue

"""Result models for the guest import pipeline.

ImportResult is created fresh by every parse and is read once by the caller
to decide whether ``items`` may be submitted to persistence. FileOutcome
wraps it with the per-file status used by the CLI summary.
"""

__all__ = [
    "ImportResult",
    "FileStatus",
    "FileOutcome",
]


@dataclass(frozen=True)
class ImportResult:
    """Accepted items plus every diagnostic collected for one sheet."""
    items: list[NormalizedImportItem]
    errors: list[ValidationIssue]
    warnings: list[ValidationIssue]
    guest_count: int
    subguest_count: int

    @classmethod
    def rejected(
        cls,
        errors: list[ValidationIssue],
        warnings: list[ValidationIssue] | None = None,
    ) -> ImportResult:
        """Batch-level rejection: no items at all."""
        return cls(items=[], errors=list(errors), warnings=list(warnings or []), guest_count=0, subguest_count=0)

    @property
    def can_import(self) -> bool:
        """Import is allowed iff there are no errors and at least one item."""
        return not self.errors and len(self.items) > 0

    def items_of(self, kind: ItemKind) -> list[NormalizedImportItem]:
        return [i for i in self.items if i.kind is kind]

    def to_payload(self) -> list[dict[str, Any]]:
        return [i.to_payload() for i in self.items]


class FileStatus(Enum):
    """Outcome of checking one file.

    - VALID: parsed, no errors, at least one item (importable)
    - BLOCKED: parsed, but errors (or nothing to import) prevent the import
    - FAILED: the file could not be read at all
    """
    VALID = "valid"
    BLOCKED = "blocked"
    FAILED = "failed"


@dataclass(frozen=True)
class FileOutcome:
    file_name: str
    status: FileStatus
    result: ImportResult | None = None  # None when status is FAILED
    error: str | None = None  # read failure reason
    elapsed_seconds: float = 0.0

    @staticmethod
    def from_result(file_name: str, result: ImportResult, elapsed_seconds: float = 0.0) -> FileOutcome:
        status = FileStatus.VALID if result.can_import else FileStatus.BLOCKED
        return FileOutcome(file_name=file_name, status=status, result=result, elapsed_seconds=elapsed_seconds)
