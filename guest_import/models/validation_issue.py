from __future__ import annotations

from dataclasses import dataclass

"""ValidationIssue and the issue codes emitted by the import pipeline.

The same type is used for blocking errors and for warnings; which list an
issue lands in (ImportResult.errors / ImportResult.warnings) decides its
severity.
"""

__all__ = [
    "ValidationIssue",
    "HEADER_MISSING_COLUMN",
    "HEADER_DUPLICATE_COLUMN",
    "HEADER_UNKNOWN_COLUMN",
    "UNKNOWN_TYPE",
    "MISSING_NAME",
    "INVALID_EMAIL",
    "INVALID_PHONE",
    "VALUE_NOT_ALLOWED",
    "MISSING_PARENT_KEY",
    "DUPLICATE_RECORD",
    "UNRESOLVED_PARENT",
    "AMBIGUOUS_PARENT",
    "NO_CONTACT",
    "READ_ERROR",
]

# batch level (reported on the header row)
HEADER_MISSING_COLUMN = "HEADER_MISSING_COLUMN"
HEADER_DUPLICATE_COLUMN = "HEADER_DUPLICATE_COLUMN"
HEADER_UNKNOWN_COLUMN = "HEADER_UNKNOWN_COLUMN"

# row level, blocking
UNKNOWN_TYPE = "UNKNOWN_TYPE"
MISSING_NAME = "MISSING_NAME"
INVALID_EMAIL = "INVALID_EMAIL"
INVALID_PHONE = "INVALID_PHONE"
VALUE_NOT_ALLOWED = "VALUE_NOT_ALLOWED"
MISSING_PARENT_KEY = "MISSING_PARENT_KEY"
DUPLICATE_RECORD = "DUPLICATE_RECORD"
UNRESOLVED_PARENT = "UNRESOLVED_PARENT"

# row level, warnings
AMBIGUOUS_PARENT = "AMBIGUOUS_PARENT"
NO_CONTACT = "NO_CONTACT"

# file could not be decoded at all (row -1)
READ_ERROR = "READ_ERROR"


@dataclass(frozen=True)
class ValidationIssue:
    """A single diagnostic attached to a spreadsheet row.

    Attributes:
        row_number: 1-based spreadsheet row (header = 1). -1 when the file
            itself could not be read.
        message: Human readable description shown to the user
        code: Classification in UPPER_SNAKE_CASE
    """
    row_number: int
    message: str
    code: str = ""

    def __str__(self) -> str:
        if self.row_number < 0:
            return self.message
        return f"row {self.row_number}: {self.message}"
