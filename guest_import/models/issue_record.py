from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

from .validation_issue import ValidationIssue

"""IssueRecord model for the JSON Lines issue log.

Each ValidationIssue found while checking a file is written as one line with
a fixed set of keys. row=-1 is used for file-level problems where no row
applies (unreadable file).
"""

__all__ = [
    "IssueRecord",
    "SEVERITY_ERROR",
    "SEVERITY_WARNING",
]

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"


@dataclass(frozen=True)
class IssueRecord:
    """Structured issue record.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Spreadsheet file name
        row: Row number (1-based, header = 1) or -1
        severity: "error" or "warning"
        code: Issue classification in UPPER_SNAKE_CASE
        message: Human readable message
    """
    timestamp: str
    file: str
    row: int
    severity: str
    code: str
    message: str

    @staticmethod
    def from_issue(file: str, issue: ValidationIssue, severity: str) -> IssueRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return IssueRecord(
            timestamp=ts,
            file=file,
            row=issue.row_number,
            severity=severity,
            code=issue.code,
            message=issue.message,
        )

    def to_json_line(self) -> str:
        # no extra keys: dataclass -> dict
        return json.dumps(asdict(self), ensure_ascii=False)
