from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..models.import_result import FileOutcome
from ..models.issue_record import SEVERITY_ERROR, SEVERITY_WARNING, IssueRecord
from ..models.validation_issue import READ_ERROR, ValidationIssue

"""Issue log buffering (JSON Lines).

- fixed record schema (IssueRecord, no extra keys)
- one ``logs/issues-YYYYMMDD-HHMMSS.log`` (UTC) per run, created on first flush
- records are buffered and written once at the end of the run
"""

__all__ = [
    "IssueLogBuffer",
    "LOGS_DIR",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class IssueLogBuffer:
    """In-memory buffer of IssueRecords; flush() appends them to the log file.

    Not thread safe (files are checked serially).
    """

    def __init__(self, logs_dir: Path = LOGS_DIR) -> None:
        self._records: list[IssueRecord] = []
        self._logs_dir = logs_dir
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"issues-{stamp}.log"
        return self._file_path

    def append(self, record: IssueRecord) -> None:
        self._records.append(record)

    def extend(self, file: str, issues: Iterable[ValidationIssue], severity: str) -> None:
        for issue in issues:
            self.append(IssueRecord.from_issue(file, issue, severity))

    def add_outcome(self, outcome: FileOutcome) -> None:
        """Buffer every error and warning of one checked file."""
        if outcome.result is None:
            issue = ValidationIssue(-1, outcome.error or "could not read file", READ_ERROR)
            self.append(IssueRecord.from_issue(outcome.file_name, issue, SEVERITY_ERROR))
            return
        self.extend(outcome.file_name, outcome.result.errors, SEVERITY_ERROR)
        self.extend(outcome.file_name, outcome.result.warnings, SEVERITY_WARNING)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the file path, or None if nothing was buffered."""
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
