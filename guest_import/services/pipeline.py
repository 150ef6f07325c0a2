from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from pathlib import Path

from ..excel.reader import SheetReadError, read_guest_sheet
from ..logging.issue_log import IssueLogBuffer
from ..models.config_models import ImportConfig
from ..models.import_result import FileOutcome, FileStatus, ImportResult
from ..models.import_row import HEADER_ROW
from .duplicates import drop_duplicates
from .parent_refs import resolve_parents
from .progress import ProgressTracker
from .report import build_result
from .row_validator import RawRow, check_header, classify_rows, derive_header

"""Guest import pipeline orchestration.

parse_guest_rows() is the pure core:

    rows -> header gate -> classify_rows -> drop_duplicates
         -> resolve_parents -> build_result

It performs no I/O and returns an equal ImportResult for equal input.
check_file() / check_files() wrap it with the spreadsheet reader, the
progress bar and the issue log for the CLI.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "parse_guest_rows",
    "check_file",
    "check_files",
]


def parse_guest_rows(
    rows: Sequence[RawRow],
    columns: Sequence[str] | None = None,
    config: ImportConfig | None = None,
    header_row: int = HEADER_ROW,
) -> ImportResult:
    """Validate raw rows into an ImportResult.

    Args:
        rows: Raw rows in sheet order (mappings or ImportRow)
        columns: Header of the sheet. When None it is derived from the keys
            of the first row that has any non-blank cell.
        config: Vocabularies and policies (defaults when None)
        header_row: Physical row header issues are reported on

    Returns:
        ImportResult; ``items`` is empty when the header gate fails.
    """
    config = config or ImportConfig()
    header = list(columns) if columns is not None else derive_header(rows)

    header_check = check_header(header, header_row)
    if header_check.fatal:
        logger.debug("header rejected columns=%s errors=%d", header, len(header_check.errors))
        return ImportResult.rejected(header_check.errors, header_check.warnings)

    classified = classify_rows(rows, config)
    # ordered pass: first occurrence wins, then parents are resolved on the survivors
    items, duplicate_errors = drop_duplicates(classified.items, config.parent_match)
    parents = resolve_parents(items, config.parent_match)

    result = build_result(
        items,
        errors=[*classified.errors, *duplicate_errors, *parents.errors],
        warnings=[*header_check.warnings, *parents.warnings],
    )
    logger.debug(
        "parsed rows=%d guests=%d subguests=%d errors=%d warnings=%d",
        len(rows),
        result.guest_count,
        result.subguest_count,
        len(result.errors),
        len(result.warnings),
    )
    return result


def check_file(path: Path, config: ImportConfig | None = None) -> FileOutcome:
    """Read one spreadsheet and validate it.

    A file that cannot be decoded yields a FAILED outcome carrying the
    "could not read file" message instead of an ImportResult.
    """
    config = config or ImportConfig()
    start = time.perf_counter()
    try:
        sheet = read_guest_sheet(path, config.sheet_name, config.null_sentinels)
    except SheetReadError as e:
        logger.debug("read failed file=%s: %s", path.name, e)
        return FileOutcome(
            file_name=path.name,
            status=FileStatus.FAILED,
            error=str(e),
            elapsed_seconds=time.perf_counter() - start,
        )
    result = parse_guest_rows(sheet.rows, sheet.columns, config, sheet.header_row)
    return FileOutcome.from_result(path.name, result, time.perf_counter() - start)


def check_files(
    paths: Sequence[Path],
    config: ImportConfig | None = None,
    issue_log: IssueLogBuffer | None = None,
) -> list[FileOutcome]:
    """Check files in order; every outcome is also buffered in ``issue_log``."""
    outcomes: list[FileOutcome] = []
    counts = {status: 0 for status in FileStatus}
    with ProgressTracker(len(paths)) as progress:
        for path in paths:
            progress.start_file(path)
            outcome = check_file(path, config)
            outcomes.append(outcome)
            counts[outcome.status] += 1
            if issue_log is not None:
                issue_log.add_outcome(outcome)
            progress.set_postfix(**{s.value: c for s, c in counts.items()})
            progress.finish_file()
    return outcomes
