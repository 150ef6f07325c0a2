from __future__ import annotations

import re

from guest_import.models.import_result import FileOutcome, FileStatus, ImportResult
from guest_import.services.summary import render_summary_line

"""SUMMARY line format contract."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+files=([0-9]+)\s+valid=([0-9]+)\s+blocked=([0-9]+)\s+failed=([0-9]+)\s+"
    r"guests=([0-9]+)\s+subguests=([0-9]+)\s+errors=([0-9]+)\s+warnings=([0-9]+)$"
)


def test_summary_pattern_example_line():
    line = "SUMMARY files=2 valid=1 blocked=1 failed=0 guests=12 subguests=4 errors=3 warnings=5"
    assert SUMMARY_PATTERN.match(line), "SUMMARY line should match contract regex"


def test_rendered_line_matches_pattern_and_adds_up():
    outcomes = [
        FileOutcome.from_result("a.xlsx", ImportResult([], [], [], 0, 0)),
        FileOutcome("b.xlsx", FileStatus.FAILED, error="could not read file b.xlsx"),
    ]
    m = SUMMARY_PATTERN.match(render_summary_line(outcomes))
    assert m
    files, valid, blocked, failed = (int(m.group(i)) for i in range(1, 5))
    assert files == valid + blocked + failed == 2
