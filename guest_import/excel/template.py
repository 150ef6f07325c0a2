from __future__ import annotations

from pathlib import Path

import pandas as pd

from ..models.import_row import TEMPLATE_COLUMNS

"""Blank import template.

The header row must match TEMPLATE_COLUMNS exactly, otherwise the header
gate of the import rejects files filled in from it.
"""

__all__ = [
    "TEMPLATE_SHEET",
    "write_template",
]

TEMPLATE_SHEET = "Guests"


def write_template(path: Path) -> Path:
    """Write an empty .xlsx (or .csv, by suffix) with only the header row."""
    path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame(columns=list(TEMPLATE_COLUMNS))
    if path.suffix.lower() == ".csv":
        df.to_csv(path, index=False, encoding="utf-8-sig")
    else:
        df.to_excel(path, sheet_name=TEMPLATE_SHEET, index=False)
    return path
