from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.import_row import HEADER_ROW, ImportRow

"""Tabular reader for guest import sheets (.xlsx / .csv).

Leading empty rows are skipped; the first row with any non-blank cell is the
header and every following row is data. Header cells are trimmed only, so a
renamed column is reported by the header gate instead of being guessed.
Rows whose cells are all blank are dropped, but every kept row remembers
its physical spreadsheet row number (1-based).

pandas' default NA parsing is disabled: phrases like "n/a" or "None" are
blank markers with a meaning of their own and must reach the validator as
text. Decoder failures of any kind surface as SheetReadError.
"""

__all__ = [
    "SheetReadError",
    "SheetData",
    "SUPPORTED_SUFFIXES",
    "read_guest_sheet",
    "rows_from_frame",
]

SUPPORTED_SUFFIXES = (".xlsx", ".csv")


class SheetReadError(Exception):
    """Raised when the file cannot be decoded as a spreadsheet."""


@dataclass
class SheetData:
    sheet_name: str
    columns: list[str]  # trimmed header cells, blanks removed
    rows: list[ImportRow]
    header_row: int = HEADER_ROW  # physical row of the header


def _header_name(value: Any) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value).strip()


def _cell(value: Any, null_sentinels: Collection[str] | None) -> Any:
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):  # list-like cell values
        return value
    if isinstance(value, str):
        if null_sentinels and value.strip().upper() in null_sentinels:
            return None
    return value


def _header_index(df: pd.DataFrame) -> int | None:
    """Position of the first row with any non-blank cell (leading empty rows are skipped)."""
    for pos, raw in enumerate(df.itertuples(index=False, name=None)):
        if any(_header_name(v) for v in raw):
            return pos
    return None


def rows_from_frame(
    df: pd.DataFrame, sheet_name: str, null_sentinels: Collection[str] | None = None
) -> SheetData:
    """Split a header-less DataFrame into header + numbered ImportRows."""
    header_pos = _header_index(df)
    if header_pos is None:
        return SheetData(sheet_name=sheet_name, columns=[], rows=[])
    header = [_header_name(c) for c in df.iloc[header_pos].tolist()]
    rows: list[ImportRow] = []
    for pos, raw in enumerate(df.iloc[header_pos + 1:].itertuples(index=False, name=None), start=header_pos + 1):
        values: dict[str, Any] = {}
        for col, val in zip(header, raw, strict=False):
            if not col:
                continue  # cells under a blank header cell are not addressable
            # duplicated header names: first column wins (the header gate rejects the file anyway)
            values.setdefault(col, _cell(val, null_sentinels))
        if all(v is None or (isinstance(v, str) and not v.strip()) for v in values.values()):
            continue
        # frame position is 0-based, spreadsheet rows are 1-based
        rows.append(ImportRow(row_number=pos + 1, values=values))
    return SheetData(
        sheet_name=sheet_name,
        columns=[c for c in header if c],
        rows=rows,
        header_row=header_pos + 1,
    )


def read_guest_sheet(
    path: Path,
    sheet_name: str | None = None,
    null_sentinels: Collection[str] | None = None,
    csv_encoding: str = "utf-8-sig",
) -> SheetData:
    """Read one sheet (the first one unless ``sheet_name`` is given).

    Raises:
        SheetReadError: unsupported suffix, missing sheet, corrupt file, ...
    """
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise SheetReadError(f"could not read file {path.name}: unsupported file type '{suffix}'")
    try:
        if suffix == ".csv":
            # dtype=str keeps leading zeros and '+' of phone numbers
            df = pd.read_csv(
                path,
                header=None,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=False,
                encoding=csv_encoding,
            )
            name = path.stem
        else:
            with pd.ExcelFile(path) as xls:
                name = sheet_name if sheet_name is not None else str(xls.sheet_names[0])
                # header=None: header row is applied by rows_from_frame
                df = xls.parse(name, header=None, dtype=object, keep_default_na=False)
    except pd.errors.EmptyDataError:
        return SheetData(sheet_name=path.stem, columns=[], rows=[])
    except Exception as e:
        raise SheetReadError(f"could not read file {path.name}: {e}") from e
    return rows_from_frame(df, name, null_sentinels)
