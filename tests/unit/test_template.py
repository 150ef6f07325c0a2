from __future__ import annotations

from pathlib import Path

import pandas as pd

from guest_import.excel.reader import read_guest_sheet
from guest_import.excel.template import TEMPLATE_SHEET, write_template
from guest_import.models.import_row import TEMPLATE_COLUMNS
from guest_import.services.pipeline import parse_guest_rows

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def test_xlsx_template_header(tmp_path: Path):
    path = write_template(tmp_path / "out" / "template.xlsx")
    df = pd.read_excel(path, sheet_name=TEMPLATE_SHEET)
    assert list(df.columns) == list(TEMPLATE_COLUMNS)
    assert len(df) == 0


def test_csv_template_header(tmp_path: Path):
    path = write_template(tmp_path / "template.csv")
    data = read_guest_sheet(path)
    assert data.columns == list(TEMPLATE_COLUMNS)


def test_template_passes_header_gate(tmp_path: Path):
    data = read_guest_sheet(write_template(tmp_path / "template.xlsx"))
    result = parse_guest_rows(data.rows, data.columns)
    assert result.errors == []
    assert result.warnings == []


def test_static_template_matches_columns():
    static = PROJECT_ROOT / "templates" / "guest_import_template.csv"
    header = static.read_text(encoding="utf-8").splitlines()[0]
    assert header.split(",") == list(TEMPLATE_COLUMNS)
