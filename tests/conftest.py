# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

from guest_import.models.import_row import TEMPLATE_COLUMNS


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """sheet_name: Guests
parent_match: normalized
phone_digits:
  min: 7
  max: 15
aliases:
  relation:
    rodzina: cousins
blank_markers: ["???"]
guests_table: guests
database:
  host: localhost
  port: 5432
  user: appuser
  password: secret
  database: wedding
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def write_guest_xlsx(
    path: Path,
    rows: list[dict[str, Any]],
    columns: list[str] | None = None,
    sheet_name: str = "Guests",
) -> Path:
    """Write rows under the template header (or ``columns``)."""
    df = pd.DataFrame(rows, columns=list(columns or TEMPLATE_COLUMNS))
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False)
    return path


@pytest.fixture()
def guest_rows() -> list[dict[str, Any]]:
    return [
        {"Type": "Gość", "FirstName": "Jan", "LastName": "Kowalski", "Email": "jan@x.pl", "Side": "pana młodego"},
        {"Type": "Współgość", "FirstName": "Ala", "LastName": "Kowalska", "ParentKey": "Jan Kowalski"},
        {"Type": "guest", "FirstName": "Ewa", "LastName": "Nowak", "Phone": "+48 600 123 456", "RSVP": "tak"},
    ]


@pytest.fixture()
def guest_files(temp_workdir: Path, guest_rows) -> list[Path]:
    good = write_guest_xlsx(temp_workdir / "data" / "family.xlsx", guest_rows)
    bad = write_guest_xlsx(
        temp_workdir / "data" / "friends.xlsx",
        [
            {"Type": "Gość", "FirstName": "Piotr", "LastName": "Zieliński", "Email": "piotr@x.pl"},
            {"Type": "Współgość", "FirstName": "Ola", "LastName": "Zielińska", "ParentKey": "Nieistniejący Gość"},
        ],
    )
    return [good, bad]


@pytest.fixture()
def make_sheet():
    return write_guest_xlsx
