from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

"""ImportRow model and the fixed column contract of the guest import sheet.

An ImportRow is one physical data row of the spreadsheet exactly as the
tabular reader produced it: column name -> loosely typed cell value. Row
numbers are 1-based and count the header, so the first data row is row 2.
"""

__all__ = [
    "ImportRow",
    "COL_TYPE",
    "COL_FIRST_NAME",
    "COL_LAST_NAME",
    "COL_PHONE",
    "COL_EMAIL",
    "COL_RELATION",
    "COL_SIDE",
    "COL_RSVP",
    "COL_ALLERGENS",
    "COL_NOTES",
    "COL_PARENT_KEY",
    "TEMPLATE_COLUMNS",
    "REQUIRED_COLUMNS",
    "HEADER_ROW",
    "FIRST_DATA_ROW",
]

COL_TYPE = "Type"
COL_FIRST_NAME = "FirstName"
COL_LAST_NAME = "LastName"
COL_PHONE = "Phone"
COL_EMAIL = "Email"
COL_RELATION = "Relation"
COL_SIDE = "Side"
COL_RSVP = "RSVP"
COL_ALLERGENS = "Allergens"
COL_NOTES = "Notes"
COL_PARENT_KEY = "ParentKey"

# Header row of the downloadable template, in order.
TEMPLATE_COLUMNS: tuple[str, ...] = (
    COL_TYPE,
    COL_FIRST_NAME,
    COL_LAST_NAME,
    COL_PHONE,
    COL_EMAIL,
    COL_RELATION,
    COL_SIDE,
    COL_RSVP,
    COL_ALLERGENS,
    COL_NOTES,
    COL_PARENT_KEY,
)

REQUIRED_COLUMNS: tuple[str, ...] = (COL_TYPE, COL_FIRST_NAME, COL_LAST_NAME)

HEADER_ROW = 1
FIRST_DATA_ROW = 2


@dataclass(frozen=True)
class ImportRow:
    """One raw spreadsheet row with its physical row number."""
    row_number: int  # 1-based, header = 1
    values: Mapping[str, Any]  # column name -> raw cell value (absent column = missing key)

    def get(self, column: str) -> Any:
        return self.values.get(column)
