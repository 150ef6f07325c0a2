from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

from ..models.config_models import ImportConfig
from ..models.guest_item import ItemKind, NormalizedImportItem
from ..models.import_row import (
    COL_ALLERGENS,
    COL_EMAIL,
    COL_FIRST_NAME,
    COL_LAST_NAME,
    COL_NOTES,
    COL_PARENT_KEY,
    COL_PHONE,
    COL_RELATION,
    COL_RSVP,
    COL_SIDE,
    COL_TYPE,
    FIRST_DATA_ROW,
    HEADER_ROW,
    REQUIRED_COLUMNS,
    TEMPLATE_COLUMNS,
    ImportRow,
)
from ..models.validation_issue import (
    HEADER_DUPLICATE_COLUMN,
    HEADER_MISSING_COLUMN,
    HEADER_UNKNOWN_COLUMN,
    INVALID_EMAIL,
    INVALID_PHONE,
    MISSING_NAME,
    MISSING_PARENT_KEY,
    UNKNOWN_TYPE,
    VALUE_NOT_ALLOWED,
    ValidationIssue,
)
from ..models.vocabulary import Vocabulary
from .normalizers import (
    is_email_shape,
    is_phone_shape,
    normalize_optional,
    normalize_phone,
    normalize_text,
)

"""Row classifier & validator.

Header gate first (required columns, duplicated names, unknown columns),
then every row independently:

1. fully blank Type/FirstName/LastName -> skipped silently
2. Type -> guest | subguest, else error
3. FirstName + LastName required
4. guests: Email/Phone validated and kept; sub-guests: both forced to None
5. Relation/Side/RSVP must be in their vocabulary (or a blank marker)
6. sub-guests: ParentKey required, kept verbatim (trimmed)
7. Allergens/Notes: optional free text

A row produces either exactly one item or exactly one error.
"""

logger = logging.getLogger(__name__)

RawRow = Union[Mapping[str, Any], ImportRow]

__all__ = [
    "HeaderCheck",
    "ClassifiedRows",
    "derive_header",
    "check_header",
    "validate_row",
    "classify_rows",
]


@dataclass(frozen=True)
class HeaderCheck:
    errors: list[ValidationIssue]
    warnings: list[ValidationIssue]

    @property
    def fatal(self) -> bool:
        return bool(self.errors)


@dataclass(frozen=True)
class ClassifiedRows:
    """Output of the per-row phase: accepted items in row order + row errors."""
    items: list[NormalizedImportItem]
    errors: list[ValidationIssue]


def _row_values(row: RawRow) -> Mapping[str, Any]:
    return row.values if isinstance(row, ImportRow) else row


def derive_header(rows: Iterable[RawRow]) -> list[str]:
    """Column names of the first row that has any non-blank cell."""
    for row in rows:
        values = _row_values(row)
        if any(normalize_text(v) for v in values.values()):
            return [str(k) for k in values.keys()]
    return []


def check_header(columns: Sequence[str], header_row: int = HEADER_ROW) -> HeaderCheck:
    """Validate header names (trim only; a renamed column must fail)."""
    names = [normalize_text(c) for c in columns]
    names = [n for n in names if n]
    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []

    counts = Counter(names)
    duplicated = [n for n, c in counts.items() if c > 1]
    if duplicated:
        errors.append(ValidationIssue(
            header_row,
            f"duplicate column names in header: {', '.join(duplicated)}",
            HEADER_DUPLICATE_COLUMN,
        ))
        return HeaderCheck(errors=errors, warnings=warnings)

    for col in REQUIRED_COLUMNS:
        if col not in counts:
            errors.append(ValidationIssue(
                header_row,
                f'missing required column "{col}" (header renamed or removed)',
                HEADER_MISSING_COLUMN,
            ))

    unknown = [n for n in names if n not in TEMPLATE_COLUMNS]
    if unknown:
        warnings.append(ValidationIssue(
            header_row,
            f"unknown columns will be ignored: {', '.join(unknown)}",
            HEADER_UNKNOWN_COLUMN,
        ))
    return HeaderCheck(errors=errors, warnings=warnings)


def _vocab_value(
    values: Mapping[str, Any], column: str, vocab: Vocabulary, config: ImportConfig
) -> tuple[str | None, str | None]:
    """Return (canonical value, error message)."""
    vocabs = config.vocabularies
    raw = normalize_optional(values.get(column), vocabs.blank_markers, vocabs.no_data)
    if raw is None:
        return None, None
    if raw == vocabs.no_data:
        return vocabs.no_data, None
    canonical = vocab.lookup(raw)
    if canonical is None:
        return None, f'{column} "{raw}" is not an allowed value; allowed: {", ".join(vocab.values)}'
    return canonical, None


def validate_row(
    row_number: int, values: Mapping[str, Any], config: ImportConfig
) -> tuple[NormalizedImportItem | None, ValidationIssue | None]:
    """Validate one raw row.

    Returns:
        (item, None) for an accepted row, (None, issue) for a rejected row,
        (None, None) for a blank separator row.
    """
    vocabs = config.vocabularies
    type_raw = normalize_text(values.get(COL_TYPE))
    first = normalize_text(values.get(COL_FIRST_NAME))
    last = normalize_text(values.get(COL_LAST_NAME))

    if not type_raw and not first and not last:
        return None, None

    kind_value = vocabs.type.lookup(type_raw) if type_raw else None
    if kind_value is None:
        return None, ValidationIssue(
            row_number,
            f'unknown Type "{type_raw}"; use one of: Gość, Współgość ({", ".join(vocabs.type.values)})',
            UNKNOWN_TYPE,
        )
    kind = ItemKind(kind_value)

    if not first or not last:
        return None, ValidationIssue(row_number, f"missing {COL_FIRST_NAME}/{COL_LAST_NAME}", MISSING_NAME)

    phone: str | None = None
    email: str | None = None
    if kind is ItemKind.GUEST:
        email_raw = normalize_optional(values.get(COL_EMAIL), vocabs.blank_markers, vocabs.no_data)
        if email_raw == vocabs.no_data:
            email_raw = None
        if email_raw and not is_email_shape(email_raw):
            return None, ValidationIssue(row_number, f'Email "{email_raw}" is not a valid address', INVALID_EMAIL)

        phone_raw = normalize_optional(values.get(COL_PHONE), vocabs.blank_markers, vocabs.no_data)
        if phone_raw == vocabs.no_data:
            phone_raw = None
        if phone_raw and not is_phone_shape(phone_raw, config.phone_min_digits, config.phone_max_digits):
            return None, ValidationIssue(
                row_number,
                f'Phone "{phone_raw}" is not a valid number '
                f"({config.phone_min_digits}-{config.phone_max_digits} digits)",
                INVALID_PHONE,
            )
        email = email_raw
        phone = normalize_phone(
            phone_raw, config.phone_min_digits, config.phone_max_digits, vocabs.blank_markers
        )

    picked: dict[str, str | None] = {}
    for column, vocab in ((COL_RELATION, vocabs.relation), (COL_SIDE, vocabs.side), (COL_RSVP, vocabs.rsvp)):
        value, message = _vocab_value(values, column, vocab, config)
        if message is not None:
            return None, ValidationIssue(row_number, message, VALUE_NOT_ALLOWED)
        picked[column] = value

    parent_key: str | None = None
    if kind is ItemKind.SUBGUEST:
        parent_key = normalize_text(values.get(COL_PARENT_KEY))
        if not parent_key:
            return None, ValidationIssue(
                row_number,
                f'sub-guest requires {COL_PARENT_KEY} (e.g. "Jan Kowalski")',
                MISSING_PARENT_KEY,
            )

    item = NormalizedImportItem(
        kind=kind,
        first_name=first,
        last_name=last,
        parent_key=parent_key,
        phone=phone,
        email=email,
        relation=picked[COL_RELATION],
        side=picked[COL_SIDE],
        rsvp=picked[COL_RSVP],
        allergens=normalize_optional(values.get(COL_ALLERGENS), vocabs.blank_markers, vocabs.no_data),
        notes=normalize_optional(values.get(COL_NOTES), vocabs.blank_markers, vocabs.no_data),
        row_number=row_number,
    )
    return item, None


def classify_rows(rows: Sequence[RawRow], config: ImportConfig) -> ClassifiedRows:
    """Run validate_row over every row, keeping input order.

    Plain mappings are numbered ``index + 2``; ImportRow carries its own
    physical row number.
    """
    items: list[NormalizedImportItem] = []
    errors: list[ValidationIssue] = []
    for index, row in enumerate(rows):
        if isinstance(row, ImportRow):
            row_number, values = row.row_number, row.values
        else:
            row_number, values = index + FIRST_DATA_ROW, row
        item, issue = validate_row(row_number, values, config)
        if issue is not None:
            errors.append(issue)
        elif item is not None:
            items.append(item)
    logger.debug("classified rows=%d items=%d errors=%d", len(rows), len(items), len(errors))
    return ClassifiedRows(items=items, errors=errors)
