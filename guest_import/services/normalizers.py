"""Field normalizers for raw spreadsheet cells.

All functions are total: they accept whatever the tabular reader produced
(str, int, float, NaN, None) and never raise. Malformed input degrades to
``""`` / ``None`` / ``False``.
"""

from __future__ import annotations

import math
import re
from collections.abc import Collection
from typing import Any

from ..models.vocabulary import DEFAULT_BLANK_MARKERS, NO_DATA

__all__ = [
    "normalize_text",
    "normalize_optional",
    "normalize_phone",
    "count_digits",
    "is_email_shape",
    "is_phone_shape",
    "collapse_spaces",
]

PHONE_MIN_DIGITS = 7
PHONE_MAX_DIGITS = 15

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_NON_DIGIT_RE = re.compile(r"\D")
_SPACES_RE = re.compile(r"\s+")


def normalize_text(value: Any) -> str:
    """None/NaN -> ""; otherwise str() and strip.

    Integral floats (spreadsheet readers turn 600123456 into 600123456.0)
    are rendered without the fractional part.
    """
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    try:
        return str(value).strip()
    except Exception:  # pragma: no cover - exotic __str__
        return ""


def collapse_spaces(value: str) -> str:
    """Collapse internal whitespace runs to one space, then trim."""
    return _SPACES_RE.sub(" ", value).strip()


def normalize_optional(
    value: Any,
    blank_markers: Collection[str] = DEFAULT_BLANK_MARKERS,
    no_data: str = NO_DATA,
) -> str | None:
    """Trimmed text, None when empty, ``no_data`` for blank-marker phrases."""
    text = normalize_text(value)
    if not text:
        return None
    if text.lower() in blank_markers:
        return no_data
    return text


def count_digits(value: str) -> int:
    return len(_NON_DIGIT_RE.sub("", value))


def normalize_phone(
    value: Any,
    min_digits: int = PHONE_MIN_DIGITS,
    max_digits: int = PHONE_MAX_DIGITS,
    blank_markers: Collection[str] = DEFAULT_BLANK_MARKERS,
) -> str | None:
    """Canonical phone: digits only, keeping one leading '+'.

    Returns None for empty/blank-marker input and when the digit count is
    outside [min_digits, max_digits]. Dropping (rather than rejecting) is
    intended here; the row validator decides whether a present but
    malformed phone is an error.
    """
    text = normalize_text(value)
    if not text or text.lower() in blank_markers:
        return None
    digits = _NON_DIGIT_RE.sub("", text)
    if not min_digits <= len(digits) <= max_digits:
        return None
    return f"+{digits}" if text.startswith("+") else digits


def is_email_shape(value: Any) -> bool:
    """Loose ``local@domain.tld`` check, no RFC validation."""
    return _EMAIL_RE.match(normalize_text(value)) is not None


def is_phone_shape(
    value: Any,
    min_digits: int = PHONE_MIN_DIGITS,
    max_digits: int = PHONE_MAX_DIGITS,
) -> bool:
    """Phone is optional: empty is valid, otherwise 7-15 digits."""
    text = normalize_text(value)
    if not text:
        return True
    return min_digits <= count_digits(text.removeprefix("+")) <= max_digits
