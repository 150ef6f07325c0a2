from __future__ import annotations

import math

import pytest

from guest_import.models.vocabulary import NO_DATA
from guest_import.services.normalizers import (
    collapse_spaces,
    count_digits,
    is_email_shape,
    is_phone_shape,
    normalize_optional,
    normalize_phone,
    normalize_text,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, ""),
        (math.nan, ""),
        ("  Jan  ", "Jan"),
        (600123456.0, "600123456"),
        (12.5, "12.5"),
        (42, "42"),
    ],
)
def test_normalize_text(value, expected):
    assert normalize_text(value) == expected


def test_collapse_spaces():
    assert collapse_spaces("  Jan \t  Kowalski ") == "Jan Kowalski"


def test_normalize_optional_empty_is_none():
    assert normalize_optional(None) is None
    assert normalize_optional("   ") is None


@pytest.mark.parametrize("marker", ["n/a", "N/A", "none", "-", "brak danych", " B.D. "])
def test_normalize_optional_blank_markers_become_no_data(marker):
    assert normalize_optional(marker) == NO_DATA


def test_normalize_optional_keeps_text():
    assert normalize_optional("  orzechy ") == "orzechy"


def test_normalize_optional_custom_markers():
    assert normalize_optional("???", blank_markers={"???"}, no_data="unknown") == "unknown"
    assert normalize_optional("n/a", blank_markers={"???"}) == "n/a"


def test_count_digits():
    assert count_digits("+48 (600) 123-456") == 11


def test_normalize_phone_keeps_leading_plus():
    assert normalize_phone("+48 600 123 456") == "+48600123456"
    assert normalize_phone("600-123-456") == "600123456"
    assert normalize_phone(600123456.0) == "600123456"


def test_normalize_phone_out_of_range_or_blank_is_none():
    assert normalize_phone("123") is None
    assert normalize_phone("1" * 16) is None
    assert normalize_phone("") is None
    assert normalize_phone("brak") is None


def test_normalize_phone_custom_range():
    assert normalize_phone("12345", min_digits=5, max_digits=6) == "12345"
    assert normalize_phone("1234567", min_digits=5, max_digits=6) is None


@pytest.mark.parametrize(
    "value,ok",
    [
        ("jan@x.pl", True),
        (" jan.kowalski@mail.example.com ", True),
        ("jan@x", False),
        ("jan x@y.pl", False),
        ("@x.pl", False),
        ("", False),
        (None, False),
    ],
)
def test_is_email_shape(value, ok):
    assert is_email_shape(value) is ok


@pytest.mark.parametrize(
    "value,ok",
    [
        ("", True),
        (None, True),
        ("600123456", True),
        ("+48 600 123 456", True),
        ("123456", False),
        ("1234567890123456", False),
        ("abc", False),
    ],
)
def test_is_phone_shape(value, ok):
    assert is_phone_shape(value) is ok


def test_normalizers_never_raise_on_odd_input():
    odd = [object(), [], {}, b"bytes", float("inf")]
    for value in odd:
        normalize_text(value)
        normalize_optional(value)
        normalize_phone(value)
        is_email_shape(value)
        is_phone_shape(value)
