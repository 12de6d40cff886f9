"""
Tests for the permissive value parsers.
"""

import pytest

from tanita_viewer.value_parsers import (
    parse_float, parse_u8, parse_u16, parse_unsigned, unquote,
)


@pytest.mark.parametrize("text, expected", [
    ('"BC-601"', "BC-601"),
    ('  "BC-601"  ', "BC-601"),
    ("BC-601", "BC-601"),
    ('""', ""),
    ('"half', '"half'),
    ('"', '"'),
])
def test_unquote(text, expected):
    assert unquote(text) == expected


@pytest.mark.parametrize("text, expected", [
    ("0", 0),
    ("7", 7),
    ("+7", 7),
    ("255", 255),
    ("007", 7),
])
def test_parse_u8_accepts(text, expected):
    assert parse_u8(text) == expected


@pytest.mark.parametrize("text", [
    "", "256", "-1", "7.0", " 7", "7 ", "abc", "0x10", "١٢",
])
def test_parse_u8_falls_back_to_zero(text):
    assert parse_u8(text) == 0


def test_parse_u16_range():
    assert parse_u16("2310") == 2310
    assert parse_u16("65535") == 65535
    assert parse_u16("65536") == 0


def test_parse_unsigned_reports_absence():
    assert parse_unsigned("300", 255) is None
    assert parse_unsigned("300", 65535) == 300


@pytest.mark.parametrize("text, expected", [
    ("175.0", 175.0),
    ("19.8", 19.8),
    ("-3.5", -3.5),
    ("1e2", 100.0),
    ("70", 70.0),
])
def test_parse_float_accepts(text, expected):
    assert parse_float(text) == expected


@pytest.mark.parametrize("text", [
    "", "abc", "nan", "inf", "-inf", "1_000", " 1.5", "1,5",
])
def test_parse_float_falls_back_to_zero(text):
    assert parse_float(text) == 0.0
