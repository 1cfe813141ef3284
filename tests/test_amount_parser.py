"""Tests for Rupiah amount parsing."""

import pytest

from dompet.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "text,expected",
    [
        ("150000", 150000.0),
        ("Rp150.000", 150000.0),
        ("Rp. 25.000", 25000.0),
        ("IDR 1.500.000", 1500000.0),
        ("Rp12.345,50", 12345.5),
        ("12,345.50", 12345.5),
        ("1,500,000", 1500000.0),
        ("12.5", 12.5),
        ("12,5", 12.5),
        ("-Rp5.000", -5000.0),
        ("  7500 ", 7500.0),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == pytest.approx(expected)


@pytest.mark.parametrize("text", ["", "   ", "abc", "Rp", "nan", "inf"])
def test_parse_amount_invalid(text):
    with pytest.raises(ValueError):
        parse_amount(text)
