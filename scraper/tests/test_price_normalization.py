"""Tests for scraped price string normalization."""

import pytest

from scraper.html_utils import normalize_price


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("€19,99", 19.99),
        ("1299", 1299.0),
        ("89.90", 89.9),
        ("$ 24.50", 24.5),
        ("19,99 €", 19.99),
        ("Preis: 7,5", 7.5),
        ("-5,00", -5.0),
        ("3", 3.0),
    ],
)
def test_normalize_price(raw, expected):
    assert normalize_price(raw) == expected


def test_only_first_comma_becomes_decimal_point():
    # "1,299,00" -> "1.299,00" -> leading float "1.299"
    assert normalize_price("1,299,00") == 1.3


def test_thousands_separator_is_lossy():
    # Known heuristic limitation: the dot is read as the decimal separator
    assert normalize_price("1.299,00 €") == 1.3


@pytest.mark.parametrize("raw", [None, "", "   ", "Preis auf Anfrage", "€", "-", "."])
def test_unparsable_prices(raw):
    assert normalize_price(raw) is None


def test_rounds_to_two_decimals():
    assert normalize_price("9.999") == 10.0


@pytest.mark.parametrize("raw, expected", [("0.125", 0.13), ("2,675", 2.68), ("1.005", 1.01), ("-0.125", -0.13)])
def test_ties_round_half_up(raw, expected):
    assert normalize_price(raw) == expected
