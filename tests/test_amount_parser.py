"""Tests for amount parsing."""

import logging
from decimal import Decimal

import pytest

from ledgerline.utils.amount_parser import parse_amount, parse_amount_or_zero, to_decimal


def test_parse_plain_amount():
    assert parse_amount("123.45") == Decimal("123.45")


def test_parse_amount_with_separators_and_currency():
    assert parse_amount("$1,234.56") == Decimal("1234.56")
    assert parse_amount("1,500 ر.س") == Decimal("1500")
    assert parse_amount("SAR 99.5") == Decimal("99.5")


def test_parse_parentheses_negative():
    assert parse_amount("(250.00)") == Decimal("-250.00")


def test_parse_amount_rejects_garbage():
    with pytest.raises(ValueError):
        parse_amount("abc")


def test_parse_amount_rejects_empty():
    with pytest.raises(ValueError):
        parse_amount("   ")


def test_parse_amount_rejects_non_finite():
    with pytest.raises(ValueError):
        parse_amount("NaN")


def test_to_decimal_accepts_numbers():
    assert to_decimal(10) == Decimal("10")
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(Decimal("7.25")) == Decimal("7.25")


def test_to_decimal_rejects_none_and_bool():
    with pytest.raises(ValueError):
        to_decimal(None)
    with pytest.raises(ValueError):
        to_decimal(True)


def test_parse_amount_or_zero_substitutes_zero_and_logs(caplog):
    with caplog.at_level(logging.WARNING, logger="ledgerline"):
        result = parse_amount_or_zero("abc", context="sale 7")

    assert result == Decimal("0")
    assert "Malformed amount 'abc' on sale 7" in caplog.text


def test_parse_amount_or_zero_treats_missing_as_zero():
    assert parse_amount_or_zero(None) == Decimal("0")


def test_parse_amount_or_zero_rejects_negative_by_default(caplog):
    with caplog.at_level(logging.WARNING, logger="ledgerline"):
        assert parse_amount_or_zero("-5") == Decimal("0")
    assert "Negative amount" in caplog.text


def test_parse_amount_or_zero_allows_negative_when_asked():
    assert parse_amount_or_zero("-5", allow_negative=True) == Decimal("-5")


def test_to_decimal_rejects_out_of_range_amounts():
    with pytest.raises(ValueError, match="out of range"):
        to_decimal("9e999999")
    with pytest.raises(ValueError, match="out of range"):
        to_decimal(Decimal("1e-40"))
    assert to_decimal("999999999999.99") == Decimal("999999999999.99")


def test_parse_amount_or_zero_counts_huge_amount_as_zero(caplog):
    with caplog.at_level(logging.WARNING, logger="ledgerline"):
        result = parse_amount_or_zero("9e999999", context="sale 9")

    assert result == Decimal("0")
    assert "out of range" in caplog.text
