from decimal import Decimal

import pytest

from services.amount_parser import parse_amount


@pytest.mark.parametrize(
    "text, expected",
    [
        ("12.50", Decimal("12.50")),
        ("S$12.50", Decimal("12.50")),
        ("1,200", Decimal("1200.00")),
        ("$.5", Decimal("0.50")),
        ("12.345", Decimal("12.35")),
        ("5-3", Decimal("5.00")),
        ("spent 8 dollars", Decimal("8.00")),
    ],
)
def test_valid_amounts(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize(
    "text",
    ["", "abc", "0", "0.00", "-5", "--5", ".", "0.001"],
)
def test_invalid_amounts_return_none(text):
    """
    Non-numeric, zero, negative and sub-cent amounts are all rejected.
    """
    assert parse_amount(text) is None
