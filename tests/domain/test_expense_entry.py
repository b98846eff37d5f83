from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from core.category import ExpenseCategory
from models.expense import ExpenseEntry
from services.messages import money


def _entry(amount):
    return ExpenseEntry(amount=Decimal(amount), category=ExpenseCategory.FOOD, date=date(2025, 1, 1))


@pytest.mark.parametrize(
    "raw, stored",
    [
        ("0.005", Decimal("0.01")),
        ("2.675", Decimal("2.68")),
        ("12.5", Decimal("12.50")),
    ],
)
def test_amount_rounds_half_up_to_cents(raw, stored):
    assert _entry(raw).amount == stored


def test_amount_that_rounds_to_zero_is_rejected():
    with pytest.raises(ValidationError):
        _entry("0.004")


def test_money_has_no_thousands_separator():
    assert money(Decimal("1200")) == "$1200.00"
