from datetime import date
from decimal import Decimal

from core.category import ExpenseCategory
from models.expense import ExpenseEntry
from services.ledger_summary import percentage_shares, summarize, top_category

DAY = date(2025, 1, 1)


def _entry(amount, category):
    return ExpenseEntry(amount=Decimal(amount), category=category, date=DAY)


# ---------------------------------------------------------------------
# Totals
# ---------------------------------------------------------------------

def test_empty_ledger_summary():
    summary = summarize([])

    assert summary.is_empty
    assert summary.grand_total == Decimal("0")
    assert summary.shares == {}
    assert summary.top_category is None
    assert list(summary.category_totals) == list(ExpenseCategory)


def test_totals_and_shares():
    summary = summarize(
        [
            _entry("10", ExpenseCategory.FOOD),
            _entry("5", ExpenseCategory.TRANSPORT),
            _entry("10", ExpenseCategory.TRANSPORT),
        ]
    )

    assert summary.entry_count == 3
    assert summary.grand_total == Decimal("25.00")
    assert summary.category_totals[ExpenseCategory.FOOD] == Decimal("10.00")
    assert summary.category_totals[ExpenseCategory.TRANSPORT] == Decimal("15.00")
    assert summary.category_totals[ExpenseCategory.HOUSING] == Decimal("0.00")
    assert summary.shares == {
        ExpenseCategory.FOOD: Decimal("40.0"),
        ExpenseCategory.TRANSPORT: Decimal("60.0"),
    }
    assert summary.top_category is ExpenseCategory.TRANSPORT


def test_grand_total_equals_sum_of_entries():
    amounts = ["3.10", "4.25", "0.65", "12.00", "7.77"]
    entries = [_entry(a, c) for a, c in zip(amounts, ExpenseCategory)]

    summary = summarize(entries)

    assert summary.grand_total == sum(Decimal(a) for a in amounts)
    assert sum(summary.category_totals.values()) == summary.grand_total


# ---------------------------------------------------------------------
# Shares
# ---------------------------------------------------------------------

def test_shares_sum_to_one_hundred_for_thirds():
    totals = {
        ExpenseCategory.FOOD: Decimal("1"),
        ExpenseCategory.HOUSING: Decimal("1"),
        ExpenseCategory.OTHERS: Decimal("1"),
    }

    shares = percentage_shares(totals, Decimal("3"))

    assert sum(shares.values()) == Decimal("100.0")
    assert shares[ExpenseCategory.FOOD] == Decimal("33.4")
    assert shares[ExpenseCategory.HOUSING] == Decimal("33.3")
    assert shares[ExpenseCategory.OTHERS] == Decimal("33.3")


def test_shares_sum_to_one_hundred_with_uneven_amounts():
    entries = [
        _entry("1.01", ExpenseCategory.FOOD),
        _entry("2.02", ExpenseCategory.TRANSPORT),
        _entry("3.03", ExpenseCategory.HOUSING),
        _entry("4.04", ExpenseCategory.HEALTHCARE),
        _entry("0.07", ExpenseCategory.OTHERS),
    ]

    summary = summarize(entries)

    assert abs(sum(summary.shares.values()) - Decimal("100")) <= Decimal("0.1")
    for category, share in summary.shares.items():
        exact = summary.category_totals[category] / summary.grand_total * 100
        assert abs(share - exact) < Decimal("0.1")


def test_zero_categories_have_no_share():
    summary = summarize([_entry("9.99", ExpenseCategory.HEALTHCARE)])

    assert summary.shares == {ExpenseCategory.HEALTHCARE: Decimal("100.0")}


# ---------------------------------------------------------------------
# Top category
# ---------------------------------------------------------------------

def test_tie_goes_to_earlier_category():
    entries = [
        _entry("10", ExpenseCategory.HOUSING),
        _entry("10", ExpenseCategory.TRANSPORT),
    ]

    for _ in range(3):
        assert summarize(entries).top_category is ExpenseCategory.TRANSPORT


def test_top_category_none_when_nothing_spent():
    assert top_category({category: Decimal("0") for category in ExpenseCategory}) is None
