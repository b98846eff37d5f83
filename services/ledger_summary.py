# services/ledger_summary.py
"""
Ledger aggregation.

- Category totals over the fixed category set
- Grand total
- Percentage share per category with spending
- Top category (strictly largest total, ties go to the earlier category)
"""

from decimal import ROUND_DOWN, Decimal
from typing import Dict, Iterable, Optional

from core.category import ExpenseCategory
from models.expense import ExpenseEntry
from models.summary import LedgerSummary

ZERO = Decimal("0.00")
TENTH = Decimal("0.1")
HUNDRED = Decimal("100")


def category_totals(entries: Iterable[ExpenseEntry]) -> Dict[ExpenseCategory, Decimal]:
    totals = {category: ZERO for category in ExpenseCategory}
    for entry in entries:
        totals[entry.category] += entry.amount
    return totals


def top_category(totals: Dict[ExpenseCategory, Decimal]) -> Optional[ExpenseCategory]:
    """
    Category with the strictly largest total, walking the fixed category order
    so that the first of several equal totals wins. None when nothing was spent.
    """
    best: Optional[ExpenseCategory] = None
    best_amount = ZERO
    for category in ExpenseCategory:
        amount = totals.get(category, ZERO)
        if amount > best_amount:
            best, best_amount = category, amount
    return best


def percentage_shares(
    totals: Dict[ExpenseCategory, Decimal], grand_total: Decimal
) -> Dict[ExpenseCategory, Decimal]:
    """
    Shares in percent with one decimal, for categories with a non-zero total.

    Uses largest-remainder rounding: every share is floored to a tenth, then
    the leftover tenths go to the largest remainders (ties in category order).
    The result always sums to exactly 100.0 and each share is within 0.1 of
    its exact value.
    """
    if grand_total <= 0:
        return {}

    exact = {
        category: amount / grand_total * HUNDRED
        for category, amount in totals.items()
        if amount > 0
    }
    floored = {category: value.quantize(TENTH, rounding=ROUND_DOWN) for category, value in exact.items()}

    leftover = int(((HUNDRED - sum(floored.values())) / TENTH).to_integral_value())
    order = list(ExpenseCategory)
    by_remainder = sorted(
        floored,
        key=lambda category: (-(exact[category] - floored[category]), order.index(category)),
    )
    for category in by_remainder[:leftover]:
        floored[category] += TENTH

    return {category: floored[category] for category in order if category in floored}


def summarize(entries: Iterable[ExpenseEntry]) -> LedgerSummary:
    entries = list(entries)
    totals = category_totals(entries)
    grand_total = sum(totals.values(), ZERO)
    return LedgerSummary(
        category_totals=totals,
        grand_total=grand_total,
        shares=percentage_shares(totals, grand_total),
        top_category=top_category(totals),
        entry_count=len(entries),
    )
