# models/summary.py
from decimal import Decimal
from typing import Dict, Optional

from pydantic import BaseModel, Field

from core.category import ExpenseCategory


class LedgerSummary(BaseModel):
    """
    Aggregates over one conversation's ledger.
    `category_totals` holds every category in declaration order, zero included.
    `shares` holds percentages (1 decimal) only for categories with spending.
    """

    category_totals: Dict[ExpenseCategory, Decimal] = Field(default_factory=dict)
    grand_total: Decimal = Decimal("0.00")
    shares: Dict[ExpenseCategory, Decimal] = Field(default_factory=dict)
    top_category: Optional[ExpenseCategory] = None
    entry_count: int = 0

    @property
    def is_empty(self) -> bool:
        return self.entry_count == 0
