# core/category.py
from enum import Enum
from typing import Optional


class ExpenseCategory(str, Enum):
    """
    The closed set of expense categories.
    Declaration order is the iteration order used for summaries
    and for breaking ties between equal category totals.
    """

    FOOD = "Food"
    TRANSPORT = "Transport"
    HOUSING = "Housing"
    HEALTHCARE = "Healthcare"
    OTHERS = "Others"

    @property
    def label(self) -> str:
        return f"{self.value} {_ICONS[self]}".rstrip()

    @classmethod
    def from_value(cls, value: str) -> Optional["ExpenseCategory"]:
        for category in cls:
            if category.value.lower() == value.strip().lower():
                return category
        return None


_ICONS = {
    ExpenseCategory.FOOD: "🍲",
    ExpenseCategory.TRANSPORT: "🚗",
    ExpenseCategory.HOUSING: "🏠",
    ExpenseCategory.HEALTHCARE: "🏥",
    ExpenseCategory.OTHERS: "",
}
