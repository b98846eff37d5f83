# core/selection.py
from enum import Enum
from typing import Optional, Tuple

from core.category import ExpenseCategory


CATEGORY_PREFIX = "category_"


class Selection(str, Enum):
    """
    Bounded vocabulary of menu taps.
    Values are the callback payloads carried by inline buttons.
    """

    EXPENSE_MENU = "expense_tracking"
    GOALS_MENU = "financial_goals"
    ADD_EXPENSE = "add_expense"
    CATEGORY = "category"
    VIEW_EXPENSES = "view_expenses"
    VIEW_ALL_EXPENSES = "view_all_expenses"
    CLEAR_EXPENSES = "clear_expenses"
    SET_GOAL = "set_goal"
    FEEDBACK = "feedback"
    GENERAL_ENQUIRY = "general_enquiries"
    MAIN_MENU = "main_menu"


def category_payload(category: ExpenseCategory) -> str:
    return f"{CATEGORY_PREFIX}{category.value}"


def parse_selection(payload: str) -> Optional[Tuple[Selection, Optional[ExpenseCategory]]]:
    """
    Map a raw callback payload to (selection, category).
    Returns None for anything outside the vocabulary.
    """
    if not payload:
        return None

    if payload.startswith(CATEGORY_PREFIX):
        category = ExpenseCategory.from_value(payload[len(CATEGORY_PREFIX):])
        if category is None:
            return None
        return Selection.CATEGORY, category

    try:
        selection = Selection(payload)
    except ValueError:
        return None

    # A bare "category" payload carries no category and is not a valid tap
    if selection is Selection.CATEGORY:
        return None
    return selection, None
