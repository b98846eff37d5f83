# models/expense.py
from datetime import date as Date
from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.category import ExpenseCategory


class ExpenseEntry(BaseModel):
    """
    One recorded expense. Immutable once created.
    """

    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(..., gt=0, description="The amount of the expense in SGD")
    category: ExpenseCategory = Field(..., description="The category of the expense")
    date: Date = Field(..., description="Capture date of the expense")

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        if not v.is_finite():
            raise ValueError("amount must be a finite number")
        cents = v.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        if cents <= 0:
            raise ValueError("amount must be at least 0.01 after rounding to cents")
        return cents
