# core/state.py
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Union

from core.category import ExpenseCategory


class PendingAction(str, Enum):
    """
    The kind of free-text input a conversation is waiting for.
    """

    ADD_EXPENSE_AMOUNT = "add_expense_amount"
    SET_GOAL = "set_goal"
    FEEDBACK = "feedback"
    GENERAL_ENQUIRY = "general_enquiries"


# ---------------------------------------------------------------------
# Conversation states
# Each state carries exactly the payload it needs, so a pending category
# can only exist while an amount is awaited.
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class _State:
    pending_action: ClassVar[Optional[PendingAction]] = None

    @property
    def expecting(self) -> bool:
        return self.pending_action is not None

    @property
    def pending_category(self) -> Optional[ExpenseCategory]:
        return None


@dataclass(frozen=True)
class Idle(_State):
    pass


@dataclass(frozen=True)
class AwaitingAmount(_State):
    category: ExpenseCategory
    pending_action: ClassVar[Optional[PendingAction]] = PendingAction.ADD_EXPENSE_AMOUNT

    @property
    def pending_category(self) -> Optional[ExpenseCategory]:
        return self.category


@dataclass(frozen=True)
class AwaitingGoalText(_State):
    pending_action: ClassVar[Optional[PendingAction]] = PendingAction.SET_GOAL


@dataclass(frozen=True)
class AwaitingFeedback(_State):
    pending_action: ClassVar[Optional[PendingAction]] = PendingAction.FEEDBACK


@dataclass(frozen=True)
class AwaitingEnquiry(_State):
    pending_action: ClassVar[Optional[PendingAction]] = PendingAction.GENERAL_ENQUIRY


ConversationState = Union[Idle, AwaitingAmount, AwaitingGoalText, AwaitingFeedback, AwaitingEnquiry]

IDLE = Idle()
