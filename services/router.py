# services/router.py
"""
Conversation Router

- One dispatch table for menu selections, one for awaited free text
- Events for the same conversation are handled one at a time
- Events for different conversations never wait on each other
"""

import asyncio
from collections import defaultdict
from typing import Awaitable, Callable, Dict, List, Optional

from agents.advice_agent import AdviceProvider
from config import MAX_TEXT_LENGTH, MENU_IMAGE_PATH
from core.category import ExpenseCategory
from core.events import ConversationId, Event, EventKind, OutboundMessage
from core.log_config import get_logger
from core.selection import Selection, parse_selection
from core.state import (
    IDLE,
    AwaitingAmount,
    AwaitingEnquiry,
    AwaitingFeedback,
    AwaitingGoalText,
    ConversationState,
    PendingAction,
)
from executors.base import BaseExecutor, TextInput
from executors.enquiry import EnquiryExecutor
from executors.expense import ExpenseAmountExecutor
from executors.feedback import FeedbackExecutor
from executors.goal import GoalExecutor
from services import messages
from services.clock import Clock, get_today
from services.feedback_sink import CsvFeedbackSink
from services.ledger_summary import summarize
from services.stores import ExpenseLedger, GoalRecord, SessionStore

logger = get_logger("conversation_router")

COMMAND_PREFIX = "/"

SelectionHandler = Callable[[ConversationId, Optional[ExpenseCategory]], Awaitable[List[OutboundMessage]]]
Deliver = Callable[[List[OutboundMessage]], Awaitable[None]]


class ConversationRouter:
    def __init__(
        self,
        advice: AdviceProvider,
        feedback_sink: CsvFeedbackSink,
        sessions: Optional[SessionStore] = None,
        ledger: Optional[ExpenseLedger] = None,
        goals: Optional[GoalRecord] = None,
        clock: Clock = get_today,
        menu_image: Optional[str] = MENU_IMAGE_PATH,
        max_text_length: int = MAX_TEXT_LENGTH,
    ):
        self.advice = advice
        self.sessions = sessions or SessionStore()
        self.ledger = ledger or ExpenseLedger()
        self.goals = goals or GoalRecord()
        self.menu_image = menu_image
        self.max_text_length = max_text_length

        self._locks: Dict[ConversationId, asyncio.Lock] = defaultdict(asyncio.Lock)

        # -----------------------------
        # Selection id -> handler (SINGLE SOURCE OF TRUTH)
        # -----------------------------
        self._selection_handlers: Dict[Selection, SelectionHandler] = {
            Selection.EXPENSE_MENU: self._expense_menu,
            Selection.GOALS_MENU: self._goals_menu,
            Selection.ADD_EXPENSE: self._add_expense,
            Selection.CATEGORY: self._select_category,
            Selection.VIEW_EXPENSES: self._view_expenses,
            Selection.VIEW_ALL_EXPENSES: self._view_all_expenses,
            Selection.CLEAR_EXPENSES: self._clear_expenses,
            Selection.SET_GOAL: self._set_goal,
            Selection.FEEDBACK: self._feedback,
            Selection.GENERAL_ENQUIRY: self._general_enquiry,
            Selection.MAIN_MENU: self._main_menu,
        }

        # -----------------------------
        # Pending action -> free-text executor
        # -----------------------------
        self._text_executors: Dict[PendingAction, BaseExecutor] = {
            PendingAction.ADD_EXPENSE_AMOUNT: ExpenseAmountExecutor(self.ledger, clock),
            PendingAction.SET_GOAL: GoalExecutor(self.goals),
            PendingAction.FEEDBACK: FeedbackExecutor(feedback_sink),
            PendingAction.GENERAL_ENQUIRY: EnquiryExecutor(advice),
        }

    # -----------------------------
    # Entry point
    # -----------------------------
    async def handle(self, event: Event, deliver: Optional[Deliver] = None) -> List[OutboundMessage]:
        """
        Apply one inbound event and return the replies to deliver.
        An empty list means the event was ignored.

        When `deliver` is given, the replies are sent through it before the
        conversation lock is released, so replies in one chat keep event order.
        """
        async with self._locks[event.conversation_id]:
            logger.info(
                f"[EVENT] conversation_id={event.conversation_id}, "
                f"kind={event.kind.value}, payload_length={len(event.payload)}"
            )

            replies = await self._dispatch(event)
            if deliver is not None and replies:
                await deliver(replies)
            return replies

    async def _dispatch(self, event: Event) -> List[OutboundMessage]:
        if event.kind is EventKind.START:
            return await self._start(event.conversation_id)
        if event.kind is EventKind.SELECTION:
            return await self._handle_selection(event)
        if event.kind is EventKind.TEXT:
            return await self._handle_text(event)

        # Other commands have no handler
        return []

    def state_of(self, conversation_id: ConversationId) -> ConversationState:
        return self.sessions.get(conversation_id)

    def _transition(self, conversation_id: ConversationId, state: ConversationState) -> None:
        previous = self.sessions.get(conversation_id)
        self.sessions.set(conversation_id, state)
        if previous != state:
            logger.info(
                f"[TRANSITION] conversation_id={conversation_id}, "
                f"from={type(previous).__name__}, to={type(state).__name__}"
            )

    async def _handle_selection(self, event: Event) -> List[OutboundMessage]:
        parsed = parse_selection(event.payload)
        if parsed is None:
            logger.info(f"[UNKNOWN_SELECTION] conversation_id={event.conversation_id}")
            return []
        selection, category = parsed
        return await self._selection_handlers[selection](event.conversation_id, category)

    async def _handle_text(self, event: Event) -> List[OutboundMessage]:
        text = event.payload
        if not text or text.startswith(COMMAND_PREFIX):
            return []

        state = self.sessions.get(event.conversation_id)
        if not state.expecting:
            return []

        if len(text) > self.max_text_length:
            return [messages.text_too_long(event.conversation_id, self.max_text_length)]

        executor = self._text_executors[state.pending_action]
        outcome = await executor.execute(TextInput(conversation_id=event.conversation_id, text=text, state=state))
        self._transition(event.conversation_id, outcome.state)
        return outcome.messages

    # -----------------------------
    # Commands
    # -----------------------------
    async def _start(self, conversation_id: ConversationId) -> List[OutboundMessage]:
        self._transition(conversation_id, IDLE)
        return messages.main_menu(conversation_id, welcome_back=False, photo=self.menu_image)

    # -----------------------------
    # Selections
    # -----------------------------
    async def _expense_menu(self, conversation_id, _category):
        return [messages.expense_menu(conversation_id)]

    async def _goals_menu(self, conversation_id, _category):
        return [messages.goals_menu(conversation_id)]

    async def _add_expense(self, conversation_id, _category):
        return [messages.category_menu(conversation_id)]

    async def _select_category(self, conversation_id, category):
        self._transition(conversation_id, AwaitingAmount(category=category))
        return [messages.amount_prompt(conversation_id, category)]

    async def _view_expenses(self, conversation_id, _category):
        summary = summarize(self.ledger.entries(conversation_id))
        if summary.is_empty:
            return [messages.no_expenses(conversation_id)]

        tip = None
        if summary.top_category is not None:
            tip = await self.advice.tip_for(summary.top_category.label)
        return [messages.expense_summary(conversation_id, summary, tip)]

    async def _view_all_expenses(self, conversation_id, _category):
        entries = self.ledger.entries(conversation_id)
        if not entries:
            return [messages.no_expenses(conversation_id)]
        return [messages.expense_list(conversation_id, entries)]

    async def _clear_expenses(self, conversation_id, _category):
        removed = self.ledger.clear(conversation_id)
        logger.info(f"[EXPENSES_CLEARED] conversation_id={conversation_id}, removed={removed}")
        return [messages.expenses_cleared(conversation_id, removed)]

    async def _set_goal(self, conversation_id, _category):
        self._transition(conversation_id, AwaitingGoalText())
        return [messages.goal_prompt(conversation_id)]

    async def _feedback(self, conversation_id, _category):
        self._transition(conversation_id, AwaitingFeedback())
        return [messages.feedback_prompt(conversation_id)]

    async def _general_enquiry(self, conversation_id, _category):
        self._transition(conversation_id, AwaitingEnquiry())
        return [messages.enquiry_prompt(conversation_id)]

    async def _main_menu(self, conversation_id, _category):
        self._transition(conversation_id, IDLE)
        return messages.main_menu(conversation_id, welcome_back=True, photo=self.menu_image)
