import asyncio
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from agents.advice_agent import Persona
from core.category import ExpenseCategory
from core.errors import FeedbackWriteError
from core.events import Event, EventKind
from core.state import (
    IDLE,
    AwaitingAmount,
    AwaitingEnquiry,
    AwaitingFeedback,
    AwaitingGoalText,
)
from services.router import ConversationRouter
from tests.fakes import snapshot

CHAT = 1001


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------

def _select(payload, chat=CHAT):
    return Event(conversation_id=chat, kind=EventKind.SELECTION, payload=payload)


def _text(payload, chat=CHAT):
    return Event(conversation_id=chat, kind=EventKind.TEXT, payload=payload)


def _start(chat=CHAT):
    return Event(conversation_id=chat, kind=EventKind.START, payload="/start")


def _run(router, *events):
    """Handle events in order on one loop; return the replies of each."""

    async def _go():
        return [await router.handle(event) for event in events]

    return asyncio.run(_go())


def _snapshot(router, chat=CHAT):
    return snapshot(chat, router.sessions, router.ledger, router.goals)


# ---------------------------------------------------------------------
# Start / menus
# ---------------------------------------------------------------------

def test_start_resets_to_idle_and_shows_main_menu(router):
    router.sessions.set(CHAT, AwaitingGoalText())

    (replies,) = _run(router, _start())

    assert router.state_of(CHAT) == IDLE
    assert len(replies) == 1
    ids = [button.selection_id for row in replies[0].controls for button in row]
    assert ids == ["expense_tracking", "financial_goals", "general_enquiries", "feedback"]


def test_start_sends_banner_photo_when_configured(advice, tmp_path):
    router = ConversationRouter(
        advice=advice,
        feedback_sink=MagicMock(),
        menu_image=str(tmp_path / "menu.jpg"),
    )

    (replies,) = _run(router, _start())

    assert replies[0].photo == str(tmp_path / "menu.jpg")
    assert "Welcome" in replies[0].text
    assert replies[1].controls


def test_menu_navigation_keeps_state(router):
    router.sessions.set(CHAT, IDLE)

    expense_menu, goals_menu, categories = _run(
        router, _select("expense_tracking"), _select("financial_goals"), _select("add_expense")
    )

    assert router.state_of(CHAT) == IDLE
    assert expense_menu[0].text == "Expense Tracking Options:"
    assert goals_menu[0].text == "Financial Goals Options:"

    rows = categories[0].controls
    assert [len(row) for row in rows] == [2, 2, 1, 1]
    assert rows[0][0].selection_id == "category_Food"
    assert rows[-1][0].selection_id == "expense_tracking"


def test_main_menu_returns_to_idle(router):
    router.sessions.set(CHAT, AwaitingEnquiry())

    (replies,) = _run(router, _select("main_menu"))

    assert router.state_of(CHAT) == IDLE
    assert replies[-1].text == "Main Menu - What would you like to do?"


def test_prompting_selections_set_awaiting_states(router):
    _run(router, _select("set_goal"))
    assert router.state_of(CHAT) == AwaitingGoalText()

    _run(router, _select("feedback"))
    assert router.state_of(CHAT) == AwaitingFeedback()

    _run(router, _select("general_enquiries"))
    assert router.state_of(CHAT) == AwaitingEnquiry()

    _run(router, _select("category_Housing"))
    assert router.state_of(CHAT) == AwaitingAmount(ExpenseCategory.HOUSING)


def test_unknown_selection_is_ignored(router):
    router.sessions.set(CHAT, AwaitingFeedback())
    before = _snapshot(router)

    (replies,) = _run(router, _select("delete_everything"))

    assert replies == []
    assert _snapshot(router) == before


# ---------------------------------------------------------------------
# Expense entry
# ---------------------------------------------------------------------

def test_add_expense_flow(router, today):
    _, _, replies = _run(router, _select("add_expense"), _select("category_Transport"), _text("12.50"))

    entries = router.ledger.entries(CHAT)
    assert len(entries) == 1
    assert entries[0].amount == Decimal("12.50")
    assert entries[0].category is ExpenseCategory.TRANSPORT
    assert entries[0].date == today

    assert "$12.50" in replies[0].text
    assert "Transport" in replies[0].text
    assert router.state_of(CHAT) == IDLE


def test_amount_is_rounded_to_cents(router):
    _run(router, _select("category_Food"), _text("3.456"))

    assert router.ledger.entries(CHAT)[0].amount == Decimal("3.46")


def test_invalid_amounts_re_prompt_without_recording(router):
    _run(router, _select("category_Food"))

    for bad in ("lunch", "0", "-4"):
        (replies,) = _run(router, _text(bad))
        assert replies[0].text == "Please enter a valid expense amount (a positive number)."
        assert router.state_of(CHAT) == AwaitingAmount(ExpenseCategory.FOOD)

    assert router.ledger.entries(CHAT) == []

    _run(router, _text("4"))
    assert len(router.ledger.entries(CHAT)) == 1


# ---------------------------------------------------------------------
# Free text while idle
# ---------------------------------------------------------------------

def test_text_while_idle_changes_nothing(router):
    router.goals.set(CHAT, "existing goal")
    before = _snapshot(router)

    (replies,) = _run(router, _text("12.50"))

    assert replies == []
    assert _snapshot(router) == before


def test_command_text_is_dropped_even_when_expecting(router):
    _run(router, _select("set_goal"))
    before = _snapshot(router)

    replies = _run(
        router,
        _text("/help"),
        Event(conversation_id=CHAT, kind=EventKind.COMMAND, payload="/help"),
    )

    assert replies == [[], []]
    assert _snapshot(router) == before


def test_over_long_text_is_rejected(router):
    _run(router, _select("set_goal"))

    (replies,) = _run(router, _text("x" * 201))

    assert "too long" in replies[0].text
    assert router.state_of(CHAT) == AwaitingGoalText()
    assert router.goals.get(CHAT) is None


# ---------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------

def test_goal_is_stored_verbatim_and_overwritten(router):
    _run(router, _select("set_goal"), _text("500 by December 2025 for emergency fund"))

    assert router.goals.get(CHAT) == "500 by December 2025 for emergency fund"
    assert router.state_of(CHAT) == IDLE

    _, (reply,) = _run(router, _select("set_goal"), _text("1000 for a holiday"))

    assert router.goals.get(CHAT) == "1000 for a holiday"
    assert reply.parse_mode == "Markdown"
    assert "1000 for a holiday" in reply.text


# ---------------------------------------------------------------------
# Feedback
# ---------------------------------------------------------------------

def test_feedback_is_saved_and_returns_to_idle(router, feedback_path):
    _, (reply,) = _run(router, _select("feedback"), _text("Great bot!"))

    assert reply.text.startswith("Thank you for your feedback")
    assert router.state_of(CHAT) == IDLE
    assert "Great bot!" in feedback_path.read_text(encoding="utf-8")


def test_feedback_failure_keeps_awaiting_feedback(advice):
    sink = MagicMock()
    sink.append = AsyncMock(side_effect=FeedbackWriteError("disk full"))
    router = ConversationRouter(advice=advice, feedback_sink=sink, menu_image=None)

    _, (reply,) = _run(router, _select("feedback"), _text("Great bot!"))

    assert "issue saving your feedback" in reply.text
    assert router.state_of(CHAT) == AwaitingFeedback()
    sink.append.assert_awaited_once()


# ---------------------------------------------------------------------
# General enquiries
# ---------------------------------------------------------------------

def test_enquiry_forwards_text_and_returns_to_idle(router, fake_agents):
    _, (reply,) = _run(router, _select("general_enquiries"), _text("How does CPF work?"))

    assert fake_agents[Persona.ENQUIRY].prompts == ["How does CPF work?"]
    assert reply.text == "Consider the CPF top-up scheme."
    assert reply.controls[0][0].selection_id == "general_enquiries"
    assert router.state_of(CHAT) == IDLE


def test_enquiry_provider_failure_still_returns_to_idle(router, fake_agents):
    fake_agents[Persona.ENQUIRY].error = RuntimeError("503")

    _, (reply,) = _run(router, _select("general_enquiries"), _text("Anything?"))

    assert reply.text == "There was an error processing your request. Please try again later."
    assert router.state_of(CHAT) == IDLE


# ---------------------------------------------------------------------
# Viewing and clearing expenses
# ---------------------------------------------------------------------

def test_view_expenses_empty_skips_advice(router, fake_agents):
    (replies,) = _run(router, _select("view_expenses"))

    assert replies[0].text == "You haven't tracked any expenses yet."
    assert fake_agents[Persona.TIP].prompts == []


def test_view_expenses_summary_with_tip(router, fake_agents):
    _run(
        router,
        _select("category_Food"), _text("10"),
        _select("category_Transport"), _text("15"),
    )

    (replies,) = _run(router, _select("view_expenses"))
    text = replies[0].text

    assert "Food 🍲: $10.00 (40.0%)" in text
    assert "Transport 🚗: $15.00 (60.0%)" in text
    assert "Housing" not in text
    assert "*Total Expenses: $25.00*" in text
    assert "Your highest spending is in Transport 🚗. Cook at home more often." in text
    assert len(fake_agents[Persona.TIP].prompts) == 1
    assert router.state_of(CHAT) == IDLE


def test_view_all_expenses_lists_in_order(router, today):
    _run(
        router,
        _select("category_Others"), _text("2"),
        _select("category_Healthcare"), _text("30.5"),
    )

    (replies,) = _run(router, _select("view_all_expenses"))
    lines = replies[0].text.splitlines()

    assert lines[2] == f"1. $2.00 - Others ({today.isoformat()})"
    assert lines[3] == f"2. $30.50 - Healthcare 🏥 ({today.isoformat()})"


def test_clear_expenses_is_idempotent(router):
    _run(router, _select("category_Food"), _text("5"))

    cleared, again = _run(router, _select("clear_expenses"), _select("clear_expenses"))

    assert cleared[0].text == "✅ Your expenses have been cleared!"
    assert again[0].text == "You have no expenses to clear."
    assert router.ledger.entries(CHAT) == []


# ---------------------------------------------------------------------
# Isolation between conversations
# ---------------------------------------------------------------------

def test_conversations_do_not_share_state(router):
    _run(router, _select("category_Food", chat=1), _text("7", chat=1))
    _run(router, _select("set_goal", chat=2))

    assert len(router.ledger.entries(1)) == 1
    assert router.ledger.entries(2) == []
    assert router.state_of(1) == IDLE
    assert router.state_of(2) == AwaitingGoalText()
