# services/messages.py
"""
Outbound message rendering: texts and inline keyboards.
Pure functions, no state access.
"""

from decimal import Decimal
from typing import List, Optional

from core.category import ExpenseCategory
from core.events import Button, ConversationId, OutboundMessage
from core.selection import Selection, category_payload
from models.expense import ExpenseEntry
from models.summary import LedgerSummary

MARKDOWN = "Markdown"
CATEGORIES_PER_ROW = 2

NO_EXPENSES_TEXT = "You haven't tracked any expenses yet."
START_TRACKING_TIP = "Start tracking your expenses to get personalized saving advice."
STATIC_TIP = "Consider reviewing your spending habits and adjust your budget accordingly."


def money(amount: Decimal) -> str:
    return f"${amount:.2f}"


def _button(label: str, selection: Selection) -> Button:
    return Button(label=label, selection_id=selection.value)


BACK_TO_MAIN = [_button("🔙 Back to Main Menu", Selection.MAIN_MENU)]
MAIN_MENU_ROW = [_button("🔙 Main Menu", Selection.MAIN_MENU)]
BACK_TO_EXPENSES = [_button("🔙 Back", Selection.EXPENSE_MENU)]


# -----------------------------
# Menus
# -----------------------------
def main_menu_controls() -> List[List[Button]]:
    return [
        [_button("📊 Expense Tracking", Selection.EXPENSE_MENU)],
        [_button("💰 Financial Goals", Selection.GOALS_MENU)],
        [_button("ℹ️ General Enquiries", Selection.GENERAL_ENQUIRY)],
        [_button("📩 Feedback & Support", Selection.FEEDBACK)],
    ]


def main_menu(
    conversation_id: ConversationId, *, welcome_back: bool, photo: Optional[str]
) -> List[OutboundMessage]:
    caption = (
        "Welcome back to your Singapore Finance Assistant 🇸🇬"
        if welcome_back
        else "Welcome to your Singapore Finance Assistant 🇸🇬"
    )
    prompt = (
        "Main Menu - What would you like to do?"
        if welcome_back
        else "I can help you manage your finances in Singapore. What would you like to do?"
    )
    messages = []
    if photo:
        messages.append(OutboundMessage(conversation_id=conversation_id, text=caption, photo=photo))
    messages.append(
        OutboundMessage(conversation_id=conversation_id, text=prompt, controls=main_menu_controls())
    )
    return messages


def expense_menu(conversation_id: ConversationId) -> OutboundMessage:
    return OutboundMessage(
        conversation_id=conversation_id,
        text="Expense Tracking Options:",
        controls=[
            [
                _button("📝 Add New Expense", Selection.ADD_EXPENSE),
                _button("📊 View Expenses", Selection.VIEW_EXPENSES),
            ],
            BACK_TO_MAIN,
        ],
    )


def goals_menu(conversation_id: ConversationId) -> OutboundMessage:
    return OutboundMessage(
        conversation_id=conversation_id,
        text="Financial Goals Options:",
        controls=[[_button("🎯 Set Financial Goal", Selection.SET_GOAL)], BACK_TO_MAIN],
    )


def category_controls() -> List[List[Button]]:
    categories = list(ExpenseCategory)
    rows = [
        [
            Button(label=category.label, selection_id=category_payload(category))
            for category in categories[i:i + CATEGORIES_PER_ROW]
        ]
        for i in range(0, len(categories), CATEGORIES_PER_ROW)
    ]
    rows.append(BACK_TO_EXPENSES)
    return rows


def category_menu(conversation_id: ConversationId) -> OutboundMessage:
    return OutboundMessage(
        conversation_id=conversation_id,
        text="Please select a category for your expense:",
        controls=category_controls(),
    )


# -----------------------------
# Prompts
# -----------------------------
def amount_prompt(conversation_id: ConversationId, category: ExpenseCategory) -> OutboundMessage:
    return OutboundMessage(
        conversation_id=conversation_id,
        text=f"Selected category: {category.label}\nPlease enter the expense amount in SGD (e.g., 15.50):",
    )


def invalid_amount(conversation_id: ConversationId) -> OutboundMessage:
    return OutboundMessage(
        conversation_id=conversation_id,
        text="Please enter a valid expense amount (a positive number).",
    )


def goal_prompt(conversation_id: ConversationId) -> OutboundMessage:
    return OutboundMessage(
        conversation_id=conversation_id,
        text=(
            "Please set your financial goal in this format:\n\n"
            "'amount in SGD + target date + purpose'\n\n"
            "Example: '500 by December 2025 for emergency fund'"
        ),
    )


def feedback_prompt(conversation_id: ConversationId) -> OutboundMessage:
    return OutboundMessage(
        conversation_id=conversation_id,
        text="Please share your feedback or questions about the bot. We appreciate your input!",
        controls=[BACK_TO_MAIN],
    )


def enquiry_prompt(conversation_id: ConversationId) -> OutboundMessage:
    return OutboundMessage(
        conversation_id=conversation_id,
        text="Hello! How are you doing today? What can I help you with regarding finances in Singapore?",
        controls=[BACK_TO_MAIN],
    )


def text_too_long(conversation_id: ConversationId, limit: int) -> OutboundMessage:
    return OutboundMessage(
        conversation_id=conversation_id,
        text=f"That message is too long. Please keep it under {limit} characters and try again.",
    )


# -----------------------------
# Confirmations
# -----------------------------
def expense_added(conversation_id: ConversationId, entry: ExpenseEntry) -> OutboundMessage:
    return OutboundMessage(
        conversation_id=conversation_id,
        text=f"✅ Expense added: {money(entry.amount)} for {entry.category.label}",
        controls=[
            [
                _button("Add Another Expense", Selection.ADD_EXPENSE),
                _button("View Expenses", Selection.VIEW_EXPENSES),
            ],
            MAIN_MENU_ROW,
        ],
    )


def goal_saved(conversation_id: ConversationId, goal: str) -> OutboundMessage:
    return OutboundMessage(
        conversation_id=conversation_id,
        text=f"✅ Financial goal set: *{goal}*\n\nI'll send you daily reminders to help you stay on track!",
        parse_mode=MARKDOWN,
        controls=[MAIN_MENU_ROW],
    )


def feedback_thanks(conversation_id: ConversationId) -> OutboundMessage:
    return OutboundMessage(
        conversation_id=conversation_id,
        text="Thank you for your feedback! We appreciate your input.",
        controls=[MAIN_MENU_ROW],
    )


def feedback_failed(conversation_id: ConversationId) -> OutboundMessage:
    return OutboundMessage(
        conversation_id=conversation_id,
        text="There was an issue saving your feedback. Please try sending it again.",
        controls=[BACK_TO_MAIN],
    )


def enquiry_reply(conversation_id: ConversationId, reply: str) -> OutboundMessage:
    return OutboundMessage(
        conversation_id=conversation_id,
        text=reply,
        controls=[
            [_button("Ask Another Question", Selection.GENERAL_ENQUIRY)],
            MAIN_MENU_ROW,
        ],
    )


# -----------------------------
# Ledger views
# -----------------------------
def no_expenses(conversation_id: ConversationId) -> OutboundMessage:
    return OutboundMessage(conversation_id=conversation_id, text=NO_EXPENSES_TEXT, controls=[BACK_TO_EXPENSES])


def expense_summary(conversation_id: ConversationId, summary: LedgerSummary, tip: Optional[str]) -> OutboundMessage:
    lines = ["*Your Expenses Summary*", "", "*Category Breakdown:*"]
    for category, share in summary.shares.items():
        lines.append(f"{category.label}: {money(summary.category_totals[category])} ({share}%)")
    lines.append("")
    lines.append(f"*Total Expenses: {money(summary.grand_total)}*")

    if summary.top_category is not None and tip:
        lines.append("")
        lines.append(f"💡 *Tip:* Your highest spending is in {summary.top_category.label}. {tip}")

    return OutboundMessage(
        conversation_id=conversation_id,
        text="\n".join(lines),
        parse_mode=MARKDOWN,
        controls=[
            [
                _button("See All Expenses", Selection.VIEW_ALL_EXPENSES),
                _button("Clear Expenses", Selection.CLEAR_EXPENSES),
            ],
            BACK_TO_EXPENSES,
        ],
    )


def expense_list(conversation_id: ConversationId, entries: List[ExpenseEntry]) -> OutboundMessage:
    lines = ["*All Expenses*", ""]
    for index, entry in enumerate(entries, start=1):
        lines.append(f"{index}. {money(entry.amount)} - {entry.category.label} ({entry.date.isoformat()})")
    return OutboundMessage(
        conversation_id=conversation_id,
        text="\n".join(lines),
        parse_mode=MARKDOWN,
        controls=[[_button("🔙 Back", Selection.VIEW_EXPENSES)]],
    )


def expenses_cleared(conversation_id: ConversationId, removed: int) -> OutboundMessage:
    if removed:
        return OutboundMessage(
            conversation_id=conversation_id,
            text="✅ Your expenses have been cleared!",
            controls=[[_button("🔙 Back to Expense Tracking", Selection.EXPENSE_MENU)]],
        )
    return OutboundMessage(
        conversation_id=conversation_id,
        text="You have no expenses to clear.",
        controls=[BACK_TO_EXPENSES],
    )


# -----------------------------
# Reminders
# -----------------------------
def reminder(
    conversation_id: ConversationId,
    goal: str,
    top_category: Optional[ExpenseCategory],
    tip: str,
) -> OutboundMessage:
    lines = ["⏰ *Daily Financial Reminder*", "", f"*Your goal:* {goal}", ""]
    if top_category is not None:
        lines.extend([f"💰 You've spent the most on {top_category.label}.", ""])
    lines.append(f"💡 *Tip:* {tip}")
    return OutboundMessage(conversation_id=conversation_id, text="\n".join(lines), parse_mode=MARKDOWN)
