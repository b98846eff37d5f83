# services/reminder.py
from typing import List

from agents.advice_agent import AdviceProvider
from core.events import OutboundMessage
from core.log_config import get_logger
from services import messages
from services.ledger_summary import summarize
from services.stores import ExpenseLedger, GoalRecord

logger = get_logger("daily_reminder")


class DailyReminder:
    """
    Builds one reminder per conversation that has a goal.

    With recorded expenses the reminder names the top category and carries a
    tip for it; without expenses it carries a fixed "start tracking" tip and
    the advice provider is not called.
    """

    def __init__(self, goals: GoalRecord, ledger: ExpenseLedger, advice: AdviceProvider):
        self.goals = goals
        self.ledger = ledger
        self.advice = advice

    async def build_reminders(self) -> List[OutboundMessage]:
        reminders = []
        for conversation_id, goal in self.goals.items():
            summary = summarize(self.ledger.entries(conversation_id))

            if summary.top_category is None:
                reminders.append(
                    messages.reminder(conversation_id, goal, None, messages.START_TRACKING_TIP)
                )
                continue

            tip = await self.advice.tip_for(summary.top_category.label, fallback=messages.STATIC_TIP)
            reminders.append(messages.reminder(conversation_id, goal, summary.top_category, tip))

        logger.info(f"[REMINDERS_BUILT] count={len(reminders)}")
        return reminders
