from agents.advice_agent import AdviceProvider
from config import get_bot_token
from services.feedback_sink import CsvFeedbackSink
from services.reminder import DailyReminder
from services.router import ConversationRouter
from services.stores import ExpenseLedger, GoalRecord, SessionStore
from transport.telegram_app import FinanceBot


def build_bot() -> FinanceBot:
    advice = AdviceProvider()
    ledger = ExpenseLedger()
    goals = GoalRecord()

    router = ConversationRouter(
        advice=advice,
        feedback_sink=CsvFeedbackSink(),
        sessions=SessionStore(),
        ledger=ledger,
        goals=goals,
    )
    reminder = DailyReminder(goals=goals, ledger=ledger, advice=advice)
    return FinanceBot(get_bot_token(), router, reminder)


def main():
    build_bot().run()


if __name__ == "__main__":
    main()
