from core.log_config import get_logger
from core.state import IDLE
from executors.base import BaseExecutor, Outcome, TextInput
from models.expense import ExpenseEntry
from services import messages
from services.amount_parser import parse_amount
from services.clock import Clock
from services.stores import ExpenseLedger

logger = get_logger("expense_executor")


class ExpenseAmountExecutor(BaseExecutor):
    """
    Records an amount for the category chosen earlier.
    Invalid amounts re-prompt and keep the conversation awaiting an amount.
    """

    def __init__(self, ledger: ExpenseLedger, clock: Clock):
        self.ledger = ledger
        self.clock = clock

    async def execute(self, text_input: TextInput) -> Outcome:
        category = text_input.state.pending_category
        amount = parse_amount(text_input.text)

        if amount is None or category is None:
            logger.info(f"[INVALID_AMOUNT] conversation_id={text_input.conversation_id}")
            return Outcome(
                state=text_input.state,
                messages=[messages.invalid_amount(text_input.conversation_id)],
            )

        entry = ExpenseEntry(amount=amount, category=category, date=self.clock())
        self.ledger.append(text_input.conversation_id, entry)
        logger.info(
            f"[EXPENSE_ADDED] conversation_id={text_input.conversation_id}, "
            f"category={category.value}, amount={entry.amount}"
        )
        return Outcome(state=IDLE, messages=[messages.expense_added(text_input.conversation_id, entry)])
