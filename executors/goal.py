from core.state import IDLE
from executors.base import BaseExecutor, Outcome, TextInput
from services import messages
from services.stores import GoalRecord


class GoalExecutor(BaseExecutor):
    """Stores the typed goal verbatim, replacing any earlier goal."""

    def __init__(self, goals: GoalRecord):
        self.goals = goals

    async def execute(self, text_input: TextInput) -> Outcome:
        self.goals.set(text_input.conversation_id, text_input.text)
        return Outcome(state=IDLE, messages=[messages.goal_saved(text_input.conversation_id, text_input.text)])
