from agents.advice_agent import AdviceProvider, Persona
from core.state import IDLE
from executors.base import BaseExecutor, Outcome, TextInput
from services import messages


class EnquiryExecutor(BaseExecutor):
    """
    Forwards a general question to the advice provider.
    The provider always answers with text, so this always returns to idle.
    """

    def __init__(self, advice: AdviceProvider):
        self.advice = advice

    async def execute(self, text_input: TextInput) -> Outcome:
        reply = await self.advice.advise(text_input.text, persona=Persona.ENQUIRY)
        return Outcome(state=IDLE, messages=[messages.enquiry_reply(text_input.conversation_id, reply)])
