from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List

from core.events import ConversationId, OutboundMessage
from core.state import ConversationState


@dataclass(frozen=True)
class TextInput:
    conversation_id: ConversationId
    text: str
    state: ConversationState


@dataclass(frozen=True)
class Outcome:
    """Next conversation state plus the replies to send."""

    state: ConversationState
    messages: List[OutboundMessage] = field(default_factory=list)


class BaseExecutor(ABC):
    """
    Base contract for free-text executors.
    Executors take the text typed while a state was awaiting input and
    return an Outcome. They never touch the session store directly.
    """

    @abstractmethod
    async def execute(self, text_input: TextInput) -> Outcome:
        pass
