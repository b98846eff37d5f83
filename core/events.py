# core/events.py
from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field


ConversationId = Union[int, str]


class EventKind(str, Enum):
    START = "start"
    COMMAND = "command"
    SELECTION = "selection"
    TEXT = "text"


class Event(BaseModel):
    """
    An inbound chat event, already stripped of transport details.
    This does NOT execute logic.
    """

    conversation_id: ConversationId
    kind: EventKind
    payload: str = ""


class Button(BaseModel):
    label: str
    selection_id: str


class OutboundMessage(BaseModel):
    """
    Transport-neutral description of one reply.
    `controls` is an ordered list of button rows.
    """

    conversation_id: ConversationId
    text: str
    parse_mode: Optional[Literal["Markdown"]] = None
    controls: List[List[Button]] = Field(default_factory=list)

    # Path of an image to send as a photo, with `text` as its caption
    photo: Optional[str] = None
