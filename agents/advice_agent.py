# FILE: agents/advice_agent.py
from asyncio import TimeoutError, wait_for
from enum import Enum
from typing import Any, Dict, Optional

from pydantic_ai import Agent
from pydantic_ai.models.google import GoogleModel
from pydantic_ai.providers.google import GoogleProvider

from config import ADVICE_TIMEOUT_SECONDS, GEMINI_MODEL_NAME, get_google_api_key
from core.errors import AdviceUnavailableError, EmptyAdviceError
from core.log_config import get_logger
from services.text_format import normalize_advice_text

logger = get_logger("advice_agent")

ERROR_FALLBACK = "There was an error processing your request. Please try again later."
EMPTY_FALLBACK = "Sorry, I couldn't fetch an answer at the moment."


class Persona(str, Enum):
    ENQUIRY = "enquiry"
    TIP = "tip"


# -----------------------------
# System Prompts
# -----------------------------
SYSTEM_PROMPTS = {
    Persona.ENQUIRY: (
        "You are a helpful financial assistant for people in Singapore. "
        "Give advice that's relevant to Singapore's context, mentioning local services, "
        "costs, and regulations where appropriate. Focus on practical financial advice "
        "for living in Singapore. Make the response short and concise, maximum 2 paragraphs."
    ),
    Persona.TIP: (
        "You are a helpful financial assistant for people in Singapore. "
        "Provide practical, actionable financial advice tailored for Singaporeans. "
        "Keep the response concise and no more than 1-2 sentences."
    ),
}


def build_agents() -> Dict[Persona, Agent]:
    """Create one Gemini-backed agent per persona."""
    provider = GoogleProvider(api_key=get_google_api_key())
    model = GoogleModel(GEMINI_MODEL_NAME, provider=provider)
    return {
        persona: Agent(model, system_prompt=prompt, output_type=str)
        for persona, prompt in SYSTEM_PROMPTS.items()
    }


class AdviceProvider:
    """
    Turns a prompt into chat-ready advice text.

    `advise` never raises: model errors and timeouts become a fixed fallback
    string, and every model answer is normalized before it is returned.
    """

    def __init__(
        self,
        agents: Optional[Dict[Persona, Any]] = None,
        timeout: float = ADVICE_TIMEOUT_SECONDS,
    ) -> None:
        self._agents = agents
        self.timeout = timeout

    def _agent(self, persona: Persona) -> Any:
        if self._agents is None:
            self._agents = build_agents()
        return self._agents[persona]

    async def generate(self, prompt: str, persona: Persona = Persona.ENQUIRY) -> str:
        """
        Raw round trip. Raises AdviceUnavailableError on any failure,
        including an empty answer.
        """
        try:
            result = await wait_for(self._agent(persona).run(prompt), timeout=self.timeout)
        except TimeoutError as e:
            raise AdviceUnavailableError(f"advice timed out after {self.timeout}s") from e
        except Exception as e:
            raise AdviceUnavailableError(str(e)) from e

        output = getattr(result, "output", None)
        text = normalize_advice_text(output) if isinstance(output, str) else ""
        if not text:
            raise EmptyAdviceError("empty advice")
        return text

    async def advise(
        self,
        prompt: str,
        persona: Persona = Persona.ENQUIRY,
        fallback: str = ERROR_FALLBACK,
    ) -> str:
        try:
            return await self.generate(prompt, persona)
        except EmptyAdviceError:
            logger.warning("[ADVICE_EMPTY] persona=%s", persona.value)
            return EMPTY_FALLBACK if fallback == ERROR_FALLBACK else fallback
        except AdviceUnavailableError:
            logger.exception("[ADVICE_ERROR] persona=%s", persona.value)
            return fallback

    async def tip_for(self, category_label: str, fallback: str = ERROR_FALLBACK) -> str:
        return await self.advise(
            f"Provide a one-line financial tip for someone spending a lot on {category_label}",
            persona=Persona.TIP,
            fallback=fallback,
        )
