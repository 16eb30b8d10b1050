"""Primary-engine dispatch with vendor fallbacks."""

import logging

from anthropic import AsyncAnthropic
from google import genai
from groq import AsyncGroq

from ..config import Settings
from ..engine import EngineDecision, PrimaryEngine
from ..logging import JSONLLogger, get_logger
from .clients import ClaudeLLMClient, GeminiLLMClient, GroqLLMClient, LLMClient

logger = logging.getLogger(__name__)

GROQ_NOT_CONFIGURED = "⚠️ Groq engine is not configured."
GROQ_ERROR_MESSAGE = "❌ عذراً، حدث خطأ في محرك Groq."


class Engines:
    """The LLM vendors available to the bot.

    Any client may be None when its API key is missing. Claude falls back to
    Groq when it is missing or fails, Groq falls back to Gemini when Groq is
    missing. Vendor errors are never raised to the caller; they come back as
    a localized apology.
    """

    def __init__(
        self,
        claude: LLMClient | None = None,
        groq: LLMClient | None = None,
        gemini: LLMClient | None = None,
        json_logger: JSONLLogger | None = None,
    ) -> None:
        self.claude = claude
        self.groq = groq
        self.gemini = gemini
        self.json_logger = json_logger or get_logger()

    @classmethod
    def from_settings(cls, settings: Settings, json_logger: JSONLLogger | None = None) -> "Engines":
        """Build clients for every vendor that has an API key."""
        claude = groq = gemini = None

        if settings.anthropic_api_key:
            claude = ClaudeLLMClient(
                AsyncAnthropic(api_key=settings.anthropic_api_key),
                model=settings.anthropic_model,
            )
        else:
            logger.warning("ANTHROPIC_API_KEY is missing. Claude engine will be disabled.")

        if settings.groq_api_key:
            groq = GroqLLMClient(
                AsyncGroq(api_key=settings.groq_api_key),
                model=settings.groq_model,
            )
        else:
            logger.warning("GROQ_API_KEY is missing. Groq engine will be disabled.")

        if settings.google_api_key:
            gemini = GeminiLLMClient(
                genai.Client(api_key=settings.google_api_key),
                model=settings.google_model,
            )
        else:
            logger.warning("GOOGLE_API_KEY is missing. Gemini engine will be disabled.")

        return cls(claude=claude, groq=groq, gemini=gemini, json_logger=json_logger)

    @property
    def classifier(self) -> LLMClient | None:
        """Client used for structured side tasks (metadata, ranking)."""
        return self.claude or self.groq or self.gemini

    async def complete(
        self,
        prompt: str,
        decision: EngineDecision,
        system: str | None = None,
    ) -> str:
        """Answer ``prompt`` with the engine chosen by ``decision``."""
        if decision.primary is PrimaryEngine.CLAUDE:
            return await self.call_claude(prompt, system)
        return await self.call_groq(prompt, system)

    async def call_claude(self, prompt: str, system: str | None = None) -> str:
        if self.claude is None:
            return await self.call_groq(prompt, system)
        try:
            return await self.claude.complete(prompt, system=system)
        except Exception as e:
            logger.error(f"Claude API error: {e}")
            self.json_logger.log_vendor_error("claude", str(e))
            return await self.call_groq(prompt, system)

    async def call_groq(self, prompt: str, system: str | None = None) -> str:
        if self.groq is None:
            if self.gemini is not None:
                return await self.call_gemini(prompt, system)
            return GROQ_NOT_CONFIGURED
        try:
            return await self.groq.complete(prompt, system=system)
        except Exception as e:
            logger.error(f"Groq API error: {e}")
            self.json_logger.log_vendor_error("groq", str(e))
            return GROQ_ERROR_MESSAGE

    async def call_gemini(self, prompt: str, system: str | None = None) -> str:
        if self.gemini is None:
            return GROQ_NOT_CONFIGURED
        try:
            return await self.gemini.complete(prompt, system=system)
        except Exception as e:
            logger.error(f"Gemini API error: {e}")
            self.json_logger.log_vendor_error("gemini", str(e))
            return GROQ_ERROR_MESSAGE
