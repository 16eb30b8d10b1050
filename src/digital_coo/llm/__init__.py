"""LLM vendor clients and engine dispatch."""

from .clients import ClaudeLLMClient, GeminiLLMClient, GroqLLMClient, LLMClient
from .engines import GROQ_ERROR_MESSAGE, GROQ_NOT_CONFIGURED, Engines
from .prompt import build_system_prompt, format_search_context

__all__ = [
    "ClaudeLLMClient",
    "Engines",
    "GROQ_ERROR_MESSAGE",
    "GROQ_NOT_CONFIGURED",
    "GeminiLLMClient",
    "GroqLLMClient",
    "LLMClient",
    "build_system_prompt",
    "format_search_context",
]
