"""Vendor LLM clients.

Each client wraps one SDK behind the same ``complete`` coroutine, so flows,
the classifier and the engine dispatcher never touch a vendor API directly.
"""

from typing import Any, Protocol

from anthropic import AsyncAnthropic
from google import genai
from google.genai import types as genai_types
from groq import AsyncGroq


class LLMClient(Protocol):
    """Anything that can turn a prompt into text."""

    async def complete(self, prompt: str, system: str | None = None) -> str: ...


class _VendorClient:
    """Holds the SDK client and model name shared by every wrapper."""

    name = ""

    def __init__(self, client: Any, model: str) -> None:
        self._client = client
        self._model = model

    @property
    def model(self) -> str:
        return self._model

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self._model!r})"


class GroqLLMClient(_VendorClient):
    """Off-peak engine over Groq chat completions.

    Example:
        llm = GroqLLMClient(AsyncGroq(api_key="..."))
        text = await llm.complete("Draft the weekly update", system="You are a COO")
    """

    name = "groq"

    def __init__(self, client: AsyncGroq, model: str = "llama-3.3-70b-versatile") -> None:
        super().__init__(client, model)

    async def complete(self, prompt: str, system: str | None = None) -> str:
        """Send one user turn, with ``system`` as a leading system message."""
        messages: list[dict[str, Any]] = [{"role": "user", "content": prompt}]
        if system:
            messages.insert(0, {"role": "system", "content": system})

        response = await self._client.chat.completions.create(
            model=self._model,
            messages=messages,
        )
        return response.choices[0].message.content or ""


class ClaudeLLMClient(_VendorClient):
    """Peak-hours engine over the Anthropic Messages API."""

    name = "claude"

    def __init__(
        self,
        client: AsyncAnthropic,
        model: str = "claude-3-5-sonnet-20240620",
        max_tokens: int = 4096,
    ) -> None:
        super().__init__(client, model)
        self._max_tokens = max_tokens

    async def complete(self, prompt: str, system: str | None = None) -> str:
        kwargs: dict[str, Any] = {
            "model": self._model,
            "max_tokens": self._max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            kwargs["system"] = system

        response = await self._client.messages.create(**kwargs)

        if not response.content:
            return ""
        return getattr(response.content[0], "text", "") or ""


class GeminiLLMClient(_VendorClient):
    """Secondary engine over google-genai, used when Groq is not configured."""

    name = "gemini"

    def __init__(self, client: genai.Client, model: str = "gemini-1.5-pro") -> None:
        super().__init__(client, model)

    async def complete(self, prompt: str, system: str | None = None) -> str:
        config = genai_types.GenerateContentConfig(system_instruction=system) if system else None
        response = await self._client.aio.models.generate_content(
            model=self._model,
            contents=prompt,
            config=config,
        )
        return response.text or ""
