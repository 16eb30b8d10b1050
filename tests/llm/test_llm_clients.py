"""Tests for LLM client wrappers."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from digital_coo.llm import ClaudeLLMClient, GeminiLLMClient, GroqLLMClient


def groq_response(content: str | None) -> MagicMock:
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


class TestGroqLLMClient:
    def test_default_model(self) -> None:
        client = GroqLLMClient(MagicMock())
        assert client.model == "llama-3.3-70b-versatile"

    @pytest.mark.asyncio
    async def test_complete_with_prompt_only(self) -> None:
        mock_groq = MagicMock()
        mock_groq.chat.completions.create = AsyncMock(return_value=groq_response("LLM response"))

        client = GroqLLMClient(mock_groq, model="test-model")
        result = await client.complete("Hello")

        assert result == "LLM response"
        mock_groq.chat.completions.create.assert_called_once_with(
            model="test-model",
            messages=[{"role": "user", "content": "Hello"}],
        )

    @pytest.mark.asyncio
    async def test_complete_with_system_prompt(self) -> None:
        mock_groq = MagicMock()
        mock_groq.chat.completions.create = AsyncMock(return_value=groq_response("ok"))

        client = GroqLLMClient(mock_groq)
        await client.complete("User message", system="You are a COO")

        messages = mock_groq.chat.completions.create.call_args.kwargs["messages"]
        assert messages[0] == {"role": "system", "content": "You are a COO"}
        assert messages[1] == {"role": "user", "content": "User message"}

    @pytest.mark.asyncio
    async def test_none_content_is_empty(self) -> None:
        mock_groq = MagicMock()
        mock_groq.chat.completions.create = AsyncMock(return_value=groq_response(None))

        assert await GroqLLMClient(mock_groq).complete("Hello") == ""


class TestClaudeLLMClient:
    @pytest.mark.asyncio
    async def test_passes_system_and_max_tokens(self) -> None:
        response = MagicMock()
        response.content = [MagicMock(text="Claude says hi")]
        mock_anthropic = MagicMock()
        mock_anthropic.messages.create = AsyncMock(return_value=response)

        client = ClaudeLLMClient(mock_anthropic, model="claude-test")
        result = await client.complete("Hello", system="Be brief")

        assert result == "Claude says hi"
        mock_anthropic.messages.create.assert_called_once_with(
            model="claude-test",
            max_tokens=4096,
            messages=[{"role": "user", "content": "Hello"}],
            system="Be brief",
        )

    @pytest.mark.asyncio
    async def test_no_system_omits_key(self) -> None:
        response = MagicMock()
        response.content = [MagicMock(text="x")]
        mock_anthropic = MagicMock()
        mock_anthropic.messages.create = AsyncMock(return_value=response)

        await ClaudeLLMClient(mock_anthropic).complete("Hello")

        assert "system" not in mock_anthropic.messages.create.call_args.kwargs

    @pytest.mark.asyncio
    async def test_empty_content(self) -> None:
        response = MagicMock()
        response.content = []
        mock_anthropic = MagicMock()
        mock_anthropic.messages.create = AsyncMock(return_value=response)

        assert await ClaudeLLMClient(mock_anthropic).complete("Hello") == ""


class TestGeminiLLMClient:
    @pytest.mark.asyncio
    async def test_complete(self) -> None:
        mock_genai = MagicMock()
        mock_genai.aio.models.generate_content = AsyncMock(return_value=MagicMock(text="Gemini"))

        client = GeminiLLMClient(mock_genai, model="gemini-test")
        result = await client.complete("Hello")

        assert result == "Gemini"
        mock_genai.aio.models.generate_content.assert_called_once_with(
            model="gemini-test",
            contents="Hello",
            config=None,
        )

    @pytest.mark.asyncio
    async def test_system_instruction(self) -> None:
        mock_genai = MagicMock()
        mock_genai.aio.models.generate_content = AsyncMock(return_value=MagicMock(text=None))

        result = await GeminiLLMClient(mock_genai).complete("Hello", system="Be brief")

        assert result == ""
        config = mock_genai.aio.models.generate_content.call_args.kwargs["config"]
        assert config.system_instruction == "Be brief"
