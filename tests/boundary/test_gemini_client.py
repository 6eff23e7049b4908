"""
Test suite for GeminiGenerationClient.

The LangChain chat model is mocked; tests cover text flattening and the
mapping of timeouts, service failures and empty replies to
GenerationError reasons.

System role: Verification of the generation service boundary
"""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from component_studio.boundary.llm.gemini_client import GeminiGenerationClient
from component_studio.configs.generation import GenerationSettings
from component_studio.core.exceptions import GenerationError


@pytest.fixture
def mock_model() -> MagicMock:
    """Provide mock chat model with async invoke."""
    model = MagicMock()
    model.ainvoke = AsyncMock(return_value=SimpleNamespace(content="```jsx\nfunction A(){}\n```"))
    return model


class TestGenerate:
    """Test suite for GeminiGenerationClient.generate()."""

    @pytest.mark.asyncio
    async def test_returns_string_content(self, mock_model: MagicMock) -> None:
        client = GeminiGenerationClient(model=mock_model, default_timeout=5)

        text = await client.generate("make a button")

        assert text == "```jsx\nfunction A(){}\n```"
        messages = mock_model.ainvoke.call_args.args[0]
        assert messages[0].content == "make a button"

    @pytest.mark.asyncio
    async def test_flattens_content_blocks(self, mock_model: MagicMock) -> None:
        mock_model.ainvoke.return_value = SimpleNamespace(
            content=[{"type": "text", "text": "```jsx\n"}, "function A(){}\n", {"type": "text", "text": "```"}]
        )
        client = GeminiGenerationClient(model=mock_model)

        assert await client.generate("x") == "```jsx\nfunction A(){}\n```"

    @pytest.mark.asyncio
    async def test_timeout_raises_timeout_reason(self, mock_model: MagicMock) -> None:
        async def slow(_messages):
            await asyncio.sleep(1)

        mock_model.ainvoke = slow
        client = GeminiGenerationClient(model=mock_model, default_timeout=5)

        with pytest.raises(GenerationError) as exc_info:
            await client.generate("x", timeout=0.01)

        assert exc_info.value.reason == GenerationError.TIMEOUT

    @pytest.mark.asyncio
    async def test_service_failure_raises_service_reason(self, mock_model: MagicMock) -> None:
        mock_model.ainvoke.side_effect = RuntimeError("quota exceeded")
        client = GeminiGenerationClient(model=mock_model)

        with pytest.raises(GenerationError) as exc_info:
            await client.generate("x")

        assert exc_info.value.reason == GenerationError.SERVICE
        assert "quota exceeded" in exc_info.value.message

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", None, []])
    async def test_empty_reply_raises_malformed_reason(self, mock_model: MagicMock, content) -> None:
        mock_model.ainvoke.return_value = SimpleNamespace(content=content)
        client = GeminiGenerationClient(model=mock_model)

        with pytest.raises(GenerationError) as exc_info:
            await client.generate("x")

        assert exc_info.value.reason == GenerationError.MALFORMED


class TestFromSettings:
    """Test suite for GeminiGenerationClient.from_settings()."""

    def test_builds_model_from_settings(self) -> None:
        settings = GenerationSettings(api_key="test-key", model="gemini-test", timeout_seconds=12)

        with patch("component_studio.boundary.llm.gemini_client.ChatGoogleGenerativeAI") as MockModel:
            client = GeminiGenerationClient.from_settings(settings)

        MockModel.assert_called_once_with(
            model="gemini-test",
            google_api_key="test-key",
            temperature=settings.temperature,
            max_retries=settings.max_retries,
        )
        assert client.default_timeout == 12
