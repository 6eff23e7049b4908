"""
Gemini generation client.

Sends one assembled prompt to Gemini through LangChain and returns the
generated text. Timeouts, service failures and empty responses are raised
as GenerationError; nothing is retried here.

Dependencies: langchain_google_genai, langchain_core, component_studio.core.exceptions
System role: Opaque text-generation boundary for chat turns
"""

import asyncio
import logging
from typing import Any

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from component_studio.core.exceptions import GenerationError

logger = logging.getLogger(__name__)


class GeminiGenerationClient:
    """
    Text-generation client backed by a LangChain chat model.

    Usage:
        client = GeminiGenerationClient.from_settings(settings.generation)
        text = await client.generate("make a button", timeout=30)
    """

    def __init__(self, model: BaseChatModel, default_timeout: float | None = None) -> None:
        """
        Initialize client around a chat model.

        Args:
            model: LangChain chat model (ChatGoogleGenerativeAI in production)
            default_timeout: Seconds applied when the caller supplies none
        """
        self.model = model
        self.default_timeout = default_timeout

    @classmethod
    def from_settings(cls, settings) -> "GeminiGenerationClient":
        """
        Build a client from GenerationSettings.

        Args:
            settings: GenerationSettings instance

        Returns:
            GeminiGenerationClient: Configured client
        """
        model = ChatGoogleGenerativeAI(
            model=settings.model,
            google_api_key=settings.api_key,
            temperature=settings.temperature,
            max_retries=settings.max_retries,
        )
        logger.info(f"Initialized Gemini generation client with {settings.model}")
        return cls(model=model, default_timeout=settings.timeout_seconds)

    async def generate(self, prompt: str, timeout: float | None = None) -> str:
        """
        Generate text for a prompt.

        Args:
            prompt: Fully assembled prompt text
            timeout: Seconds before the call is abandoned (defaults to default_timeout)

        Returns:
            str: Generated text of the first candidate

        Raises:
            GenerationError: On timeout, service failure, or a response without text
        """
        limit = timeout if timeout is not None else self.default_timeout
        try:
            response = await asyncio.wait_for(
                self.model.ainvoke([HumanMessage(content=prompt)]),
                timeout=limit,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"{__name__}:generate - Timed out after {limit}s")
            raise GenerationError(
                f"Generation timed out after {limit} seconds",
                reason=GenerationError.TIMEOUT,
            ) from e
        except Exception as e:
            logger.error(f"{__name__}:generate - {type(e).__name__}: {e}")
            raise GenerationError(str(e) or type(e).__name__, reason=GenerationError.SERVICE) from e

        text = _response_text(getattr(response, "content", None))
        if not text.strip():
            raise GenerationError(
                "Generation response contained no candidate text",
                reason=GenerationError.MALFORMED,
            )
        return text


def _response_text(content: Any) -> str:
    """Flatten message content (plain string or list of content blocks) to text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and isinstance(block.get("text"), str):
                parts.append(block["text"])
        return "".join(parts)
    return ""
