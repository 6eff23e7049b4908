"""
Test suite for ChatService.

Real prompt builder, extractor, SQLite store and fake Redis; only the
generation client is mocked.

System role: Verification of chat turn orchestration
"""

import uuid
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from component_studio.application.services.chat_service import ChatService
from component_studio.application.services.session_service import SessionService
from component_studio.boundary.cache.cache_gateway import CacheGateway
from component_studio.core.codegen.extractor import FencedBlockExtractor
from component_studio.core.codegen.prompt_builder import PromptBuilder
from component_studio.core.exceptions import (
    GenerationError,
    InvalidRequestError,
    SessionNotFoundError,
    StoreError,
)
from component_studio.models.session import Artifact, ChatMessage, UpdateSessionRequest


@pytest.fixture
def session_service(test_async_db: AsyncSession, cache_gateway: CacheGateway) -> SessionService:
    """Provide SessionService over SQLite and fake Redis."""
    return SessionService(db=test_async_db, cache=cache_gateway)


@pytest.fixture
def chat_service(session_service: SessionService, mock_generation_client: AsyncMock) -> ChatService:
    """Provide ChatService with a scripted generation client."""
    return ChatService(
        session_service=session_service,
        generation_client=mock_generation_client,
        prompt_builder=PromptBuilder(),
        extractor=FencedBlockExtractor(),
    )


class TestProcessTurn:
    """Test suite for ChatService.process_turn()."""

    @pytest.mark.asyncio
    async def test_first_turn_on_empty_session(
        self,
        chat_service: ChatService,
        session_service: SessionService,
    ) -> None:
        # Arrange
        created = await session_service.create_session("u1")

        # Act
        session = await chat_service.process_turn("u1", created.id, "make a button")

        # Assert
        assert session.artifact == Artifact(
            markup="function Btn(){return <button>Hi</button>}",
            style="",
        )
        assert [m.role for m in session.transcript] == ["user", "assistant"]
        assert session.transcript[0].content == "make a button"

    @pytest.mark.asyncio
    async def test_turn_is_persisted_and_cached(
        self,
        chat_service: ChatService,
        session_service: SessionService,
        cache_gateway: CacheGateway,
    ) -> None:
        # Arrange
        created = await session_service.create_session("u1")
        await session_service.list_sessions("u1")

        # Act
        await chat_service.process_turn("u1", created.id, "make a button")

        # Assert
        stored = await session_service.get_session("u1", created.id, use_cache=False)
        cached = await cache_gateway.get(CacheGateway.entity_key(created.id, "u1"))
        assert len(stored.transcript) == 2
        assert cached["artifact"]["markup"] == stored.artifact.markup
        assert await cache_gateway.get(CacheGateway.list_key("u1")) is None

    @pytest.mark.asyncio
    async def test_prompt_includes_current_code_and_request(
        self,
        chat_service: ChatService,
        session_service: SessionService,
        mock_generation_client: AsyncMock,
    ) -> None:
        # Arrange
        created = await session_service.create_session(
            "u1", artifact=Artifact(markup="function Old(){return <p/>}", style=".p{}")
        )

        # Act
        await chat_service.process_turn("u1", created.id, "make it blue", timeout=7)

        # Assert
        prompt = mock_generation_client.generate.call_args.args[0]
        assert "function Old(){return <p/>}" in prompt
        assert "User request: make it blue" in prompt
        assert mock_generation_client.generate.call_args.kwargs["timeout"] == 7

    @pytest.mark.asyncio
    async def test_style_only_reply_keeps_markup(
        self,
        chat_service: ChatService,
        session_service: SessionService,
        mock_generation_client: AsyncMock,
    ) -> None:
        created = await session_service.create_session(
            "u1", artifact=Artifact(markup="function Btn(){}", style="")
        )
        mock_generation_client.generate.return_value = "```css\n.btn { color: blue; }\n```"

        session = await chat_service.process_turn("u1", created.id, "make it blue")

        assert session.artifact == Artifact(markup="function Btn(){}", style=".btn { color: blue; }")

    @pytest.mark.asyncio
    async def test_context_window_is_last_five_entries(
        self,
        chat_service: ChatService,
        session_service: SessionService,
        mock_generation_client: AsyncMock,
    ) -> None:
        # Arrange
        roles = ("user", "assistant")
        transcript = [ChatMessage(role=roles[i % 2], content=f"entry-{i}") for i in range(8)]
        created = await session_service.create_session("u1", transcript=transcript)

        # Act
        await chat_service.process_turn("u1", created.id, "next step")

        # Assert
        prompt = mock_generation_client.generate.call_args.args[0]
        history = prompt.split("\n\n")[0]
        assert history == (
            "Conversation so far:\n"
            "AI: entry-3\nUser: entry-4\nAI: entry-5\nUser: entry-6\nAI: entry-7"
        )
        assert prompt.count("next step") == 1

    @pytest.mark.asyncio
    async def test_resend_does_not_duplicate_user_entry(
        self,
        chat_service: ChatService,
        session_service: SessionService,
        mock_generation_client: AsyncMock,
    ) -> None:
        # Arrange
        created = await session_service.create_session(
            "u1", transcript=[ChatMessage(role="user", content="make a button")]
        )

        # Act
        session = await chat_service.process_turn("u1", created.id, "make a button")

        # Assert
        contents = [(m.role, m.content) for m in session.transcript]
        assert contents[0] == ("user", "make a button")
        assert contents[1][0] == "assistant"
        assert len(contents) == 2
        prompt = mock_generation_client.generate.call_args.args[0]
        assert "User: make a button" not in prompt

    @pytest.mark.asyncio
    async def test_blank_prompt_rejected(
        self,
        chat_service: ChatService,
        mock_generation_client: AsyncMock,
    ) -> None:
        with pytest.raises(InvalidRequestError):
            await chat_service.process_turn("u1", uuid.uuid4(), "   ")

        mock_generation_client.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_session_not_found(self, chat_service: ChatService) -> None:
        with pytest.raises(SessionNotFoundError):
            await chat_service.process_turn("u1", uuid.uuid4(), "make a button")

    @pytest.mark.asyncio
    async def test_other_owner_not_found(
        self,
        chat_service: ChatService,
        session_service: SessionService,
    ) -> None:
        created = await session_service.create_session("u1")

        with pytest.raises(SessionNotFoundError):
            await chat_service.process_turn("u2", created.id, "make a button")


class TestTurnFailures:
    """Failures before persistence leave the stored session untouched."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "reason",
        [GenerationError.TIMEOUT, GenerationError.SERVICE, GenerationError.MALFORMED],
    )
    async def test_generation_failure_persists_nothing(
        self,
        chat_service: ChatService,
        session_service: SessionService,
        mock_generation_client: AsyncMock,
        reason: str,
    ) -> None:
        # Arrange
        created = await session_service.create_session(
            "u1", artifact=Artifact(markup="function Btn(){}", style="")
        )
        mock_generation_client.generate.side_effect = GenerationError("boom", reason=reason)

        # Act
        with pytest.raises(GenerationError) as exc_info:
            await chat_service.process_turn("u1", created.id, "make it blue")

        # Assert
        assert exc_info.value.reason == reason
        stored = await session_service.get_session("u1", created.id, use_cache=False)
        assert stored.transcript == []
        assert stored.artifact.markup == "function Btn(){}"

    @pytest.mark.asyncio
    async def test_store_failure_surfaces_and_skips_cache_sync(
        self,
        chat_service: ChatService,
        session_service: SessionService,
        cache_gateway: CacheGateway,
    ) -> None:
        # Arrange
        created = await session_service.create_session("u1")
        await session_service.get_session("u1", created.id)
        failure = StoreError("write failed", operation="persist_turn")

        # Act
        with patch.object(session_service, "persist_turn", AsyncMock(side_effect=failure)):
            with pytest.raises(StoreError):
                await chat_service.process_turn("u1", created.id, "make a button")

        # Assert
        cached = await cache_gateway.get(CacheGateway.entity_key(created.id, "u1"))
        assert cached["transcript"] == []

    @pytest.mark.asyncio
    async def test_store_statement_error_rolls_back(
        self,
        chat_service: ChatService,
        session_service: SessionService,
    ) -> None:
        # Arrange
        created = await session_service.create_session("u1")
        error = OperationalError("UPDATE", {}, Exception("disk full"))

        # Act
        with patch(
            "component_studio.application.services.session_service.session_crud.update_for_owner",
            AsyncMock(side_effect=error),
        ):
            with pytest.raises(StoreError):
                await chat_service.process_turn("u1", created.id, "make a button")

        # Assert
        stored = await session_service.get_session("u1", created.id, use_cache=False)
        assert stored.transcript == []


class TestProcessOverride:
    """Test suite for ChatService.process_override()."""

    @pytest.mark.asyncio
    async def test_override_prompt_targets_element(
        self,
        chat_service: ChatService,
        session_service: SessionService,
        mock_generation_client: AsyncMock,
    ) -> None:
        # Arrange
        created = await session_service.create_session(
            "u1", artifact=Artifact(markup='function A(){return <button id="cta"/>}', style="")
        )

        # Act
        session = await chat_service.process_override("u1", created.id, "cta", "make it red")

        # Assert
        prompt = mock_generation_client.generate.call_args.args[0]
        assert 'element with id "cta"' in prompt
        assert "Change ONLY the element" in prompt
        assert session.transcript[0].content.startswith('Modify the element with id "cta"')

    @pytest.mark.asyncio
    async def test_two_turns_accumulate_transcript(
        self,
        chat_service: ChatService,
        session_service: SessionService,
    ) -> None:
        created = await session_service.create_session("u1")

        await chat_service.process_turn("u1", created.id, "make a button")
        session = await chat_service.process_turn("u1", created.id, "make it blue")

        assert [m.role for m in session.transcript] == ["user", "assistant", "user", "assistant"]

    @pytest.mark.asyncio
    async def test_manual_edit_then_turn_uses_edited_code(
        self,
        chat_service: ChatService,
        session_service: SessionService,
        mock_generation_client: AsyncMock,
    ) -> None:
        created = await session_service.create_session("u1")
        await session_service.update_session(
            "u1", created.id, UpdateSessionRequest(artifact=Artifact(markup="function Edited(){}"))
        )

        await chat_service.process_turn("u1", created.id, "add padding")

        prompt = mock_generation_client.generate.call_args.args[0]
        assert "function Edited(){}" in prompt
