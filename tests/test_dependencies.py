"""
Test suite for dependency injection container.

Tests factory functions for service creation and configuration.
Verifies SessionService and ChatService wiring and container lifecycle.

System role: Verification of DI container
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from component_studio.api.deps import (
    ServiceContainer,
    get_chat_service,
    get_owner_id,
    get_session_service,
)
from component_studio.application.services import ChatService, SessionService
from component_studio.boundary.cache.cache_gateway import CacheGateway
from component_studio.configs import Settings
from component_studio.configs.cache import CacheSettings
from component_studio.configs.generation import GenerationSettings
from component_studio.core.codegen import FencedBlockExtractor, PromptBuilder


@pytest.fixture
def mock_db_session() -> AsyncSession:
    """Provide mock async database session."""
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def container() -> ServiceContainer:
    """Provide container with explicit settings."""
    settings = Settings(
        cache=CacheSettings(url="redis://cache.internal:6379/1", list_ttl_seconds=120),
        generation=GenerationSettings(api_key="test-key", timeout_seconds=15),
    )
    return ServiceContainer(settings=settings)


class TestServiceContainer:
    """Test suite for ServiceContainer."""

    def test_cache_gateway_is_shared(self, container: ServiceContainer) -> None:
        # Act
        first = container.cache_gateway
        second = container.cache_gateway

        # Assert
        assert isinstance(first, CacheGateway)
        assert first is second

    def test_generation_client_built_from_settings(self, container: ServiceContainer) -> None:
        # Arrange
        with patch("component_studio.boundary.llm.gemini_client.ChatGoogleGenerativeAI") as mock_model_class:
            # Act
            client = container.generation_client

        # Assert
        assert client.default_timeout == 15
        assert mock_model_class.call_args.kwargs["google_api_key"] == "test-key"
        assert container.generation_client is client

    def test_codegen_collaborators(self, container: ServiceContainer) -> None:
        assert isinstance(container.prompt_builder, PromptBuilder)
        assert isinstance(container.extractor, FencedBlockExtractor)

    @pytest.mark.asyncio
    async def test_startup_and_aclose(self, container: ServiceContainer) -> None:
        # Arrange
        gateway = MagicMock(spec=CacheGateway)
        gateway.connect = AsyncMock(return_value=False)
        gateway.close = AsyncMock()
        container._cache_gateway = gateway

        # Act
        await container.startup()
        await container.aclose()

        # Assert
        gateway.connect.assert_awaited_once()
        gateway.close.assert_awaited_once()
        assert container._cache_gateway is None


class TestGetSessionService:
    """Test suite for get_session_service factory."""

    def test_should_bind_db_cache_and_ttl(
        self,
        mock_db_session: AsyncSession,
        container: ServiceContainer,
    ) -> None:
        # Act
        service = get_session_service(db=mock_db_session, container=container)

        # Assert
        assert isinstance(service, SessionService)
        assert service.db is mock_db_session
        assert service.cache is container.cache_gateway
        assert service.list_ttl_seconds == 120


class TestGetChatService:
    """Test suite for get_chat_service factory."""

    def test_should_wire_shared_collaborators(
        self,
        mock_db_session: AsyncSession,
        container: ServiceContainer,
    ) -> None:
        # Arrange
        session_service = get_session_service(db=mock_db_session, container=container)

        # Act
        with patch("component_studio.boundary.llm.gemini_client.ChatGoogleGenerativeAI"):
            service = get_chat_service(session_service=session_service, container=container)

        # Assert
        assert isinstance(service, ChatService)
        assert service.session_service is session_service
        assert service.generation_client is container.generation_client
        assert service.prompt_builder is container.prompt_builder
        assert service.extractor is container.extractor


def test_get_owner_id_passes_header_value() -> None:
    assert get_owner_id(x_user_id="user-9") == "user-9"
