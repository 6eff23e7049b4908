"""
Dependency injection container.

Holds the process-wide collaborators (cache gateway, generation client,
prompt builder, extractor) and the factory functions FastAPI uses to
build request-scoped services around them.

Dependencies: component_studio.configs, component_studio.application, component_studio.boundary
System role: DI container for service injection
"""

import logging
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from component_studio.configs import Settings, get_settings
from component_studio.boundary.db import get_async_db
from component_studio.boundary.cache.cache_gateway import CacheGateway
from component_studio.application.services import ChatService, SessionService
from component_studio.models.session import OWNER_ID_MAX_LENGTH

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Container for shared, lazily created service instances."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._cache_gateway = None
        self._generation_client = None
        self._prompt_builder = None
        self._extractor = None

    @property
    def settings(self) -> Settings:
        """Get application settings."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def cache_gateway(self) -> CacheGateway:
        """Get shared cache gateway."""
        if self._cache_gateway is None:
            cache_config = self.settings.cache
            self._cache_gateway = CacheGateway.from_url(
                cache_config.url,
                socket_timeout=cache_config.socket_timeout,
            )
        return self._cache_gateway

    @property
    def generation_client(self):
        """Get shared Gemini generation client."""
        if self._generation_client is None:
            # Lazy import to avoid loading the Gemini SDK for store-only requests
            from component_studio.boundary.llm.gemini_client import GeminiGenerationClient

            self._generation_client = GeminiGenerationClient.from_settings(self.settings.generation)
        return self._generation_client

    @property
    def prompt_builder(self):
        """Get prompt builder."""
        if self._prompt_builder is None:
            from component_studio.core.codegen.prompt_builder import PromptBuilder

            self._prompt_builder = PromptBuilder()
        return self._prompt_builder

    @property
    def extractor(self):
        """Get artifact extractor."""
        if self._extractor is None:
            from component_studio.core.codegen.extractor import FencedBlockExtractor

            self._extractor = FencedBlockExtractor()
        return self._extractor

    async def startup(self) -> None:
        """Acquire the cache connection."""
        await self.cache_gateway.connect()

    async def aclose(self) -> None:
        """Release held resources and drop all cached instances."""
        if self._cache_gateway is not None:
            await self._cache_gateway.close()
        self._cache_gateway = None
        self._generation_client = None
        self._prompt_builder = None
        self._extractor = None


# Global service container
_service_container = ServiceContainer()


def get_service_container() -> ServiceContainer:
    """Get service container singleton."""
    return _service_container


def get_owner_id(
    x_user_id: str = Header(
        ..., alias="X-User-Id", min_length=1, max_length=OWNER_ID_MAX_LENGTH
    ),
) -> str:
    """
    Identify the calling user.

    Authentication happens upstream; the gateway forwards the verified
    user ID in the X-User-Id header.
    """
    return x_user_id


def get_cache_gateway(
    container: ServiceContainer = Depends(get_service_container),
) -> CacheGateway:
    """Get the shared cache gateway."""
    return container.cache_gateway


def get_session_service(
    db: AsyncSession = Depends(get_async_db),
    container: ServiceContainer = Depends(get_service_container),
) -> SessionService:
    """
    Get session service instance.

    Args:
        db: Async database session (injected via Depends)
        container: Shared service container

    Returns:
        SessionService: Session service bound to this request's DB session
    """
    return SessionService(
        db=db,
        cache=container.cache_gateway,
        list_ttl_seconds=container.settings.cache.list_ttl_seconds,
    )


def get_chat_service(
    session_service: SessionService = Depends(get_session_service),
    container: ServiceContainer = Depends(get_service_container),
) -> ChatService:
    """
    Get chat service instance.

    Args:
        session_service: Request-scoped session service
        container: Shared service container

    Returns:
        ChatService: Chat service with generation client, prompt builder and extractor
    """
    return ChatService(
        session_service=session_service,
        generation_client=container.generation_client,
        prompt_builder=container.prompt_builder,
        extractor=container.extractor,
    )
