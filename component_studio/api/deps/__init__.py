"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    ServiceContainer,
    get_cache_gateway,
    get_chat_service,
    get_owner_id,
    get_service_container,
    get_session_service,
)

__all__ = [
    "ServiceContainer",
    "get_cache_gateway",
    "get_chat_service",
    "get_owner_id",
    "get_service_container",
    "get_session_service",
]
