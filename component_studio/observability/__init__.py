"""
Observability module.

Provides logging configuration, structured log helpers, correlation ID
tracking and request logging middleware.
"""

from component_studio.observability.correlation import get_correlation_id, set_correlation_id
from component_studio.observability.logger import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "get_correlation_id",
    "set_correlation_id",
]
