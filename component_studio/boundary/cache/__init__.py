"""
Cache boundary: best-effort Redis gateway for session and session-list entries.

Exports:
  - CacheGateway: get/set/delete over the two session key families
"""

from component_studio.boundary.cache.cache_gateway import CacheGateway

__all__ = ["CacheGateway"]
