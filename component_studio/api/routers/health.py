"""
Health check API endpoints.

Routes: GET /health, GET /health/db, GET /health/cache

Dependencies: component_studio.boundary
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from component_studio.api.deps import get_cache_gateway
from component_studio.boundary.cache.cache_gateway import CacheGateway
from component_studio.boundary.db import STORE_FAULTS, get_async_db

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/db", response_model=HealthResponse)
async def health_check_db(db: AsyncSession = Depends(get_async_db)) -> HealthResponse:
    """Session store health check."""
    try:
        await db.execute(text("SELECT 1"))
    except STORE_FAULTS as e:
        logger.warning(f"{__name__}:health_check_db - {type(e).__name__}: {e}")
        return HealthResponse(status="unhealthy", message="Database unreachable")
    return HealthResponse(status="healthy", message="Database connection OK")


@router.get("/cache", response_model=HealthResponse)
async def health_check_cache(cache: CacheGateway = Depends(get_cache_gateway)) -> HealthResponse:
    """Cache health check; an unreachable cache degrades, it does not fail."""
    if await cache.ping():
        return HealthResponse(status="healthy", message="Cache connection OK")
    return HealthResponse(status="degraded", message="Cache unreachable, serving from store")
