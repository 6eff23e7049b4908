"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, component_studio.api, component_studio.observability, component_studio.configs
System role: Application initialization and configuration
"""

from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from component_studio.configs import get_settings
from component_studio.api import api_router
from component_studio.api.deps import get_service_container
from component_studio.boundary.db import create_tables
from component_studio.observability.logger import configure_logging
from component_studio.observability.middleware import (
    RequestLoggingMiddleware,
    CorrelationMiddleware,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup configures logging, bootstraps tables in development and
    opens the shared cache connection. Shutdown releases it.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Application startup: logging configured")

    container = get_service_container()
    try:
        if settings.is_development:
            await create_tables()
            logger.info("Development tables ensured")
        await container.startup()
        logger.info("Application startup complete: cache gateway ready")
    except Exception as e:
        logger.exception(
            "Failed to initialize application resources",
            extra={"error": str(e)},
        )
        await container.aclose()
        raise

    try:
        yield
    finally:
        # Shutdown
        await container.aclose()
        logger.info("Application shutdown")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Component Studio API",
        description="Chat-driven UI component generation with persistent sessions",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add observability middleware (added first = last to execute)
    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register API routes
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "component_studio.main:app",
        host="localhost",
        port=8082,
        reload=True,
    )
