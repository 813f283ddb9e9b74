"""
FastAPI application entry point.
Assembles the app with routers, middleware, lifespan handlers, and exception handlers.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from clientdesk.api.v1.router import api_router
from clientdesk.api.v1.endpoints.health import get_health
from clientdesk.core.config import settings
from clientdesk.core.exceptions import setup_exception_handlers
from clientdesk.core.logging import setup_logging
from clientdesk.core.rate_limit import limiter
from clientdesk.deps.di_container import build_container, set_container
from clientdesk.schemas.health import HealthResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    Sets up logging and the DI container; closes the backend session on shutdown.
    """
    # Startup
    setup_logging()

    container = build_container()
    app.state.container = container
    set_container(container)
    logger.info("Application started", extra={"backend_url": settings.BACKEND_API_URL})

    yield

    # Shutdown
    await container.http_client().close()
    logger.info("Application stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Client, subscription and billing administration API",
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    @app.get("/health", response_model=HealthResponse, include_in_schema=False)
    async def root_health() -> HealthResponse:
        """Root-level health check endpoint."""
        return await get_health()

    setup_exception_handlers(app)

    return app


app = create_app()
