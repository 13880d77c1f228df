"""FastAPI application entry point.

Cache Gateway - thin HTTP front for a Redis key-value store.
"""

import asyncio
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
import logging

from fastapi import FastAPI, Request, Response

from cache_gateway.logging_config import parse_log_level, setup_logging
from cache_gateway.middleware import RequestLogMiddleware
from cache_gateway.routes import api_router
from cache_gateway.settings import get_settings
from cache_gateway.stores.redis import close_redis, init_redis, ping_redis

logger = logging.getLogger("uvicorn.error")

# Seconds to wait for the informational startup PING
STARTUP_PING_TIMEOUT = 5.0


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Startup
    settings = get_settings()
    setup_logging(parse_log_level(settings.log_level))

    await init_redis()
    # Reachability is informational only; requests acquire their own connections.
    try:
        await asyncio.wait_for(ping_redis(), timeout=STARTUP_PING_TIMEOUT)
        logger.info("Redis reachable")
    except Exception as e:
        logger.warning(f"Redis not reachable at startup: {e}")

    logger.info(f"listening on {settings.host}:{settings.port}")

    yield

    # Shutdown
    await close_redis()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="HTTP gateway for a Redis-backed key-value cache",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(RequestLogMiddleware)

    # Unexpected errors: bare 500, details stay in the server log
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> Response:
        """Global exception handler returning an empty 500."""
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return Response(status_code=500)

    # Health check endpoint
    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, bool]:
        """Health check endpoint. Never touches the store."""
        return {"ok": True}

    # Include API routes
    app.include_router(api_router)

    return app


# Application instance
app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    level = parse_log_level(settings.log_level)
    setup_logging(level)
    uvicorn.run(
        "cache_gateway.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=level,
    )


if __name__ == "__main__":
    run()
