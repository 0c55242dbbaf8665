"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (one per bounded context)
- Error handlers (centralized domain-to-HTTP mapping)
- Security middleware (headers, CORS, rate limiting)
- Logging configuration
- Database schema creation on start-up

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from visionchat.core.config import settings
from visionchat.infrastructure.database import create_schema
from visionchat.interfaces.auth.router import router as auth_router
from visionchat.interfaces.chat.router import router as chat_router
from visionchat.interfaces.dependencies import get_engine
from visionchat.interfaces.health import router as health_router
from visionchat.interfaces.market.router import router as market_router
from visionchat.shared.errors.handlers import register_error_handlers
from visionchat.shared.logging import configure_logging
from visionchat.shared.security.headers import SecurityHeadersMiddleware
from visionchat.shared.security.rate_limiting import limiter, rate_limit_exceeded_handler

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: make sure the tables exist before serving."""
    engine_factory = app.dependency_overrides.get(get_engine, get_engine)
    create_schema(engine_factory())
    logger.info("%s %s started (%s)", settings.project_name, settings.version, settings.environment)
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # --- Rate Limiting ---
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(chat_router, prefix="/api/v1")
    app.include_router(market_router, prefix="/api/v1")

    return app


app = create_app()
