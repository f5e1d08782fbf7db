"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers
- Error handlers (one envelope for every failure)
- Security middleware (headers, rate limiting)
- Logging configuration
"""

import uvicorn
from fastapi import FastAPI

from server.core.config import settings
from server.interfaces.health import router as health_router
from server.shared.errors.handlers import register_error_handlers
from server.shared.logging import configure_logging
from server.shared.security.headers import SecurityHeadersMiddleware
from server.shared.security.rate_limiting import limiter


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    The error handlers are registered for every exception class,
    so they always run last.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level, log_format=settings.log_format)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # --- Rate Limiting ---
    app.state.limiter = limiter

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix=settings.api_prefix)

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    uvicorn.run(
        "server.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
