"""Risk Rules FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from riskrules.config import Settings, get_settings
from riskrules.errors import register_exception_handlers
from riskrules.middleware import (
    configure_cors,
    configure_rate_limiting,
    lifespan,
    request_context_middleware,
)
from riskrules.routers import analyses, benchmarks, health, rules, webhooks


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Security risk analysis, industry benchmarking and custom rule evaluation",
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.state.settings = settings

    # Middleware
    configure_cors(app, settings)
    configure_rate_limiting(app, settings)
    app.middleware("http")(request_context_middleware)

    register_exception_handlers(app)

    # Routers
    app.include_router(health.router)
    for module in (analyses, benchmarks, rules, webhooks):
        app.include_router(module.router, prefix=settings.api_prefix)

    return app


# Default app instance for uvicorn
app = create_app()
