"""Request context, rate limiting, CORS and structlog setup."""

from __future__ import annotations

import logging
import sys
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from riskrules.config import Settings

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


def _caller(request: Request) -> str | None:
    header = request.app.state.settings.user_id_header
    return request.headers.get(header, "").strip() or None


def rate_limit_key(request: Request) -> str:
    """Limit per caller when the gateway identified one, per client IP otherwise."""
    user_id = _caller(request)
    if user_id:
        return f"user:{user_id}"
    return get_remote_address(request)


def get_limiter(settings: Settings) -> Limiter:
    return Limiter(key_func=rate_limit_key, default_limits=[settings.rate_limit_default])


def configure_cors(app: FastAPI, settings: Settings) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", settings.user_id_header, REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER, "X-RateLimit-Remaining"],
    )


def configure_rate_limiting(app: FastAPI, settings: Settings) -> None:
    app.state.limiter = get_limiter(settings)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)


async def request_context_middleware(request: Request, call_next) -> Response:
    """Bind request id and caller into the log context, then log the request.

    Every event logged while the request is handled (``rule_created``,
    ``rules_evaluated``, ``access_denied`` and so on) carries both values.
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)
    user_id = _caller(request)
    if user_id:
        structlog.contextvars.bind_contextvars(user_id=user_id)

    start = time.monotonic()
    try:
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "http_request",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.monotonic() - start) * 1000, 2),
        )
        return response
    finally:
        structlog.contextvars.clear_contextvars()


def configure_structured_logging(settings: Settings) -> None:
    """Route structlog and stdlib logging through one stdout handler."""
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if settings.log_format == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        foreign_pre_chain=shared_processors,
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.log_level.upper())

    # http_request already covers access logging
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    configure_structured_logging(settings)
    logger.info(
        "application_starting",
        version=settings.app_version,
        environment=settings.environment,
        questionnaire_service_url=settings.questionnaire_service_url,
        rule_equality_mode=settings.rule_equality_mode,
    )
    yield
    logger.info("application_stopped")
