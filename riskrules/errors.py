"""Exception hierarchy and FastAPI exception handlers."""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = structlog.get_logger()


class RiskRulesError(Exception):
    """Base exception for the Risk Rules service."""

    def __init__(self, code: str, message: str, status_code: int = 500):
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class NotFoundError(RiskRulesError):
    """Referenced analysis, rule, submission or benchmark does not exist."""

    def __init__(self, message: str):
        super().__init__("NOT_FOUND", message, status_code=404)


class UnauthorizedError(RiskRulesError):
    """Caller does not own the referenced resource."""

    def __init__(self, message: str = "Resource belongs to a different user"):
        super().__init__("UNAUTHORIZED", message, status_code=403)


class AuthenticationError(RiskRulesError):
    """No caller identity was supplied."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__("AUTHENTICATION_REQUIRED", message, status_code=401)


class InvalidCriteriaError(RiskRulesError):
    """Rule criteria failed structural validation."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__("INVALID_CRITERIA", reason, status_code=400)


class MissingParametersError(RiskRulesError):
    """A webhook payload lacks a required identifier."""

    def __init__(self, message: str):
        super().__init__("MISSING_PARAMETERS", message, status_code=400)


class QuestionnaireServiceError(RiskRulesError):
    """The questionnaire service could not be reached or answered badly."""

    def __init__(self, message: str):
        super().__init__("UPSTREAM_ERROR", message, status_code=502)


def _error_body(code: str, message: str) -> dict:
    return {"success": False, "error": {"code": code, "message": message}}


def register_exception_handlers(app: FastAPI) -> None:
    """Register the service's exception handlers on the FastAPI app."""

    @app.exception_handler(RiskRulesError)
    async def risk_rules_error_handler(request: Request, exc: RiskRulesError):
        if isinstance(exc, UnauthorizedError):
            logger.warning(
                "access_denied",
                path=request.url.path,
                method=request.method,
                user_id=getattr(request.state, "user_id", None),
                reason=exc.message,
            )
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.code, exc.message))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled_error", path=request.url.path, method=request.method)
        return JSONResponse(
            status_code=500,
            content=_error_body("SERVER_ERROR", "An unexpected error occurred"),
        )
