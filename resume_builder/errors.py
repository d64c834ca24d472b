"""Service error taxonomy and FastAPI exception handlers."""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import PlainTextResponse

logger = logging.getLogger("resume_builder.web.api")

GENERIC_FAILURE_MESSAGE = "Resume generation failed"


class ResumeServiceError(Exception):
    """Application-level error with status/code mapping."""

    status_code = 500
    code = "INTERNAL_ERROR"
    message = GENERIC_FAILURE_MESSAGE

    def __init__(self, detail: str = "", message: str | None = None) -> None:
        super().__init__(detail or message or self.message)
        self.detail = detail
        if message is not None:
            self.message = message


class ConfigurationError(ResumeServiceError):
    """Invalid or missing configuration; fatal at startup."""

    code = "CONFIGURATION_ERROR"


class ValidationError(ResumeServiceError):
    status_code = 400
    code = "BAD_REQUEST"
    message = "Missing required fields: name, email, skills."


class MissingRequiredField(ValidationError):
    code = "MISSING_REQUIRED_FIELD"

    def __init__(self, fields: list[str]) -> None:
        super().__init__(detail=f"missing fields: {', '.join(fields)}")
        self.fields = fields


class PersistenceError(ResumeServiceError):
    """Record store failure. Logged and swallowed, never user-visible."""

    code = "PERSISTENCE_ERROR"


class GenerationError(ResumeServiceError):
    code = "GENERATION_FAILED"


class RenderError(ResumeServiceError):
    code = "RENDER_FAILED"


class DeliveryError(ResumeServiceError):
    code = "DELIVERY_FAILED"
    message = "Error downloading file"


class CleanupError(ResumeServiceError):
    """Temporary file deletion failure. Logged only."""

    code = "CLEANUP_FAILED"


async def service_error_handler(request: Request, exc: ResumeServiceError) -> PlainTextResponse:
    """Render a service error as a plain-text body."""
    if exc.status_code >= 500:
        logger.error(
            "request_failed path=%s code=%s detail=%s",
            request.url.path,
            exc.code,
            exc.detail or exc.message,
        )
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def unexpected_error_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """Last-resort handler so unexpected failures still answer with a 500."""
    logger.exception("request_failed path=%s code=UNEXPECTED", request.url.path, exc_info=exc)
    return PlainTextResponse(GENERIC_FAILURE_MESSAGE, status_code=500)
