"""Custom exception classes and global exception handlers."""

import logging
import traceback

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class GainAIException(Exception):
    """Base exception for all GainAI-specific errors."""

    code = "ERROR"

    def __init__(self, message: str, status_code: int = 400, code: str | None = None):
        self.message = message
        self.status_code = status_code
        if code:
            self.code = code
        super().__init__(self.message)


class InvalidInputError(GainAIException):
    """Malformed request, unknown import type or unusable file."""

    code = "INVALID_INPUT"

    def __init__(self, message: str, errors: list[dict] | None = None):
        super().__init__(message, 400)
        if errors:
            self.errors = errors


class ParseError(GainAIException):
    """CSV content could not be parsed into any rows."""

    code = "PARSE_ERROR"

    def __init__(self, message: str = "Failed to parse CSV file", details: list[str] | None = None):
        super().__init__(message, 400)
        self.details = details or []
        if self.details:
            self.errors = [{"field": "file", "message": detail} for detail in self.details]


class NotFoundException(GainAIException):
    """Resource not found exception."""

    code = "NOT_FOUND"

    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found", 404)


class InvalidStateError(GainAIException):
    """Operation not allowed in the job's current lifecycle state."""

    code = "INVALID_STATE"

    def __init__(self, message: str):
        super().__init__(message, 409)


class ForbiddenException(GainAIException):
    """Access forbidden exception."""

    code = "FORBIDDEN"

    def __init__(self, message: str = "You don't have permission to perform this action"):
        super().__init__(message, 403)


class UnauthorizedException(GainAIException):
    """Authentication required exception."""

    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, 401)


def create_exception_handlers():
    """Create the exception handlers registered on the application."""

    async def gainai_exception_handler(request: Request, exc: GainAIException):
        """Handle GainAI custom exceptions."""
        logger.warning(
            f"{type(exc).__name__} on {request.method} {request.url.path}: "
            f"{exc.message} (status={exc.status_code})"
        )

        content = {
            "status": "error",
            "code": exc.code,
            "message": exc.message,
        }
        if hasattr(exc, "errors"):
            content["errors"] = exc.errors
        return JSONResponse(status_code=exc.status_code, content=content)

    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Report malformed request bodies and parameters as invalid input."""
        errors = [
            {
                "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
                "message": error.get("msg", "Invalid value"),
            }
            for error in exc.errors()
        ]
        logger.warning(f"Invalid request on {request.method} {request.url.path}: {errors}")

        return JSONResponse(
            status_code=400,
            content={
                "status": "error",
                "code": InvalidInputError.code,
                "message": "Invalid request",
                "errors": errors,
            },
        )

    async def generic_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error(f"Unhandled exception on {request.method} {request.url.path}")
        logger.error(f"Exception: {type(exc).__name__}: {exc}")
        tb_lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
        logger.error("".join(tb_lines))

        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
            },
        )

    return {
        GainAIException: gainai_exception_handler,
        RequestValidationError: request_validation_handler,
        Exception: generic_exception_handler,
    }
