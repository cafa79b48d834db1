"""
Centralized error handling middleware for FastAPI.

Provides consistent error responses and logging for all API routes.
"""

import logging
from typing import Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RelayError(Exception):
    """Base exception for enhancement relay errors."""

    def __init__(self, message: str, status_code: int = 500, details: Optional[str] = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class MissingImageError(RelayError):
    """Raised when the request carries no image upload."""

    def __init__(self):
        super().__init__(message="No image file provided", status_code=400)


class UploadTooLargeError(RelayError):
    """Raised when the upload exceeds the configured size limit."""

    def __init__(self, max_bytes: int):
        super().__init__(
            message="File too large",
            status_code=413,
            details=f"Maximum upload size is {max_bytes} bytes",
        )


class UploadReadError(RelayError):
    """Raised when uploaded bytes cannot be written to or read from scratch storage."""

    def __init__(self, reason: str):
        super().__init__(message="File upload failed", status_code=500, details=reason)


class ImageNormalizationError(RelayError):
    """Raised when the uploaded image cannot be decoded or re-encoded."""

    def __init__(self, reason: str):
        super().__init__(message="Failed to process image", status_code=500, details=reason)


class RemoteTransformError(RelayError):
    """Raised when the enhancement service call fails."""

    def __init__(self, reason: str, remote_status: Optional[int] = None):
        self.remote_status = remote_status
        if remote_status is not None:
            reason = f"Remote service returned {remote_status}: {reason}"
        super().__init__(message="Failed to process image", status_code=500, details=reason)


class MalformedRemoteResponseError(RelayError):
    """Raised when the enhancement service answers without the expected image list."""

    def __init__(self):
        super().__init__(
            message="Unexpected response from enhancement service",
            status_code=500,
            details="The response did not contain the expected image data",
        )


def format_error_response(message: str, details: Optional[str] = None) -> dict:
    """
    Format a consistent error envelope.

    Args:
        message: Human-readable error message
        details: Underlying cause (optional, omitted when empty)

    Returns:
        dict: Envelope with success=False
    """
    response = {
        "success": False,
        "error": message,
    }
    if details:
        response["details"] = details
    return response


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware that catches unhandled exceptions and returns consistent error responses.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            response = await call_next(request)
            return response

        except RelayError as e:
            log = logger.warning if e.status_code < 500 else logger.error
            log(
                f"{type(e).__name__}: {e.message}",
                extra={"status_code": e.status_code, "details": e.details},
            )
            return JSONResponse(
                status_code=e.status_code,
                content=format_error_response(e.message, e.details),
            )

        except Exception as e:
            # Log full stack trace for unexpected errors
            logger.exception(f"Unhandled exception: {str(e)}")
            return JSONResponse(
                status_code=500,
                content=format_error_response("Internal server error", str(e)),
            )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Return the standard envelope for request validation failures.

    A non-file value in the "image" field counts as a missing upload.
    """
    errors = exc.errors()
    if any(tuple(error.get("loc", ()))[-1:] == ("image",) for error in errors):
        logger.warning(f"Rejected non-file image field: {request.method} {request.url.path}")
        error = MissingImageError()
        return JSONResponse(
            status_code=error.status_code,
            content=format_error_response(error.message, error.details),
        )

    summary = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in errors
    )
    logger.warning(f"Request validation failed: {summary}")
    return JSONResponse(
        status_code=422,
        content=format_error_response("Invalid request", summary),
    )
