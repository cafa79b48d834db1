"""FastAPI middleware for request/response processing."""

from .error_handler import (
    ErrorHandlerMiddleware,
    RelayError,
    MissingImageError,
    UploadTooLargeError,
    UploadReadError,
    ImageNormalizationError,
    RemoteTransformError,
    MalformedRemoteResponseError,
    format_error_response,
    validation_error_handler,
)
from .request_logger import RequestLoggingMiddleware

__all__ = [
    "ErrorHandlerMiddleware",
    "RequestLoggingMiddleware",
    "RelayError",
    "MissingImageError",
    "UploadTooLargeError",
    "UploadReadError",
    "ImageNormalizationError",
    "RemoteTransformError",
    "MalformedRemoteResponseError",
    "format_error_response",
    "validation_error_handler",
]
