"""
Shotiva Relay API

Main FastAPI application entry point.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.middleware import (
    ErrorHandlerMiddleware,
    RequestLoggingMiddleware,
    format_error_response,
    validation_error_handler,
)
from app.routes import image
from app.services.cleanup_scheduler import (
    get_scheduler_status,
    start_cleanup_scheduler,
    stop_cleanup_scheduler,
)

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

STARTED_AT = time.monotonic()

AVAILABLE_ENDPOINTS = [
    "/",
    "/health",
    "/test",
    "/api/image/test",
    "/api/image/enhance",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown events."""
    # Startup
    uploads_dir = image.storage.ensure_directory()
    logger.info(f"Uploads directory: {uploads_dir.resolve()}")
    start_cleanup_scheduler()
    yield
    # Shutdown
    stop_cleanup_scheduler()

app = FastAPI(
    title="Shotiva Relay API",
    description="Product photo enhancement relay for the Shotiva mobile app",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Access log (outermost, so it sees error responses too)
app.add_middleware(RequestLoggingMiddleware)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials="*" not in settings.ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(image.router, prefix="/api/image", tags=["Image"])

# Scratch uploads, referenced by URL in public_url mode
app.mount(
    "/uploads",
    StaticFiles(directory=Path(settings.UPLOAD_DIR), check_dir=False),
    name="uploads",
)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Return the JSON not-found body for unknown routes; envelope other HTTP errors."""
    if exc.status_code not in (404, 405):
        logger.warning(f"HTTP {exc.status_code}: {request.method} {request.url.path} - {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content=format_error_response(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    logger.info(f"Not found: {request.method} {request.url.path}")
    return JSONResponse(
        status_code=404,
        content={
            "error": "Not found",
            "details": f"Cannot {request.method} {request.url.path}",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "availableEndpoints": AVAILABLE_ENDPOINTS,
        },
    )


app.add_exception_handler(RequestValidationError, validation_error_handler)



@app.get("/")
async def root():
    """Service metadata"""
    return {
        "status": "ok",
        "message": "Shotiva AI API is running",
        "version": "1.0.0",
        "endpoints": {
            "health": "/health",
            "test": "/test",
            "image": {
                "test": "/api/image/test",
                "enhance": "/api/image/enhance",
            },
        },
    }


@app.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns service health status for monitoring and deployment health checks.
    """
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": time.monotonic() - STARTED_AT,
        "cleanupScheduler": get_scheduler_status(),
    }


@app.get("/test")
async def test_endpoint():
    """Liveness check"""
    return {
        "message": "Server is working",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def run():
    """Start the API server on HOST:PORT."""
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
