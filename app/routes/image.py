"""
Image API Routes

Handles product photo enhancement for the mobile client.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.config import settings
from app.models import EnhanceResponse, EnhancementPolicy, ErrorResponse
from app.services.enhance_pipeline import EnhancementPipeline
from app.services.enhancement_provider import EnhancementProvider
from app.services.file_storage import ScratchStorage
from app.services.provider_factory import get_enhancement_provider

logger = logging.getLogger(__name__)

router = APIRouter()

# Scratch directory shared by all requests
storage = ScratchStorage(settings.UPLOAD_DIR)


def get_scratch_storage() -> ScratchStorage:
    """Scratch storage dependency."""
    return storage


def get_enhancement_policy() -> EnhancementPolicy:
    """Enhancement policy dependency, built from settings."""
    return EnhancementPolicy.from_settings(settings)


@router.post(
    "/enhance",
    response_model=EnhanceResponse,
    summary="Enhance Product Photo",
    description="""
Turn a product photo into a generated studio shot.

**Request:** `multipart/form-data` with an `image` file and an optional `prompt`
describing the scene.

**Processing:** the image is resized to fit 1000x1000, recompressed as JPEG,
and sent to the product shot service. The call blocks until the job finishes.

**Response:** `enhancedImageUrl` points at the first generated image.
""",
    responses={
        400: {"model": ErrorResponse, "description": "No image file provided"},
        413: {"model": ErrorResponse, "description": "File too large"},
        500: {"model": ErrorResponse, "description": "Processing or remote service failure"},
    },
)
async def enhance_image(
    image: Optional[UploadFile] = File(None),
    prompt: Optional[str] = Form(None),
    provider: EnhancementProvider = Depends(get_enhancement_provider),
    scratch: ScratchStorage = Depends(get_scratch_storage),
    policy: EnhancementPolicy = Depends(get_enhancement_policy),
) -> EnhanceResponse:
    """
    Enhance an uploaded product photo.

    Args:
        image: Uploaded photo (multipart/form-data field "image")
        prompt: Optional scene description

    Returns:
        EnhanceResponse: success flag and enhanced image URL

    Raises:
        RelayError: Serialized by ErrorHandlerMiddleware
    """
    pipeline = EnhancementPipeline(
        provider=provider,
        storage=scratch,
        policy=policy,
        max_upload_size=settings.MAX_UPLOAD_SIZE,
    )
    return await pipeline.run(image, prompt)


@router.get("/test", summary="Image Routes Check")
async def image_routes_test():
    """Liveness check for the image router."""
    return {"message": "Image routes are working"}
