"""Pydantic models for API request/response schemas."""

from .enhance_response import EnhanceResponse, ErrorResponse
from .enhancement import (
    EnhancementPolicy,
    EnhancementRequest,
    EnhancementResult,
    ImageReferenceMode,
    PlacementAnchor,
    UploadStorageMode,
)
from .upload import NormalizedImage, UploadedAsset, to_data_uri

__all__ = [
    "EnhanceResponse",
    "ErrorResponse",
    "EnhancementPolicy",
    "EnhancementRequest",
    "EnhancementResult",
    "ImageReferenceMode",
    "PlacementAnchor",
    "UploadStorageMode",
    "NormalizedImage",
    "UploadedAsset",
    "to_data_uri",
]
