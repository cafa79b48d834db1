"""Service layer for business logic and external integrations."""

from .enhancement_provider import EnhancementProvider
from .fal_provider import FalProductShotProvider
from .mock_provider import MockEnhancementProvider
from .provider_factory import get_enhancement_provider, reset_provider
from .file_storage import ScratchStorage
from .image_normalizer import normalize_image
from .response_mapper import extract_result
from .enhance_pipeline import EnhancementPipeline

__all__ = [
    "EnhancementProvider",
    "FalProductShotProvider",
    "MockEnhancementProvider",
    "get_enhancement_provider",
    "reset_provider",
    "ScratchStorage",
    "normalize_image",
    "extract_result",
    "EnhancementPipeline",
]
