"""
Provider factory for enhancement backend selection.

Returns appropriate EnhancementProvider based on USE_MOCK_PROVIDER configuration.
"""

import logging

from app.config import settings
from .enhancement_provider import EnhancementProvider
from .fal_provider import FalProductShotProvider
from .mock_provider import MockEnhancementProvider

logger = logging.getLogger(__name__)

# Singleton provider instance
_provider_instance: EnhancementProvider | None = None


def get_enhancement_provider() -> EnhancementProvider:
    """
    Get the configured enhancement provider instance.

    Used as a FastAPI dependency; tests replace it through
    app.dependency_overrides.

    Returns:
        EnhancementProvider: MockEnhancementProvider if USE_MOCK_PROVIDER=true,
                             FalProductShotProvider otherwise
    """
    global _provider_instance

    if _provider_instance is not None:
        return _provider_instance

    if settings.USE_MOCK_PROVIDER:
        logger.info("Initializing MockEnhancementProvider (USE_MOCK_PROVIDER=true)")
        _provider_instance = MockEnhancementProvider(settings.MOCK_RESULT_URL)
    else:
        if not settings.FAL_KEY:
            logger.warning("FAL_KEY is not set; fal.ai requests will be rejected")
        _provider_instance = FalProductShotProvider(
            api_key=settings.FAL_KEY,
            endpoint=settings.FAL_ENDPOINT,
        )

    return _provider_instance


def reset_provider() -> None:
    """
    Reset the provider singleton (for testing purposes).
    """
    global _provider_instance
    _provider_instance = None
    logger.info("Provider singleton reset")
