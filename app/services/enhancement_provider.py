"""
EnhancementProvider abstraction layer for remote transform backends.

Defines the interface for enhancement providers (fal.ai, mock, test doubles)
allowing the API to swap between providers via configuration.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from app.models.enhancement import EnhancementRequest

ProgressCallback = Callable[[str], None]


class EnhancementProvider(ABC):
    """
    Abstract base class for enhancement providers.

    Implementations:
    - FalProductShotProvider: fal.ai product shot endpoint
    - MockEnhancementProvider: canned result for local development
    """

    @abstractmethod
    async def enhance(
        self,
        request: EnhancementRequest,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Dict[str, Any]:
        """
        Run one enhancement job and wait for it to reach a terminal state.

        Args:
            request: Arguments for the remote job
            on_progress: Optional sink for progress messages. Providers may
                         never call it; callers must not depend on it.

        Returns:
            dict: Raw remote payload, expected to contain an "images" list

        Raises:
            RemoteTransformError: If the remote call fails for any reason
        """
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """
        Return provider identifier for logs.

        Returns:
            str: Provider name - "fal" or "mock"
        """
        pass
