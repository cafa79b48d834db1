"""
MockEnhancementProvider - Simulates the fal.ai product shot lifecycle.

Used for development without fal.ai credentials.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from app.models.enhancement import EnhancementRequest

from .enhancement_provider import EnhancementProvider, ProgressCallback

logger = logging.getLogger(__name__)


class MockEnhancementProvider(EnhancementProvider):
    """
    Mock provider that returns a fixed image URL.

    Adds:
    - A short simulated processing delay
    - Progress messages shaped like fal.ai queue logs
    - [MOCK] prefixed logging for debugging
    """

    def __init__(self, result_url: str, delay: float = 0.5):
        self.result_url = result_url
        self.delay = delay
        logger.info("[MOCK] MockEnhancementProvider initialized (no remote calls)")

    @property
    def provider_name(self) -> str:
        """Return provider identifier for logs."""
        return "mock"

    async def enhance(
        self,
        request: EnhancementRequest,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Dict[str, Any]:
        logger.info(
            f"[MOCK] Job received: anchor={request.manual_placement_selection.value}, "
            f"shot_size={request.shot_size}"
        )

        steps = ("Loading product image", "Generating scene", "Compositing product")
        for step in steps:
            await asyncio.sleep(self.delay / len(steps))
            if on_progress is not None:
                on_progress(step)

        width, height = request.shot_size
        return {
            "images": [
                {
                    "url": self.result_url,
                    "content_type": "image/png",
                    "width": width,
                    "height": height,
                }
                for _ in range(request.num_results)
            ]
        }
