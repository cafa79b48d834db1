"""
FalProductShotProvider - fal.ai product shot integration.

Submits the product image to fal.ai's queue and waits for the job to
finish. Queue progress is logged only.
"""

import logging
from typing import Any, Dict, Optional

import fal_client

from app.middleware.error_handler import RemoteTransformError
from app.models.enhancement import EnhancementRequest

from .enhancement_provider import EnhancementProvider, ProgressCallback

logger = logging.getLogger(__name__)


def _remote_status(exc: Exception) -> Optional[int]:
    """Best-effort HTTP status of a failed remote call."""
    status = getattr(exc, "status_code", None)
    if status is None:
        response = getattr(exc, "response", None)
        status = getattr(response, "status_code", None)
    return status if isinstance(status, int) else None


class FalProductShotProvider(EnhancementProvider):
    """
    Enhancement provider backed by the fal.ai product shot endpoint.

    The API key is injected at construction; no global client
    configuration is touched.
    """

    def __init__(
        self,
        api_key: str,
        endpoint: str = "fal-ai/bria/product-shot",
        client: Optional[fal_client.AsyncClient] = None,
    ):
        """
        Args:
            api_key: fal.ai credential
            endpoint: fal.ai application id
            client: Preconfigured client (tests); built from api_key if omitted
        """
        self.endpoint = endpoint
        self._client = client or fal_client.AsyncClient(key=api_key or None)
        logger.info(f"[FAL] Provider initialized for {endpoint}")

    @property
    def provider_name(self) -> str:
        """Return provider identifier for logs."""
        return "fal"

    async def enhance(
        self,
        request: EnhancementRequest,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Dict[str, Any]:
        """
        Submit the job via fal's queue and await its result.

        Raises:
            RemoteTransformError: On any client, network or remote failure
        """

        def handle_queue_update(update) -> None:
            if isinstance(update, fal_client.InProgress):
                for entry in update.logs or []:
                    message = entry.get("message") if isinstance(entry, dict) else str(entry)
                    if message and on_progress is not None:
                        on_progress(message)
            elif isinstance(update, fal_client.Queued):
                logger.debug(f"[FAL] Queued at position {update.position}")

        logger.info(f"[FAL] Submitting job to {self.endpoint}")

        try:
            result = await self._client.subscribe(
                self.endpoint,
                arguments=request.to_arguments(),
                with_logs=True,
                on_queue_update=handle_queue_update,
            )
        except Exception as e:
            status = _remote_status(e)
            logger.error(f"[FAL] Job failed (status={status}): {e}")
            raise RemoteTransformError(str(e) or type(e).__name__, remote_status=status) from e

        logger.info("[FAL] Job completed")
        return result
