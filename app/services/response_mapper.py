"""
Maps raw enhancement payloads to results.
"""

import logging
from typing import Any, Mapping

from app.middleware.error_handler import MalformedRemoteResponseError
from app.models.enhance_response import EnhanceResponse
from app.models.enhancement import EnhancementResult

logger = logging.getLogger(__name__)


def _has_url(image: Any) -> bool:
    return isinstance(image, Mapping) and isinstance(image.get("url"), str) and bool(image["url"])


def _unwrap(payload: Any) -> Any:
    # Some client versions nest the output under "data"
    if isinstance(payload, Mapping) and "images" not in payload:
        data = payload.get("data")
        if isinstance(data, Mapping):
            return data
    return payload


def extract_result(payload: Any) -> EnhancementResult:
    """
    Pull the produced image URLs out of a remote payload.

    Args:
        payload: Raw result returned by an EnhancementProvider

    Returns:
        EnhancementResult: Non-empty list of image URLs, in remote order

    Raises:
        MalformedRemoteResponseError: If the image list is missing, empty,
                                      or its first entry has no URL string
    """
    payload = _unwrap(payload)
    images = payload.get("images") if isinstance(payload, Mapping) else None

    if not isinstance(images, list) or not images:
        logger.error(f"Unexpected enhancement response structure: {summarize_payload(payload)}")
        raise MalformedRemoteResponseError()

    first = images[0]
    if not _has_url(first):
        logger.error(f"Enhancement response image has no URL: {summarize_payload(payload)}")
        raise MalformedRemoteResponseError()

    urls = [image["url"] for image in images if _has_url(image)]
    return EnhancementResult(image_urls=urls)


def to_response(result: EnhancementResult) -> EnhanceResponse:
    """Build the success envelope from the first produced image."""
    return EnhanceResponse(success=True, enhancedImageUrl=result.first_url)


def summarize_payload(payload: Any) -> Any:
    """
    Return a log-safe copy of a remote payload.

    Image URLs are replaced with their length since sync-mode results
    are multi-megabyte data URIs.
    """
    if not isinstance(payload, Mapping):
        return payload

    summary = dict(payload)
    images = summary.get("images")
    if isinstance(images, list):
        summary["images"] = [
            {**image, "url": f"[URL length: {len(image['url'])}]"} if _has_url(image) else image
            for image in images
        ]
    return summary
