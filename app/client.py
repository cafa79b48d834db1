"""
Client for the enhancement API.

Mirrors what the mobile app sends: a JPEG at quality 0.8 in the multipart
field "image", then a second request to fetch the generated image.
"""

import io
import logging
from pathlib import Path
from typing import Optional, Union

import requests
from PIL import Image, ImageOps

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000"
ENHANCE_PATH = "/api/image/enhance"
UPLOAD_QUALITY = 80


class EnhanceClientError(Exception):
    """Raised when the API rejects a request or returns an unusable body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


def encode_jpeg(source: Union[str, Path, bytes], quality: int = UPLOAD_QUALITY) -> bytes:
    """Re-encode an image file or buffer as JPEG."""
    data = Path(source).read_bytes() if isinstance(source, (str, Path)) else source
    with Image.open(io.BytesIO(data)) as img:
        img = ImageOps.exif_transpose(img).convert("RGB")
        buffer = io.BytesIO()
        img.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()


class EnhanceClient:
    """Thin wrapper over requests for POST /api/image/enhance."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = 300.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()

    def enhance(self, source: Union[str, Path, bytes], prompt: Optional[str] = None) -> str:
        """
        Upload an image and return the enhanced image URL.

        Raises:
            EnhanceClientError: On non-200 responses or a body without a URL
        """
        payload = encode_jpeg(source)
        data = {"prompt": prompt} if prompt else None

        logger.info(f"Uploading {len(payload)} bytes to {self.base_url}{ENHANCE_PATH}")
        response = self.session.post(
            f"{self.base_url}{ENHANCE_PATH}",
            files={"image": ("image.jpg", payload, "image/jpeg")},
            data=data,
            timeout=self.timeout,
        )

        try:
            body = response.json()
        except ValueError:
            raise EnhanceClientError(
                f"Server returned non-JSON response ({response.status_code})",
                status_code=response.status_code,
            )

        if response.status_code != 200:
            message = body.get("error", "Request failed")
            if body.get("details"):
                message = f"{message}: {body['details']}"
            raise EnhanceClientError(message, status_code=response.status_code)

        url = body.get("enhancedImageUrl")
        if not url:
            raise EnhanceClientError("Response did not include enhancedImageUrl", status_code=200)
        return url

    def download(self, url: str) -> bytes:
        """Fetch the generated image."""
        response = self.session.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.content
