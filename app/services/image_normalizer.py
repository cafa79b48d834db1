"""
Image normalization.

Downsizes uploads into a bounding box and recompresses them as JPEG so
the payload sent to the enhancement service stays small.
"""

import io
import logging

from PIL import Image, ImageOps, UnidentifiedImageError

from app.middleware.error_handler import ImageNormalizationError
from app.models.upload import NormalizedImage

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = (1000, 1000)
DEFAULT_QUALITY = 80


def _flatten(img: Image.Image) -> Image.Image:
    """Convert to RGB, compositing any transparency onto white."""
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        img = img.convert("RGBA")
        background = Image.new("RGB", img.size, (255, 255, 255))
        background.paste(img, mask=img.getchannel("A"))
        return background
    if img.mode != "RGB":
        return img.convert("RGB")
    return img


def normalize_image(
    content: bytes,
    max_width: int = DEFAULT_MAX_SIZE[0],
    max_height: int = DEFAULT_MAX_SIZE[1],
    quality: int = DEFAULT_QUALITY,
) -> NormalizedImage:
    """
    Resize an image to fit inside max_width x max_height and re-encode it as JPEG.

    Aspect ratio is preserved and images already inside the box are never
    enlarged. The input bytes are left untouched.

    Args:
        content: Encoded source image
        max_width: Bounding box width
        max_height: Bounding box height
        quality: JPEG quality factor (1-100)

    Returns:
        NormalizedImage: JPEG bytes with their final dimensions

    Raises:
        ImageNormalizationError: If the bytes are not a decodable image
    """
    try:
        with Image.open(io.BytesIO(content)) as source:
            img = ImageOps.exif_transpose(source)
            img = _flatten(img)
            img.thumbnail((max_width, max_height), Image.LANCZOS)

            buffer = io.BytesIO()
            img.save(buffer, format="JPEG", quality=quality, optimize=True)
    except UnidentifiedImageError:
        logger.warning(f"Could not identify uploaded image ({len(content)} bytes)")
        raise ImageNormalizationError("Uploaded file is not a supported image")
    except (OSError, ValueError) as e:
        logger.error(f"Image normalization failed: {e}")
        raise ImageNormalizationError(str(e))

    normalized = NormalizedImage(
        content=buffer.getvalue(),
        width=img.width,
        height=img.height,
    )
    logger.info(
        f"Image compressed: {len(content)} -> {normalized.size} bytes, "
        f"{normalized.width}x{normalized.height}"
    )
    return normalized
