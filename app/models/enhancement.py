"""Enhancement job models: policy options, remote request and result."""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field


class PlacementAnchor(str, Enum):
    """Manual placement positions accepted by the product shot endpoint."""

    UPPER_LEFT = "upper_left"
    UPPER_RIGHT = "upper_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_RIGHT = "bottom_right"
    RIGHT_CENTER = "right_center"
    LEFT_CENTER = "left_center"
    UPPER_CENTER = "upper_center"
    BOTTOM_CENTER = "bottom_center"
    CENTER_VERTICAL = "center_vertical"
    CENTER_HORIZONTAL = "center_horizontal"


class ImageReferenceMode(str, Enum):
    """How the uploaded image is handed to the remote service."""

    DATA_URI = "data_uri"
    PUBLIC_URL = "public_url"


class UploadStorageMode(str, Enum):
    """Where uploaded bytes live for the duration of a request."""

    MEMORY = "memory"
    DISK = "disk"


class EnhancementPolicy(BaseModel):
    """
    Per-deployment enhancement policy.

    Storage mode, normalize vs. pass-through, image reference mode,
    placement anchor and remote flags for every request.
    """

    storage_mode: UploadStorageMode = UploadStorageMode.DISK
    normalize: bool = True
    reference_mode: ImageReferenceMode = ImageReferenceMode.DATA_URI
    max_width: int = 1000
    max_height: int = 1000
    jpeg_quality: int = 80
    placement_anchor: PlacementAnchor = PlacementAnchor.BOTTOM_CENTER
    default_scene_description: str
    ref_image_url: Optional[str] = None
    optimize_description: bool = True
    num_results: int = 1
    fast: bool = True
    sync_mode: bool = False
    public_base_url: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Any) -> "EnhancementPolicy":
        """Build the policy from the application Settings object."""
        return cls(
            storage_mode=settings.UPLOAD_STORAGE,
            normalize=settings.NORMALIZE_IMAGES,
            reference_mode=settings.IMAGE_REFERENCE_MODE,
            max_width=settings.IMAGE_MAX_WIDTH,
            max_height=settings.IMAGE_MAX_HEIGHT,
            jpeg_quality=settings.JPEG_QUALITY,
            placement_anchor=settings.PLACEMENT_ANCHOR,
            default_scene_description=settings.DEFAULT_SCENE_DESCRIPTION,
            ref_image_url=settings.REF_IMAGE_URL,
            optimize_description=settings.OPTIMIZE_DESCRIPTION,
            num_results=settings.NUM_RESULTS,
            fast=settings.FAST_MODE,
            sync_mode=settings.FAL_SYNC_MODE,
            public_base_url=settings.PUBLIC_BASE_URL,
        )

    @property
    def shot_size(self) -> Tuple[int, int]:
        return (self.max_width, self.max_height)


class EnhancementRequest(BaseModel):
    """
    Arguments sent to the product shot endpoint.

    Attributes:
        image_url: Data URI or publicly reachable URL of the product image
        scene_description: Free-text description of the generated scene
        ref_image_url: Reference background image, used in place of a scene description
        manual_placement_selection: Anchor for the product within the scene
        shot_size: Output width and height
    """

    image_url: str
    scene_description: Optional[str] = None
    ref_image_url: Optional[str] = None
    optimize_description: bool = True
    num_results: int = Field(default=1, ge=1)
    fast: bool = True
    placement_type: str = "manual_placement"
    manual_placement_selection: PlacementAnchor = PlacementAnchor.BOTTOM_CENTER
    shot_size: List[int] = Field(default_factory=lambda: [1000, 1000])
    sync_mode: bool = False

    def to_arguments(self) -> Dict[str, Any]:
        """Return the JSON arguments for the remote call, omitting unset references."""
        return self.model_dump(mode="json", exclude_none=True)


class EnhancementResult(BaseModel):
    """Successful remote outcome; only the first image is surfaced to callers."""

    image_urls: List[str] = Field(..., min_length=1)

    @property
    def first_url(self) -> str:
        return self.image_urls[0]
