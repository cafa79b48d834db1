"""
Application configuration using Pydantic Settings.

All environment variables are accessed through this config object.
Never use os.getenv() directly in business logic.
"""

from typing import List, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.models.enhancement import ImageReferenceMode, PlacementAnchor, UploadStorageMode

DEFAULT_SCENE_DESCRIPTION = "on a clean white background, professional product photography"


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # fal.ai Configuration
    FAL_KEY: str = Field(
        default="",
        description="fal.ai API key passed to the enhancement client",
    )
    FAL_ENDPOINT: str = Field(
        default="fal-ai/bria/product-shot",
        description="fal.ai application id for product shot generation",
    )
    USE_MOCK_PROVIDER: bool = Field(
        default=False,
        description="Return a canned result instead of calling fal.ai",
    )
    MOCK_RESULT_URL: str = Field(
        default="https://storage.googleapis.com/falserverless/bria/white-background.png",
        description="Image URL returned by the mock provider",
    )

    # Server Configuration
    HOST: str = Field(default="0.0.0.0", description="Listen address")
    PORT: int = Field(default=3000, description="Listen port")
    LOG_LEVEL: str = Field(default="INFO", description="Root log level")
    ALLOWED_ORIGINS: List[str] = Field(
        default=["*"],
        description="CORS allowed origins",
    )

    # Upload Configuration
    UPLOAD_DIR: str = Field(
        default="uploads",
        description="Scratch directory for uploaded images",
    )
    MAX_UPLOAD_SIZE: int = Field(
        default=12 * 1024 * 1024,
        description="Maximum file upload size in bytes (12MB)",
    )
    UPLOAD_STORAGE: UploadStorageMode = Field(
        default=UploadStorageMode.DISK,
        description="Keep uploads in memory or write them to UPLOAD_DIR",
    )
    PUBLIC_BASE_URL: Optional[str] = Field(
        default=None,
        description="Externally reachable base URL, required for public_url references",
    )
    SCRATCH_TTL_MINUTES: int = Field(
        default=60,
        description="Age after which orphaned scratch files are swept",
    )
    CLEANUP_INTERVAL_MINUTES: int = Field(
        default=15,
        description="Interval between scratch directory sweeps",
    )

    # Enhancement Policy
    NORMALIZE_IMAGES: bool = Field(
        default=True,
        description="Resize and recompress uploads before sending them",
    )
    IMAGE_MAX_WIDTH: int = Field(default=1000, description="Bounding box width")
    IMAGE_MAX_HEIGHT: int = Field(default=1000, description="Bounding box height")
    JPEG_QUALITY: int = Field(
        default=80,
        ge=1,
        le=100,
        description="JPEG quality used when normalizing",
    )
    IMAGE_REFERENCE_MODE: ImageReferenceMode = Field(
        default=ImageReferenceMode.DATA_URI,
        description="How the image is handed to fal.ai: inline data URI or public URL",
    )
    PLACEMENT_ANCHOR: PlacementAnchor = Field(
        default=PlacementAnchor.BOTTOM_CENTER,
        description="Manual placement anchor for the product in the scene",
    )
    DEFAULT_SCENE_DESCRIPTION: str = Field(
        default=DEFAULT_SCENE_DESCRIPTION,
        description="Scene description used when the caller sends no prompt",
    )
    REF_IMAGE_URL: Optional[str] = Field(
        default=None,
        description="Reference background image sent instead of the default scene when the caller sends no prompt",
    )
    OPTIMIZE_DESCRIPTION: bool = Field(
        default=True,
        description="Let fal.ai rewrite the scene description",
    )
    NUM_RESULTS: int = Field(default=1, ge=1, description="Images requested per job")
    FAST_MODE: bool = Field(default=True, description="Use the fastest fal.ai tier")
    FAL_SYNC_MODE: bool = Field(
        default=False,
        description="Ask fal.ai to inline results as data URIs instead of hosting them",
    )

    @model_validator(mode="after")
    def check_reference_mode(self) -> "Settings":
        """public_url references need a reachable file on disk."""
        if self.IMAGE_REFERENCE_MODE == ImageReferenceMode.PUBLIC_URL:
            if not self.PUBLIC_BASE_URL:
                raise ValueError("PUBLIC_BASE_URL is required when IMAGE_REFERENCE_MODE=public_url")
            if self.UPLOAD_STORAGE != UploadStorageMode.DISK:
                raise ValueError("IMAGE_REFERENCE_MODE=public_url requires UPLOAD_STORAGE=disk")
        return self


# Global settings instance
settings = Settings()
