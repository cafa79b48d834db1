"""
Unit tests for Settings validation and policy construction.
"""

import pytest
from pydantic import ValidationError

from app.config import DEFAULT_SCENE_DESCRIPTION, Settings
from app.models import EnhancementPolicy, ImageReferenceMode, PlacementAnchor, UploadStorageMode


def test_canonical_defaults():
    settings = Settings(_env_file=None)

    assert settings.PORT == 3000
    assert settings.UPLOAD_STORAGE == UploadStorageMode.DISK
    assert settings.IMAGE_REFERENCE_MODE == ImageReferenceMode.DATA_URI
    assert settings.PLACEMENT_ANCHOR == PlacementAnchor.BOTTOM_CENTER
    assert settings.MAX_UPLOAD_SIZE == 12 * 1024 * 1024


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("FAL_KEY", "env-key")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("PLACEMENT_ANCHOR", "center_vertical")

    settings = Settings(_env_file=None)

    assert settings.FAL_KEY == "env-key"
    assert settings.PORT == 8080
    assert settings.PLACEMENT_ANCHOR == PlacementAnchor.CENTER_VERTICAL


def test_public_url_requires_base_url():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, IMAGE_REFERENCE_MODE="public_url")


def test_public_url_requires_disk_storage():
    with pytest.raises(ValidationError):
        Settings(
            _env_file=None,
            IMAGE_REFERENCE_MODE="public_url",
            PUBLIC_BASE_URL="https://relay.example.com",
            UPLOAD_STORAGE="memory",
        )


def test_unknown_anchor_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, PLACEMENT_ANCHOR="somewhere")


def test_policy_from_settings():
    settings = Settings(
        _env_file=None,
        NORMALIZE_IMAGES=False,
        JPEG_QUALITY=70,
        IMAGE_MAX_WIDTH=800,
        IMAGE_MAX_HEIGHT=600,
    )

    policy = EnhancementPolicy.from_settings(settings)

    assert policy.normalize is False
    assert policy.jpeg_quality == 70
    assert policy.shot_size == (800, 600)
    assert policy.default_scene_description == DEFAULT_SCENE_DESCRIPTION
    assert policy.num_results == 1
    assert policy.fast is True


def test_reference_image_reaches_policy(monkeypatch):
    monkeypatch.setenv("REF_IMAGE_URL", "https://cdn.example/white-background.png")

    policy = EnhancementPolicy.from_settings(Settings(_env_file=None))

    assert policy.ref_image_url == "https://cdn.example/white-background.png"


def test_no_reference_image_by_default():
    assert Settings(_env_file=None).REF_IMAGE_URL is None
