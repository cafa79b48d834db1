"""
Pytest configuration and fixtures
"""

import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from app.config import DEFAULT_SCENE_DESCRIPTION
from app.main import app
from app.models import EnhancementPolicy
from app.routes.image import get_enhancement_policy, get_scratch_storage
from app.services.enhancement_provider import EnhancementProvider
from app.services.file_storage import ScratchStorage
from app.services.provider_factory import get_enhancement_provider, reset_provider

STUB_RESULT_URL = "https://v3.fal.media/files/stub/product_shot.png"


class StubProvider(EnhancementProvider):
    """Records every request and returns a canned payload or raises a canned error."""

    def __init__(self, payload=None, error=None, on_call=None):
        self.payload = payload if payload is not None else {"images": [{"url": STUB_RESULT_URL}]}
        self.error = error
        self.on_call = on_call
        self.calls = []

    @property
    def provider_name(self) -> str:
        return "stub"

    async def enhance(self, request, on_progress=None):
        self.calls.append(request)
        if self.on_call is not None:
            self.on_call(request)
        if on_progress is not None:
            on_progress("stub progress")
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture(autouse=True)
def reset_state():
    """Reset provider singleton and dependency overrides around each test."""
    reset_provider()
    yield
    app.dependency_overrides.clear()
    reset_provider()


@pytest.fixture
def stub_provider():
    """Stub enhancement provider returning a single image."""
    return StubProvider()


@pytest.fixture
def scratch_storage(tmp_path):
    """Scratch storage rooted in a per-test temporary directory."""
    return ScratchStorage(base_path=str(tmp_path / "uploads"))


@pytest.fixture
def policy():
    """Canonical enhancement policy."""
    return EnhancementPolicy(default_scene_description=DEFAULT_SCENE_DESCRIPTION)


@pytest.fixture
def client(stub_provider, scratch_storage, policy):
    """FastAPI test client wired to the stub provider and temporary storage"""
    app.dependency_overrides[get_enhancement_provider] = lambda: stub_provider
    app.dependency_overrides[get_scratch_storage] = lambda: scratch_storage
    app.dependency_overrides[get_enhancement_policy] = lambda: policy
    return TestClient(app)


@pytest.fixture
def make_image():
    """Factory for encoded test images."""

    def _make_image(width=800, height=600, color=(200, 30, 30), fmt="PNG", mode="RGB"):
        img = Image.new(mode, (width, height), color)
        buffer = io.BytesIO()
        img.save(buffer, format=fmt)
        return buffer.getvalue()

    return _make_image
