"""Request-scoped image payloads."""

import base64
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


def to_data_uri(content: bytes, content_type: str) -> str:
    """Encode bytes as a base64 data URI."""
    return f"data:{content_type};base64,{base64.b64encode(content).decode('ascii')}"


@dataclass(frozen=True)
class UploadedAsset:
    """
    Raw upload as received from the client.

    `path` is set only when the bytes were also written to scratch storage.
    """

    content: bytes
    content_type: str
    filename: str
    path: Optional[Path] = None
    size: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "size", len(self.content))

    @property
    def suffix(self) -> str:
        return Path(self.filename).suffix.lower()

    def to_data_uri(self) -> str:
        return to_data_uri(self.content, self.content_type)


@dataclass(frozen=True)
class NormalizedImage:
    """Resized and re-encoded copy of an UploadedAsset."""

    content: bytes
    width: int
    height: int
    content_type: str = "image/jpeg"

    @property
    def size(self) -> int:
        return len(self.content)

    def to_data_uri(self) -> str:
        return to_data_uri(self.content, self.content_type)
