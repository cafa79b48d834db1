"""
Scratch Storage Service

Manages the transient upload directory shared by concurrent requests.
Every request writes its own uniquely named files and removes them
before its response is sent.
"""

import logging
import time
import uuid
from pathlib import Path
from urllib.parse import quote

logger = logging.getLogger(__name__)


class ScratchStorage:
    """
    Manages request-scoped files in the scratch upload directory.

    Handles:
    - Creating the directory on first use
    - Writing bytes under collision-free names
    - Best-effort removal of scratch files
    - Building public URLs for files served from the /uploads mount
    """

    def __init__(self, base_path: str = "uploads"):
        """
        Initialize ScratchStorage with its directory.

        Args:
            base_path: Scratch directory (created lazily)
        """
        self.uploads_path = Path(base_path)

    def ensure_directory(self) -> Path:
        """Create the scratch directory if it does not exist yet."""
        self.uploads_path.mkdir(parents=True, exist_ok=True)
        return self.uploads_path

    @staticmethod
    def new_filename(suffix: str = "") -> str:
        """
        Generate a scratch filename unique across concurrent requests.

        Format: {epoch_millis}-{random hex}{suffix}
        """
        return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}{suffix}"

    def write(self, content: bytes, suffix: str = "") -> Path:
        """
        Write bytes to a new scratch file.

        Args:
            content: File content
            suffix: File extension including the dot (e.g. ".jpg")

        Returns:
            Path: Location of the written file

        Raises:
            OSError: If directory creation or file write fails
        """
        self.ensure_directory()
        file_path = self.uploads_path / self.new_filename(suffix)
        file_path.write_bytes(content)
        file_path.chmod(0o644)
        logger.info(f"Saved scratch file {file_path} ({len(content)} bytes)")
        return file_path

    def remove(self, file_path: Path) -> bool:
        """
        Delete a scratch file, never raising.

        Returns:
            bool: True if the file was deleted, False if it was already gone
                  or could not be removed
        """
        try:
            Path(file_path).unlink()
            logger.info(f"Removed scratch file {file_path}")
            return True
        except FileNotFoundError:
            logger.debug(f"Scratch file already gone: {file_path}")
            return False
        except OSError as e:
            logger.error(f"Failed to remove scratch file {file_path}: {e}")
            return False

    def public_url(self, file_path: Path, base_url: str) -> str:
        """Build the externally reachable URL of a scratch file."""
        return f"{base_url.rstrip('/')}/uploads/{quote(Path(file_path).name)}"
