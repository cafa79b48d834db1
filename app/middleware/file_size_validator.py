"""
File Size Validation

Reads an uploaded file while enforcing the configured size limit.
"""

import logging

from fastapi import UploadFile

from .error_handler import UploadTooLargeError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024  # 1MB chunks


async def read_within_limit(file: UploadFile, max_size: int) -> bytes:
    """
    Read an uploaded file in chunks, aborting as soon as it exceeds max_size.

    Args:
        file: FastAPI UploadFile object
        max_size: Maximum accepted size in bytes

    Returns:
        bytes: Full file content

    Raises:
        UploadTooLargeError: 413 if file exceeds max_size
    """
    chunks = []
    size = 0

    while chunk := await file.read(CHUNK_SIZE):
        size += len(chunk)
        if size > max_size:
            logger.warning(f"File size exceeded: {size}+ bytes (max: {max_size})")
            raise UploadTooLargeError(max_size)
        chunks.append(chunk)

    logger.debug(f"File size validation passed: {size} bytes")
    return b"".join(chunks)
