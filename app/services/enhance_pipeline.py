"""
Enhancement pipeline.

Runs one request through intake -> normalize -> remote call -> map -> cleanup.
Scratch files created along the way are removed on every exit path.
"""

import logging
import uuid
from pathlib import Path
from typing import List, Optional

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from app.middleware.error_handler import MissingImageError, UploadReadError
from app.middleware.file_size_validator import read_within_limit
from app.models.enhance_response import EnhanceResponse
from app.models.enhancement import (
    EnhancementPolicy,
    EnhancementRequest,
    ImageReferenceMode,
    UploadStorageMode,
)
from app.models.upload import UploadedAsset, to_data_uri

from .enhancement_provider import EnhancementProvider
from .file_storage import ScratchStorage
from .image_normalizer import normalize_image
from .response_mapper import extract_result, summarize_payload, to_response

logger = logging.getLogger(__name__)


class EnhancementPipeline:
    """
    Request-scoped enhancement flow.

    One instance may serve concurrent requests; all per-request state lives
    in local variables of run().
    """

    def __init__(
        self,
        provider: EnhancementProvider,
        storage: ScratchStorage,
        policy: EnhancementPolicy,
        max_upload_size: int,
    ):
        self.provider = provider
        self.storage = storage
        self.policy = policy
        self.max_upload_size = max_upload_size

    async def run(self, image: Optional[UploadFile], prompt: Optional[str] = None) -> EnhanceResponse:
        """
        Enhance one uploaded image.

        Args:
            image: The "image" form field, None when absent
            prompt: Optional scene description from the caller

        Returns:
            EnhanceResponse: Success envelope with the first result URL

        Raises:
            RelayError: Any failure, already classified for the HTTP layer
        """
        request_id = uuid.uuid4().hex[:8]
        logger.info(f"[{request_id}] Received image enhancement request")

        # Validate before spending a remote call
        if image is None or not image.filename:
            logger.error(f"[{request_id}] No image file provided in request")
            raise MissingImageError()

        scratch_files: List[Path] = []
        try:
            asset = await self._receive(image, scratch_files)
            logger.info(
                f"[{request_id}] File received: filename={asset.filename}, "
                f"size={asset.size}, mimetype={asset.content_type}, path={asset.path}"
            )

            image_reference = await self._prepare_reference(asset, scratch_files, request_id)
            enhancement_request = self.build_request(image_reference, prompt)

            def log_progress(message: str) -> None:
                logger.info(f"[{request_id}] Processing update: {message}")

            logger.info(f"[{request_id}] Starting {self.provider.provider_name} processing...")
            payload = await self.provider.enhance(enhancement_request, on_progress=log_progress)
            logger.info(f"[{request_id}] Enhancement response: {summarize_payload(payload)}")

            result = extract_result(payload)
            logger.info(f"[{request_id}] Enhancement completed with {len(result.image_urls)} image(s)")
            return to_response(result)

        finally:
            for path in scratch_files:
                self.storage.remove(path)

    async def _receive(self, image: UploadFile, scratch_files: List[Path]) -> UploadedAsset:
        """Read the upload and, in disk mode, persist it to scratch storage."""
        content = await read_within_limit(image, self.max_upload_size)
        content_type = image.content_type or "application/octet-stream"
        asset = UploadedAsset(content=content, content_type=content_type, filename=image.filename)

        if self.policy.storage_mode != UploadStorageMode.DISK:
            return asset

        try:
            path = await run_in_threadpool(self.storage.write, content, asset.suffix)
        except OSError as e:
            raise UploadReadError(f"Could not store upload: {e}")
        scratch_files.append(path)

        return UploadedAsset(content=content, content_type=content_type, filename=asset.filename, path=path)

    async def _prepare_reference(
        self,
        asset: UploadedAsset,
        scratch_files: List[Path],
        request_id: str,
    ) -> str:
        """Normalize if the policy asks for it and build the image reference."""
        content, content_type, path = asset.content, asset.content_type, asset.path

        if self.policy.normalize:
            normalized = await run_in_threadpool(
                normalize_image,
                asset.content,
                self.policy.max_width,
                self.policy.max_height,
                self.policy.jpeg_quality,
            )
            content, content_type, path = normalized.content, normalized.content_type, None

        if self.policy.reference_mode == ImageReferenceMode.PUBLIC_URL:
            if path is None:
                try:
                    path = await run_in_threadpool(self.storage.write, content, ".jpg")
                except OSError as e:
                    raise UploadReadError(f"Could not store normalized image: {e}")
                scratch_files.append(path)
            reference = self.storage.public_url(path, self.policy.public_base_url)
            logger.info(f"[{request_id}] Image referenced by URL: {reference}")
            return reference

        reference = to_data_uri(content, content_type)
        logger.info(f"[{request_id}] Image converted to base64, length: {len(reference)}")
        return reference

    def build_request(self, image_reference: str, prompt: Optional[str]) -> EnhancementRequest:
        """
        Assemble remote arguments.

        A non-blank prompt is sent as the scene description. Otherwise the
        configured reference image is sent, or the default scene when none is set.
        """
        scene, ref_image_url = None, None
        if prompt and prompt.strip():
            scene = prompt
        elif self.policy.ref_image_url:
            ref_image_url = self.policy.ref_image_url
        else:
            scene = self.policy.default_scene_description

        return EnhancementRequest(
            image_url=image_reference,
            scene_description=scene,
            ref_image_url=ref_image_url,
            optimize_description=self.policy.optimize_description,
            num_results=self.policy.num_results,
            fast=self.policy.fast,
            manual_placement_selection=self.policy.placement_anchor,
            shot_size=list(self.policy.shot_size),
            sync_mode=self.policy.sync_mode,
        )
