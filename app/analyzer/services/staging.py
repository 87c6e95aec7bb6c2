"""
Upload staging for request-scoped artifacts.

Uploads are either written to the upload directory (disk mode) or held as
bytes (memory mode). Disk-backed artifacts are removed when the staging
context exits, whether the request succeeded or not.
"""

import logging
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)


class MissingInputError(Exception):
    """Raised when the expected upload field is absent from the request."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"No file uploaded in field '{field_name}'")


@dataclass
class UploadedArtifact:
    """
    One uploaded file for the duration of a single request.

    Exactly one of ``path`` (disk mode) or ``buffer`` (memory mode) is set.
    """

    field_name: str
    filename: str | None
    content_type: str | None
    path: Path | None = None
    buffer: bytes | None = None


def _require(upload: UploadFile | None, field_name: str) -> UploadFile:
    if upload is None:
        raise MissingInputError(field_name)
    return upload


async def stage_to_memory(upload: UploadFile | None, field_name: str) -> UploadedArtifact:
    """
    Buffer an upload in memory.

    Args:
        upload: The multipart file, or None if the field was not sent.
        field_name: Form field the file was expected in.

    Returns:
        UploadedArtifact holding the raw bytes.

    Raises:
        MissingInputError: If no file was uploaded.
    """
    upload = _require(upload, field_name)
    try:
        content = await upload.read()
    finally:
        await upload.close()

    logger.info(
        "Buffered upload %s (%d bytes) from field '%s'",
        upload.filename,
        len(content),
        field_name,
    )
    return UploadedArtifact(
        field_name=field_name,
        filename=upload.filename,
        content_type=upload.content_type,
        buffer=content,
    )


@asynccontextmanager
async def stage_to_disk(
    upload: UploadFile | None,
    field_name: str,
    upload_dir: Path,
) -> AsyncIterator[UploadedArtifact]:
    """
    Write an upload to the upload directory for the lifetime of the context.

    The file gets a unique generated name so concurrent requests never
    collide, and it is deleted exactly once when the context exits.

    Args:
        upload: The multipart file, or None if the field was not sent.
        field_name: Form field the file was expected in.
        upload_dir: Directory that holds transient uploads.

    Yields:
        UploadedArtifact pointing at the staged file.

    Raises:
        MissingInputError: If no file was uploaded (nothing is written).
    """
    upload = _require(upload, field_name)

    upload_dir = Path(upload_dir)
    path = upload_dir / f"{uuid.uuid4().hex}.pdf"

    try:
        content = await upload.read()
    finally:
        await upload.close()

    await run_in_threadpool(upload_dir.mkdir, parents=True, exist_ok=True)

    try:
        await run_in_threadpool(path.write_bytes, content)
        logger.info("Staged upload %s to %s (%d bytes)", upload.filename, path, len(content))
        yield UploadedArtifact(
            field_name=field_name,
            filename=upload.filename,
            content_type=upload.content_type,
            path=path,
        )
    finally:
        await run_in_threadpool(path.unlink, missing_ok=True)
        logger.info("Removed staged upload %s", path)
