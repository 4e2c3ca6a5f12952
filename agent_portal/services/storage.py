"""Blob storage for uploaded PDFs.

The document record keeps only an opaque ``storage_path``; this service maps
it to bytes on disk and to a public URL. Upload validation (PDF only, size
ceiling) happens here too, before anything is written.
"""


import asyncio
import logging
import re
import time
from pathlib import Path

from agent_portal.core.config import Settings
from agent_portal.core.exceptions import StorageError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = {"application/pdf"}
_PDF_MAGIC = b"%PDF-"
_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def sanitize_file_name(file_name: str) -> str:
    return _UNSAFE_CHARS.sub("_", file_name)


def validate_pdf_upload(
    file_name: str, content_type: str | None, data: bytes, max_bytes: int
) -> None:
    """Reject anything that is not a PDF within the size ceiling.

    Raises :class:`ValidationError` with a user-facing message.
    """
    if len(data) > max_bytes:
        raise ValidationError(
            f"File size exceeds maximum of {max_bytes // (1024 * 1024)}MB"
        )
    if not data:
        raise ValidationError("Uploaded file is empty")

    # Browsers sometimes send octet-stream; fall back to the extension
    declared = (content_type or "").lower()
    if declared not in ALLOWED_MIME_TYPES and not (
        declared in ("", "application/octet-stream")
        and file_name.lower().endswith(".pdf")
    ):
        raise ValidationError("Only PDF files are allowed")
    if not data.startswith(_PDF_MAGIC):
        raise ValidationError("Only PDF files are allowed")


class LocalBlobStorage:
    """Stores blobs under a local directory and serves them from ``base_url``."""

    def __init__(self, root: str | Path, base_url: str = "/files"):
        self._root = Path(root).resolve()
        self._base_url = base_url.rstrip("/")

    @classmethod
    def from_settings(cls, settings: Settings) -> "LocalBlobStorage":
        return cls(settings.storage_dir, settings.storage_base_url)

    @property
    def root(self) -> Path:
        return self._root

    def _resolve(self, storage_path: str) -> Path:
        path = (self._root / storage_path).resolve()
        if self._root not in path.parents:
            raise ValueError(f"Storage path escapes storage root: {storage_path}")
        return path

    async def save(self, file_name: str, owner_id: str, data: bytes) -> str:
        """Write the blob and return its storage path."""
        timestamp = int(time.time() * 1000)
        storage_path = (
            f"documents/{sanitize_file_name(owner_id)}/{timestamp}-{sanitize_file_name(file_name)}"
        )
        try:
            target = self._resolve(storage_path)
            await asyncio.to_thread(target.parent.mkdir, parents=True, exist_ok=True)
            await asyncio.to_thread(target.write_bytes, data)
        except (OSError, ValueError) as exc:
            logger.error("Blob save failed for %s: %s", storage_path, exc)
            raise StorageError("Failed to store uploaded file") from exc
        logger.info("Stored blob %s (%d bytes)", storage_path, len(data))
        return storage_path

    async def delete(self, storage_path: str) -> bool:
        """Remove a blob. Returns False (and logs) instead of raising."""
        try:
            target = self._resolve(storage_path)
            await asyncio.to_thread(target.unlink)
        except FileNotFoundError:
            logger.warning("Blob already missing: %s", storage_path)
            return False
        except (OSError, ValueError) as exc:
            logger.warning("Blob delete failed for %s: %s", storage_path, exc)
            return False
        return True

    def public_url(self, storage_path: str) -> str:
        return f"{self._base_url}/{storage_path}"
