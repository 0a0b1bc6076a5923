"""
Yoga Workout Backend — Local File Storage Service
===================================================

What:  BlobStore implementation keeping uploaded images on local disk.
How:   Validates extension and size, stores in date-organized directories
       with UUID filenames, and resolves keys back to paths under a single
       fixed root with a traversal guard.
Who:   StretchService (upload, url), StretchRepository (delete),
       routes/files.py (resolve for serving).

Key layout:
    <folder>/<YYYY>/<MM>/<DD>/<uuid>.<ext>     e.g. stretches/2026/10/19/ab12....jpg

Security Model:
    1. Extension allow-list and size limit before anything touches disk
    2. MIME type read from the header bytes (libmagic), so a renamed
       script or document is rejected whatever its extension says
    3. UUID filenames: no user input ends up in the stored path
    4. Every key is resolved against the storage root and rejected if the
       result lands outside it; this covers legacy or tampered keys such as
       "../../etc/passwd" on delete and on serve
"""

import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Tuple

import aiofiles
import aiofiles.os
import magic

from yogaworkout.config import settings
from yogaworkout.exceptions import FileStorageError, ValidationError
from yogaworkout.services.blob_base import BlobStore

logger = logging.getLogger(__name__)

# ── Allowed File Types ────────────────────────────────────────────────────
ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".webp"}

# Content types accepted from the header bytes, whatever the extension
ALLOWED_MIME_TYPES = {"image/png", "image/jpeg", "image/gif", "image/webp"}


class LocalFileStore(BlobStore):
    """
    Stores uploaded images under `storage_root`.

    Lifecycle of an uploaded image:
        1. Route reads the multipart part → StretchService → upload()
        2. Extension check, then size check, then MIME check on the bytes
        3. File is written to <folder>/<date>/<uuid><ext>
        4. Relative key is returned and saved on the stretch
        5. On stretch delete (or image replace) → delete(key), best-effort
    """

    def __init__(self, storage_root: Optional[str] = None):
        """
        Args:
            storage_root: Override the default storage path (used in tests).
                          If None, uses settings.storage_root.
        """
        self.storage_root = Path(storage_root or settings.storage_root).resolve()
        self.storage_root.mkdir(parents=True, exist_ok=True)
        logger.info("LocalFileStore initialized with storage_root=%s", self.storage_root)

    # ── Validation ────────────────────────────────────────────────────────

    def validate_extension(self, filename: str) -> str:
        """
        Returns: Normalized extension (lowercase with dot).
        Raises:  ValidationError if extension is not allowed.
        """
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                message=(
                    f"File type '{ext}' is not supported. "
                    f"Allowed types: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
                ),
                field="image",
                context={"extension": ext},
            )
        return ext

    def validate_size(self, content_length: Optional[int], actual_size: int) -> None:
        """
        Checks the reported Content-Length first, then the real byte count.

        Raises:
            ValidationError with a human-readable size limit message.
        """
        max_mb = settings.max_file_size / (1024 * 1024)

        if actual_size == 0:
            raise ValidationError(message="Uploaded image is empty.", field="image")

        if content_length and content_length > settings.max_file_size:
            raise ValidationError(
                message=f"File size exceeds maximum of {max_mb:.0f}MB. Please upload a smaller image.",
                field="image",
                context={"max_size_mb": max_mb, "reported_size": content_length},
            )

        if actual_size > settings.max_file_size:
            raise ValidationError(
                message=f"File size ({actual_size / (1024 * 1024):.1f}MB) exceeds maximum of {max_mb:.0f}MB.",
                field="image",
                context={"max_size_mb": max_mb, "actual_size": actual_size},
            )

    def validate_mime_type(self, content: bytes, filename: str) -> str:
        """
        Detect the real content type from the file's header bytes.

        Returns: Detected MIME type (e.g. "image/jpeg").
        Raises:  ValidationError if the content is not an allowed image type.
                 FileStorageError if libmagic cannot inspect the bytes.
        """
        try:
            mime_type = magic.from_buffer(content, mime=True)
        except magic.MagicException as e:
            logger.error("MIME type detection failed for %s: %s", filename, str(e))
            raise FileStorageError(
                message="Could not verify file type. Please try again.",
                context={"error": str(e)},
            )

        if mime_type not in ALLOWED_MIME_TYPES:
            logger.warning("Rejected upload %s: detected content type %s", filename, mime_type)
            raise ValidationError(
                message=(
                    f"File content type '{mime_type}' is not supported. "
                    f"Allowed types: {', '.join(sorted(ALLOWED_MIME_TYPES))}"
                ),
                field="image",
                context={"detected_mime": mime_type},
            )
        return mime_type

    # ── Paths ─────────────────────────────────────────────────────────────

    def _generate_key(self, folder: str, extension: str) -> str:
        """Creates <folder>/YYYY/MM/DD/<uuid><ext>."""
        now = datetime.now(timezone.utc)
        date_dir = now.strftime("%Y/%m/%d")
        return f"{folder.strip('/')}/{date_dir}/{uuid.uuid4()}{extension}"

    def resolve(self, key: str) -> Optional[Path]:
        """
        Map a stored key to an absolute path inside the storage root.

        Returns None when the resolved path escapes the root (the path
        traversal guard); callers treat that as "refuse", never as "missing".
        """
        candidate = (self.storage_root / key).resolve()
        if candidate != self.storage_root and self.storage_root not in candidate.parents:
            logger.warning(
                "Refusing path outside storage root: key=%r resolved=%s", key, candidate
            )
            return None
        return candidate

    # ── BlobStore API ─────────────────────────────────────────────────────

    async def store_file(self, content: bytes, key: str) -> Tuple[str, str]:
        """
        Write validated file content to disk.

        Returns: Tuple of (absolute_path, key).
        Raises:  FileStorageError if directory creation or file write fails.
        """
        absolute_path = self.storage_root / key

        try:
            absolute_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(absolute_path, "wb") as f:
                await f.write(content)

            logger.info("File stored: %s (%d bytes)", key, len(content))
            return str(absolute_path), key

        except OSError as e:
            logger.error("Failed to store file at %s: %s", absolute_path, str(e))
            raise FileStorageError(
                message="Failed to save uploaded image. Please try again.",
                context={"path": str(absolute_path), "os_error": str(e)},
            )

    async def upload(
        self,
        filename: str,
        content: bytes,
        folder: str,
        content_length: Optional[int] = None,
    ) -> str:
        """
        Complete validation and storage pipeline: extension → size → MIME → write.
        """
        ext = self.validate_extension(filename)
        self.validate_size(content_length, len(content))
        self.validate_mime_type(content, filename)
        _, key = await self.store_file(content, self._generate_key(folder, ext))
        return key

    def url(self, key: str) -> Optional[str]:
        if not key:
            return None
        return f"{settings.files_url_prefix}/{key.lstrip('/')}"

    async def delete(self, key: str) -> bool:
        """
        Best-effort removal of a stored image.

        Outcomes:
            path escapes the storage root → refused, False
            file already absent           → True
            removed                       → True
            any OS error                  → logged, False
        """
        if not key:
            return True

        path = self.resolve(key)
        if path is None:
            return False

        try:
            await aiofiles.os.remove(path)
            logger.info("Deleted file: %s", key)
            return True
        except FileNotFoundError:
            logger.warning("File not found, may have been deleted already: %s", key)
            return True
        except OSError as e:
            logger.warning("Failed to delete file %s: %s", key, str(e))
            return False


# ── Singleton Instance ────────────────────────────────────────────────────
file_service = LocalFileStore()
