"""
Yoga Workout Backend — Abstract Blob Store Interface
======================================================

What:  Contract for wherever uploaded images live.
How:   Concrete stores inherit from BlobStore. Records only ever hold the
       opaque key returned by upload(); URLs are derived at read time.
Who:   Used by StretchRepository (cleanup on delete) and StretchService
       (upload on create/update, URL enrichment on list).

Implementations:
    - LocalFileStore (services/file_service.py): files under STORAGE_ROOT,
      served by GET /uploads/{key}
"""

from abc import ABC, abstractmethod
from typing import Optional


class BlobStore(ABC):
    """
    Abstract interface for image storage.

    Contract:
        - upload() validates and stores content, returns the key to persist
        - url() maps a stored key to a client-usable URL
        - delete() is best-effort: it reports the outcome and never raises
    """

    @abstractmethod
    async def upload(
        self,
        filename: str,
        content: bytes,
        folder: str,
        content_length: Optional[int] = None,
    ) -> str:
        """
        Validate and store an uploaded image.

        Args:
            filename: Original client filename (only its extension is used)
            content: Raw file bytes
            folder: Logical grouping prefix for the key (e.g. "stretches")
            content_length: Reported upload size, checked before the real size

        Returns:
            str: Key to store on the record (relative, forward slashes).

        Raises:
            ValidationError: Unsupported type or oversized file.
            FileStorageError: The store could not write the file.
        """
        ...

    @abstractmethod
    def url(self, key: str) -> Optional[str]:
        """URL for a stored key, or None when the key is empty."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Remove a stored blob.

        Returns:
            True if the blob is gone afterwards (including "was already absent"),
            False if removal was refused or failed. Never raises.
        """
        ...
