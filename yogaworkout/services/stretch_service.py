"""
Yoga Workout Backend — Stretch Service
========================================

What:  Orchestrates every stretch endpoint: validate → repository → response.
Who:   Called by routes/stretches.py; calls validators, StretchRepository and
       the blob store.

Error Handling Strategy:
    Validation problems raise ValidationError before any store call.
    A well-formed ID that matches nothing raises NotFoundError.
    Store failures arrive from the repository as DatabaseError and propagate.
    Image cleanup never raises (see LocalFileStore.delete).

Image lifecycle:
    create  → upload first; if the insert fails, the fresh upload is removed
    update  → an uploaded image replaces the old one, which is removed after
              the update succeeds
    delete  → repository removes the image after removing the record
    list    → each stretch carries image_url derived from its key
"""

import logging
from dataclasses import dataclass
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from yogaworkout.exceptions import NotFoundError
from yogaworkout.models.stretch import Stretch
from yogaworkout.repositories.stretches import StretchRepository
from yogaworkout.schemas.common import ApiResponse
from yogaworkout.schemas.stretch import (
    StretchDeleteData,
    StretchListData,
    StretchResponse,
)
from yogaworkout.services.blob_base import BlobStore
from yogaworkout.services.file_service import file_service
from yogaworkout.validators import require_object_id, require_present, require_text

logger = logging.getLogger(__name__)

IMAGE_FOLDER = "stretches"


@dataclass
class UploadedImage:
    """An image part read from a multipart request."""

    filename: str
    content: bytes
    content_length: Optional[int] = None


class StretchService:
    def __init__(self, blob_store: BlobStore):
        self.blob_store = blob_store

    def _repository(self, db: AsyncIOMotorDatabase) -> StretchRepository:
        return StretchRepository(db, self.blob_store)

    def _response(self, stretch: Stretch) -> StretchResponse:
        return StretchResponse.from_model(stretch, image_url=self.blob_store.url(stretch.image))

    async def list_stretches(self, db: AsyncIOMotorDatabase) -> ApiResponse[StretchListData]:
        stretches = await self._repository(db).list_all(newest_first=True)
        if not stretches:
            return ApiResponse(message="No Stretches Added!", data=StretchListData(stretches=[]))
        return ApiResponse(
            message=f"{len(stretches)} stretches found",
            data=StretchListData(stretches=[self._response(s) for s in stretches]),
        )

    async def add_stretch(
        self,
        db: AsyncIOMotorDatabase,
        name: Optional[str],
        description: Optional[str] = None,
        is_active: Optional[bool] = None,
        image: Optional[UploadedImage] = None,
    ) -> ApiResponse[StretchResponse]:
        name = require_text(name, "Stretch", field="stretchesName")

        image_key = ""
        if image is not None:
            image_key = await self.blob_store.upload(
                image.filename, image.content, IMAGE_FOLDER, image.content_length
            )

        stretch = Stretch(
            name=name,
            description=description,
            is_active=True if is_active is None else is_active,
            image=image_key,
        )
        try:
            created = await self._repository(db).create(stretch)
        except Exception:
            if image_key:
                await self.blob_store.delete(image_key)
            raise

        return ApiResponse(message="Stretch Added successfully!", data=self._response(created))

    async def update_stretch(
        self,
        db: AsyncIOMotorDatabase,
        stretch_id: str,
        name: Optional[str],
        description: Optional[str] = None,
        is_active: Optional[bool] = None,
        image: Optional[UploadedImage] = None,
    ) -> ApiResponse[StretchResponse]:
        name = require_text(name, "Stretch", field="stretchesName")
        oid = require_object_id(stretch_id, "Stretch", field="id")
        repository = self._repository(db)

        # Fields left out of the form keep their stored value
        fields = {"name": name}
        if description is not None:
            fields["description"] = description
        if is_active is not None:
            fields["is_active"] = is_active

        old_image = ""
        if image is not None:
            existing = await repository.get_by_id(oid)
            if existing is None:
                raise NotFoundError(resource="Stretch", resource_id=stretch_id)
            old_image = existing.image
            fields["image"] = await self.blob_store.upload(
                image.filename, image.content, IMAGE_FOLDER, image.content_length
            )

        try:
            updated = await repository.update_by_id(oid, fields)
        except Exception:
            if image is not None:
                await self.blob_store.delete(fields["image"])
            raise

        if updated is None:
            if image is not None:
                await self.blob_store.delete(fields["image"])
            raise NotFoundError(resource="Stretch", resource_id=stretch_id)

        if old_image and old_image != updated.image:
            await self.blob_store.delete(old_image)

        return ApiResponse(message="Stretch updated successfully!", data=self._response(updated))

    async def change_status(
        self,
        db: AsyncIOMotorDatabase,
        stretch_id: Optional[str],
        status: Optional[bool],
    ) -> ApiResponse[StretchResponse]:
        """Set the stretch's isActive flag."""
        oid = require_object_id(stretch_id, "Stretch", field="id")
        require_present(status, "Select Stretch Status!", field="status")

        updated = await self._repository(db).set_status(oid, status)
        if updated is None:
            raise NotFoundError(resource="Stretch", resource_id=stretch_id)
        return ApiResponse(
            message="Stretch status changed successfully!", data=self._response(updated)
        )

    async def delete_stretch(
        self, db: AsyncIOMotorDatabase, stretch_id: str
    ) -> ApiResponse[StretchDeleteData]:
        oid = require_object_id(stretch_id, "Stretch", field="id")

        result = await self._repository(db).delete_by_id(oid)
        if result.deleted_count == 0:
            raise NotFoundError(resource="Stretch", resource_id=stretch_id)

        return ApiResponse(
            message="Stretch deleted successfully",
            data=StretchDeleteData(
                deleted_count=result.deleted_count,
                image_removed=result.image_removed,
            ),
        )


stretch_service = StretchService(file_service)
