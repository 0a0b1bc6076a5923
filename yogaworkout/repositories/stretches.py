"""
Yoga Workout Backend — Stretch Repository
===========================================

What:  Data access for the `stretches` collection.
Who:   StretchService.

Delete semantics:
    find_one_and_delete removes the document and hands back what was removed
    in one atomic step, so of two concurrent deletes exactly one sees the
    document (deleted_count=1) and the other sees nothing (deleted_count=0).
    Only the winner cleans up the image, through the blob store, and a
    cleanup failure is reported in the result, never raised.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, ReturnDocument

from yogaworkout.database import STRETCHES
from yogaworkout.models.base import utcnow
from yogaworkout.models.stretch import Stretch
from yogaworkout.repositories.base import store_errors
from yogaworkout.services.blob_base import BlobStore

logger = logging.getLogger(__name__)


@dataclass
class StretchDeleteResult:
    deleted_count: int
    image_removed: Optional[bool] = None
    image: str = ""


class StretchRepository:
    def __init__(self, db: AsyncIOMotorDatabase, blob_store: BlobStore):
        self.collection = db[STRETCHES]
        self.blob_store = blob_store

    async def list_all(self, newest_first: bool = True) -> List[Stretch]:
        direction = DESCENDING if newest_first else ASCENDING
        with store_errors("list stretches"):
            documents = await self.collection.find().sort("createdAt", direction).to_list(length=None)
        return Stretch.from_documents(documents)

    async def get_by_id(self, stretch_id: ObjectId) -> Optional[Stretch]:
        with store_errors("get stretch", stretch_id=str(stretch_id)):
            document = await self.collection.find_one({"_id": stretch_id})
        return Stretch.from_document(document) if document else None

    async def create(self, stretch: Stretch) -> Stretch:
        document = stretch.to_document()
        now = utcnow()
        document["createdAt"] = now
        document["updatedAt"] = now
        with store_errors("insert stretch"):
            result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info("Stretch created: %s", result.inserted_id)
        return Stretch.from_document(document)

    async def update_by_id(self, stretch_id: ObjectId, fields: Dict[str, Any]) -> Optional[Stretch]:
        """
        Apply a partial update and return the document as it is afterwards.

        `fields` uses model field names (name, description, is_active, image);
        they are validated against the Stretch model before the write.
        Returns None when no stretch has this ID.
        """
        changes = Stretch.validate_fields(fields)
        changes["updatedAt"] = utcnow()
        with store_errors("update stretch", stretch_id=str(stretch_id)):
            document = await self.collection.find_one_and_update(
                {"_id": stretch_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        return Stretch.from_document(document) if document else None

    async def set_status(self, stretch_id: ObjectId, is_active: bool) -> Optional[Stretch]:
        return await self.update_by_id(stretch_id, {"is_active": is_active})

    async def delete_by_id(self, stretch_id: ObjectId) -> StretchDeleteResult:
        with store_errors("delete stretch", stretch_id=str(stretch_id)):
            document = await self.collection.find_one_and_delete({"_id": stretch_id})

        if document is None:
            return StretchDeleteResult(deleted_count=0)

        # Read the key off the raw document: a row too malformed to load as a
        # Stretch is still gone and its image still needs cleaning up
        image = document.get("image") or ""
        result = StretchDeleteResult(deleted_count=1, image=image)
        if isinstance(image, str) and image:
            result.image_removed = await self.blob_store.delete(image)
            if not result.image_removed:
                logger.warning(
                    "Stretch %s deleted but its image %r was not removed", stretch_id, image
                )
        logger.info("Stretch deleted: %s", stretch_id)
        return result
