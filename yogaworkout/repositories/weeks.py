"""
Yoga Workout Backend — Week Repository
========================================

What:  Data access for the `weeks` collection, plus the read-only join
       against `challenges` used when listing the weeks of one challenge.

Join:
    Weeks are fetched first; their distinct challenges_Id values are then
    looked up in one `$in` query projecting only `challengesName`. A week
    whose challenge no longer exists keeps challenge=None.
"""

import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, ReturnDocument

from yogaworkout.database import CHALLENGES, WEEKS
from yogaworkout.models.base import utcnow
from yogaworkout.models.week import ChallengeSummary, Week
from yogaworkout.repositories.base import store_errors

logger = logging.getLogger(__name__)


class WeekRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db[WEEKS]
        self.challenges = db[CHALLENGES]

    async def list_all(self, newest_first: bool = True) -> List[Week]:
        direction = DESCENDING if newest_first else ASCENDING
        with store_errors("list weeks"):
            documents = await self.collection.find().sort("createdAt", direction).to_list(length=None)
        return Week.from_documents(documents)

    async def list_by_challenge(self, challenge_id: ObjectId, join: bool = True) -> List[Week]:
        with store_errors("list weeks by challenge", challenge_id=str(challenge_id)):
            documents = await (
                self.collection.find({"challenges_Id": challenge_id})
                .sort("createdAt", DESCENDING)
                .to_list(length=None)
            )
        weeks = Week.from_documents(documents)
        if join and weeks:
            await self._attach_challenges(weeks)
        return weeks

    async def _attach_challenges(self, weeks: List[Week]) -> None:
        challenge_ids = list({week.challenge_id for week in weeks})
        with store_errors("join challenges"):
            documents = await self.challenges.find(
                {"_id": {"$in": challenge_ids}},
                {"_id": 1, "challengesName": 1},
            ).to_list(length=None)
        summaries = {doc["_id"]: ChallengeSummary.from_document(doc) for doc in documents}
        for week in weeks:
            week.challenge = summaries.get(week.challenge_id)

    async def create(self, week: Week) -> Week:
        document = week.to_document()
        now = utcnow()
        document["createdAt"] = now
        document["updatedAt"] = now
        with store_errors("insert week"):
            result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info("Week created: %s (challenge %s)", result.inserted_id, week.challenge_id)
        return Week.from_document(document)

    async def update_by_id(self, week_id: ObjectId, fields: Dict[str, Any]) -> Optional[Week]:
        """Partial update validated against the Week model; None when not found."""
        changes = Week.validate_fields(fields)
        changes["updatedAt"] = utcnow()
        with store_errors("update week", week_id=str(week_id)):
            document = await self.collection.find_one_and_update(
                {"_id": week_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        return Week.from_document(document) if document else None

    async def delete_by_id(self, week_id: ObjectId) -> int:
        with store_errors("delete week", week_id=str(week_id)):
            result = await self.collection.delete_one({"_id": week_id})
        if result.deleted_count:
            logger.info("Week deleted: %s", week_id)
        return result.deleted_count
