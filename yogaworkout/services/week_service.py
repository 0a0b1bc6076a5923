"""
Yoga Workout Backend — Week Service
=====================================

What:  Orchestrates the week endpoints: validate → repository → response.
Who:   Called by routes/weeks.py.

Listing weeks of a challenge that has none (or that does not exist) is an
empty success, the same as listing all weeks of an empty collection.
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from yogaworkout.exceptions import NotFoundError
from yogaworkout.models.week import Week
from yogaworkout.repositories.weeks import WeekRepository
from yogaworkout.schemas.common import ApiResponse
from yogaworkout.schemas.week import WeekDeleteData, WeekListData, WeekResponse
from yogaworkout.validators import require_object_id, require_text

logger = logging.getLogger(__name__)


class WeekService:
    async def add_week(
        self,
        db: AsyncIOMotorDatabase,
        challenge_id: Optional[str],
        week_name: Optional[str],
    ) -> ApiResponse[WeekResponse]:
        name = require_text(week_name, "Week", field="weekName")
        challenge_oid = require_object_id(challenge_id, "Challenges", field="challenges_id")

        created = await WeekRepository(db).create(Week(challenge_id=challenge_oid, name=name))
        return ApiResponse(message="Week Added successfully!", data=WeekResponse.from_model(created))

    async def list_weeks(self, db: AsyncIOMotorDatabase) -> ApiResponse[WeekListData]:
        weeks = await WeekRepository(db).list_all(newest_first=True)
        if not weeks:
            return ApiResponse(message="No Weeks Added!", data=WeekListData(weeks=[]))
        return ApiResponse(
            message=f"{len(weeks)} weeks found",
            data=WeekListData(weeks=[WeekResponse.from_model(w) for w in weeks]),
        )

    async def list_weeks_by_challenge(
        self, db: AsyncIOMotorDatabase, challenge_id: str
    ) -> ApiResponse[WeekListData]:
        challenge_oid = require_object_id(challenge_id, "Challenges", field="id")

        weeks = await WeekRepository(db).list_by_challenge(challenge_oid, join=True)
        if not weeks:
            return ApiResponse(message="No Weeks Added!", data=WeekListData(weeks=[]))
        return ApiResponse(
            message=f"{len(weeks)} weeks found",
            data=WeekListData(weeks=[WeekResponse.from_model(w) for w in weeks]),
        )

    async def update_week(
        self,
        db: AsyncIOMotorDatabase,
        week_id: str,
        week_name: Optional[str],
    ) -> ApiResponse[WeekResponse]:
        name = require_text(week_name, "Week", field="weekName")
        oid = require_object_id(week_id, "Week", field="id")

        updated = await WeekRepository(db).update_by_id(oid, {"name": name})
        if updated is None:
            raise NotFoundError(resource="Week", resource_id=week_id)
        return ApiResponse(message="Week updated successfully!", data=WeekResponse.from_model(updated))

    async def delete_week(self, db: AsyncIOMotorDatabase, week_id: str) -> ApiResponse[WeekDeleteData]:
        oid = require_object_id(week_id, "Week", field="id")

        deleted_count = await WeekRepository(db).delete_by_id(oid)
        if deleted_count == 0:
            raise NotFoundError(resource="Week", resource_id=week_id)
        return ApiResponse(
            message="Week deleted successfully",
            data=WeekDeleteData(deleted_count=deleted_count),
        )


week_service = WeekService()
