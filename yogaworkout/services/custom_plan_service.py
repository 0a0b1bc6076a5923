"""
Yoga Workout Backend — Custom Plan Service
============================================

What:  Lists a logged-in user's custom plans, each annotated with the number
       of exercises it contains.
How:   Plans are fetched newest first; their exercise counts are then
       gathered concurrently (one count_documents per plan).
Who:   Called by routes/custom_plans.py once a SessionContext is authenticated.

A user with no plans gets an empty successful list.
"""

import asyncio
import logging

from motor.motor_asyncio import AsyncIOMotorDatabase

from yogaworkout.exceptions import AuthenticationError
from yogaworkout.repositories.custom_plans import CustomPlanRepository
from yogaworkout.schemas.common import ApiResponse
from yogaworkout.schemas.custom_plan import CustomPlanListData
from yogaworkout.services.session_service import SessionContext

logger = logging.getLogger(__name__)


class CustomPlanService:
    async def list_plans(
        self, db: AsyncIOMotorDatabase, auth: SessionContext
    ) -> ApiResponse[CustomPlanListData]:
        if not auth.authenticated:
            raise AuthenticationError(context={"user_id": str(auth.user_id)})

        repository = CustomPlanRepository(db)
        plans = await repository.list_by_user(auth.user_id)
        if not plans:
            return ApiResponse(message="No Custom Plans Added!", data=CustomPlanListData(custom_plans=[]))

        counts = await asyncio.gather(*(repository.count_exercises(plan.id) for plan in plans))
        for plan, count in zip(plans, counts):
            plan.total_exercise = count

        logger.debug("Listed %d custom plans for user %s", len(plans), auth.user_id)
        return ApiResponse(
            message=f"{len(plans)} custom plans found",
            data=CustomPlanListData(custom_plans=[plan.to_public_dict() for plan in plans]),
        )


custom_plan_service = CustomPlanService()
