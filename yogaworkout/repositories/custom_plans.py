"""
Yoga Workout Backend — Custom Plan Repository
===============================================

What:  Read access to `customplans` and exercise counts from
       `customplanexercises`.
"""

from typing import List

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING

from yogaworkout.database import CUSTOM_PLAN_EXERCISES, CUSTOM_PLANS
from yogaworkout.models.custom_plan import CustomPlan
from yogaworkout.repositories.base import store_errors


class CustomPlanRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db[CUSTOM_PLANS]
        self.exercises = db[CUSTOM_PLAN_EXERCISES]

    async def list_by_user(self, user_id: ObjectId) -> List[CustomPlan]:
        """The user's plans, newest first."""
        with store_errors("list custom plans", user_id=str(user_id)):
            documents = await (
                self.collection.find({"user_id": user_id})
                .sort("createdAt", DESCENDING)
                .to_list(length=None)
            )
        return CustomPlan.from_documents(documents)

    async def count_exercises(self, plan_id: ObjectId) -> int:
        with store_errors("count plan exercises", plan_id=str(plan_id)):
            return await self.exercises.count_documents({"custom_plan_id": plan_id})
