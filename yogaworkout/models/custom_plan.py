"""
Yoga Workout Backend — Custom Plan Document Model
===================================================

What:  A user-owned workout plan in the `customplans` collection.
How:   Only `_id`, `user_id` and `createdAt` are interpreted here; every other
       stored field (plan name, image, level, ...) is carried through as-is
       (`extra="allow"`), so the API returns plans exactly as the app saved them.

Exercises live in `customplanexercises` and reference their plan through
`custom_plan_id`; they are only ever counted.
"""

from typing import Any, Dict

from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from pydantic import ConfigDict, Field

from yogaworkout.models.base import ObjectIdField, TimestampedModel


class CustomPlan(TimestampedModel):
    model_config = ConfigDict(extra="allow")

    user_id: ObjectIdField
    total_exercise: int = Field(default=0, exclude=True)

    def to_public_dict(self) -> Dict[str, Any]:
        """JSON-safe dict of every stored field plus the exercise count."""
        data = {
            "id": self.id,
            "user_id": self.user_id,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        data.update(self.model_extra or {})
        data["total_exercise"] = self.total_exercise
        return jsonable_encoder(data, custom_encoder={ObjectId: str})
