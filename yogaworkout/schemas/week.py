"""
Yoga Workout Backend — Week Request/Response Schemas
======================================================

What:  API contract for the week endpoints. Request bodies keep the legacy
       camel/snake field names (`challenges_id`, `weekName`) as aliases.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from yogaworkout.models.week import Week


class WeekCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    challenge_id: Optional[str] = Field(default=None, alias="challenges_id")
    week_name: Optional[str] = Field(default=None, alias="weekName")


class WeekUpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    week_name: Optional[str] = Field(default=None, alias="weekName")


class ChallengeResponse(BaseModel):
    id: str
    name: Optional[str] = None


class WeekResponse(BaseModel):
    """
    A week; `challenge` is populated only by the list-by-challenge endpoint,
    carrying the parent's ID and display name.
    """

    id: str
    challenge_id: str
    name: str
    challenge: Optional[ChallengeResponse] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, week: Week) -> "WeekResponse":
        challenge = None
        if week.challenge is not None:
            challenge = ChallengeResponse(id=str(week.challenge.id), name=week.challenge.name)
        return cls(
            id=str(week.id),
            challenge_id=str(week.challenge_id),
            name=week.name,
            challenge=challenge,
            created_at=week.created_at,
            updated_at=week.updated_at,
        )


class WeekListData(BaseModel):
    weeks: List[WeekResponse]


class WeekDeleteData(BaseModel):
    deleted_count: int = Field(description="Documents removed (0 or 1)")
