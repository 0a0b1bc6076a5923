"""
Yoga Workout Backend — Week Document Model
============================================

What:  A week of a challenge in the `weeks` collection.

Stored layout:
    {
        "_id": ObjectId,
        "challenges_Id": ObjectId,   # → challenges._id (format checked, existence not)
        "weekName": "Week 1",
        "createdAt": datetime,
        "updatedAt": datetime
    }

`challenge` is never stored: the repository fills it in when a listing asks
for the parent challenge to be joined.
"""

from typing import Optional

from pydantic import Field

from yogaworkout.models.base import DocumentModel, ObjectIdField, TimestampedModel


class ChallengeSummary(DocumentModel):
    """Display fields of a challenge selected for the week join."""

    id: ObjectIdField = Field(alias="_id")
    name: Optional[str] = Field(default=None, alias="challengesName")


class Week(TimestampedModel):
    challenge_id: ObjectIdField = Field(alias="challenges_Id")
    name: str = Field(alias="weekName", min_length=1)
    challenge: Optional[ChallengeSummary] = Field(default=None, exclude=True)

    def __repr__(self) -> str:
        return f"<Week(id={self.id}, name='{self.name}', challenge_id={self.challenge_id})>"
