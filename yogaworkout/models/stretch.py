"""
Yoga Workout Backend — Stretch Document Model
===============================================

What:  A single stretch in the `stretches` collection.

Stored layout:
    {
        "_id": ObjectId,
        "stretches": "Cat-Cow",          # display name, required
        "description": "...",            # optional
        "isActive": true,                # defaults to true
        "image": "stretches/2026/10/19/<uuid>.jpg",  # blob key or ""
        "createdAt": datetime,
        "updatedAt": datetime
    }

Older documents store isActive as 1/0; Pydantic's lax bool parsing reads
both forms. A null image or isActive reads as "no image" / active.
"""

from typing import Optional

from pydantic import Field, field_validator

from yogaworkout.models.base import TimestampedModel


class Stretch(TimestampedModel):
    name: str = Field(alias="stretches", min_length=1)
    description: Optional[str] = None
    is_active: bool = Field(default=True, alias="isActive")
    image: str = ""

    @field_validator("image", mode="before")
    @classmethod
    def null_image_is_empty(cls, v):
        return "" if v is None else v

    @field_validator("is_active", mode="before")
    @classmethod
    def null_flag_is_active(cls, v):
        return True if v is None else v

    def __repr__(self) -> str:
        return f"<Stretch(id={self.id}, name='{self.name}', is_active={self.is_active})>"
