"""
Yoga Workout Backend — Stretch Request/Response Schemas
=========================================================

What:  API contract for the stretch endpoints.

Create/update arrive as multipart forms (the image is an optional file part),
so their fields are declared on the route with Form(); only the JSON status
change body has a model here.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from yogaworkout.models.stretch import Stretch


class StretchResponse(BaseModel):
    """Full representation of a stretch, with a browser-usable image URL."""

    id: str = Field(description="Stretch ObjectId (24 hex chars)")
    name: str = Field(description="Display name")
    description: Optional[str] = Field(default=None)
    is_active: bool = Field(description="Whether the stretch is shown in the app")
    image: str = Field(default="", description="Stored image key, empty when none")
    image_url: Optional[str] = Field(default=None, description="URL serving the image")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, stretch: Stretch, image_url: Optional[str] = None) -> "StretchResponse":
        return cls(
            id=str(stretch.id),
            name=stretch.name,
            description=stretch.description,
            is_active=stretch.is_active,
            image=stretch.image,
            image_url=image_url,
            created_at=stretch.created_at,
            updated_at=stretch.updated_at,
        )


class StretchListData(BaseModel):
    stretches: List[StretchResponse]


class StretchStatusRequest(BaseModel):
    """
    Body of POST /changeStretchesStatus.

    Both fields are optional at the schema level so that a missing value
    produces the app's own 400 message instead of a generic schema error.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, description="Stretch ObjectId")
    status: Optional[bool] = Field(default=None, description="New active flag (true/false or 1/0)")


class StretchDeleteData(BaseModel):
    deleted_count: int = Field(description="Documents removed (0 or 1)")
    image_removed: Optional[bool] = Field(
        default=None,
        description="Image cleanup outcome; null when the stretch had no image",
    )
