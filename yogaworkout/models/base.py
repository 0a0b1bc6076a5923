"""
Yoga Workout Backend — Document Model Base
============================================

What:  Shared Pydantic base for MongoDB document models.
How:   Python-side field names are snake_case; `alias` carries the stored
       field name so existing collections keep their layout
       (e.g. `is_active` ↔ "isActive", `challenge_id` ↔ "challenges_Id").

    Stretch.from_document(raw_doc)      raw Mongo dict → model
    stretch.to_document()               model → dict ready for insert_one
    Stretch.validate_fields({...})      partial update → validated $set dict
"""

import logging
from datetime import datetime, timezone
from typing import Annotated, Any, Dict, Iterable, List, Mapping, Optional

from bson import ObjectId
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    PlainValidator,
    TypeAdapter,
    WithJsonSchema,
)
from pydantic import ValidationError as PydanticValidationError

from yogaworkout.exceptions import ValidationError

logger = logging.getLogger(__name__)


def _to_object_id(value: Any) -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value) and len(value) == 24:
        return ObjectId(value)
    raise ValueError(f"'{value}' is not a valid ObjectId")


# Kept as a real ObjectId in Python and in Mongo; rendered as hex in JSON
ObjectIdField = Annotated[
    ObjectId,
    PlainValidator(_to_object_id),
    PlainSerializer(str, return_type=str, when_used="json"),
    WithJsonSchema({"type": "string", "pattern": "^[0-9a-fA-F]{24}$"}),
]


def utcnow() -> datetime:
    """Timestamp used for createdAt/updatedAt on every write."""
    return datetime.now(timezone.utc)


class DocumentModel(BaseModel):
    """Base class for models persisted in a MongoDB collection."""

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        extra="ignore",
    )

    @classmethod
    def from_document(cls, document: Mapping[str, Any]):
        """Build a model from a raw document returned by motor."""
        return cls.model_validate(dict(document))

    @classmethod
    def from_documents(cls, documents: Iterable[Mapping[str, Any]]) -> List[Any]:
        """
        Build models for a listing. A stored document that no longer fits
        the model is logged and left out of the result.
        """
        models = []
        for document in documents:
            try:
                models.append(cls.from_document(document))
            except PydanticValidationError as e:
                logger.warning(
                    "Skipping malformed %s document %s: %s",
                    cls.__name__,
                    document.get("_id"),
                    e.errors(include_url=False),
                )
        return models

    def to_document(self) -> Dict[str, Any]:
        """Stored-name dict for insert; `_id` is left for MongoDB to assign."""
        document = self.model_dump(by_alias=True, exclude_none=True)
        document.pop("_id", None)
        return document

    @classmethod
    def validate_fields(cls, values: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate a partial set of fields against this model's field rules.

        What:  The update-time counterpart of model validation: each value is
               checked against its field's annotation and constraints
               (min_length etc.) without requiring the other fields.
        Returns: dict keyed by stored field name, ready for a `$set`.
        Raises:  ValidationError naming the offending stored field.
        """
        validated: Dict[str, Any] = {}
        for name, value in values.items():
            info = cls.model_fields[name]
            stored_name = info.alias or name
            annotation = info.annotation
            if info.metadata:
                annotation = Annotated[(info.annotation, *info.metadata)]
            adapter = TypeAdapter(
                annotation, config=ConfigDict(arbitrary_types_allowed=True)
            )
            try:
                validated[stored_name] = adapter.validate_python(value)
            except PydanticValidationError as e:
                raise ValidationError(
                    message=f"Invalid value for '{stored_name}'",
                    field=stored_name,
                    context={"errors": e.errors(include_url=False)},
                )
        return validated


class TimestampedModel(DocumentModel):
    """Adds `_id` and the createdAt/updatedAt pair every collection carries."""

    id: Optional[ObjectIdField] = Field(default=None, alias="_id")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")
