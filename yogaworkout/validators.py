"""
Yoga Workout Backend — Entity Validators
==========================================

What:  Pure input checks run before any store access.
How:   Each function returns the cleaned value or raises ValidationError
       with the human-readable message the client shows to the user.

Messages:
    require_text(None, "Stretch")           → "Enter Stretch Name!"
    require_object_id("abc", "Challenges")  → "Invalid Challenges ID"
"""

from typing import Any, Optional

from bson import ObjectId

from yogaworkout.exceptions import ValidationError


def require_text(value: Optional[str], label: str, field: Optional[str] = None) -> str:
    """
    Ensure a required text field is present and non-blank.

    Returns the stripped value.
    Raises ValidationError("Enter <label> Name!").
    """
    if value is None or not str(value).strip():
        raise ValidationError(message=f"Enter {label} Name!", field=field)
    return str(value).strip()


def is_object_id(value: Any) -> bool:
    """True when value is an ObjectId or its 24-character hex string form."""
    if isinstance(value, ObjectId):
        return True
    return isinstance(value, str) and len(value) == 24 and ObjectId.is_valid(value)


def require_object_id(value: Any, label: str, field: Optional[str] = None) -> ObjectId:
    """
    Ensure value is a well-formed MongoDB identifier.

    Only the format is checked; whether a document with this ID exists
    is left to the store call that follows.

    Returns the parsed ObjectId.
    Raises ValidationError("Invalid <label> ID").
    """
    if not is_object_id(value):
        raise ValidationError(
            message=f"Invalid {label} ID",
            field=field,
            context={"value": str(value)[:64]},
        )
    return ObjectId(value)


def require_present(value: Any, message: str, field: Optional[str] = None) -> Any:
    """Ensure a value was supplied at all (None or empty string fails)."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(message=message, field=field)
    return value
