"""
Yoga Workout Backend — Shared Route Dependencies
==================================================

What:  FastAPI dependencies that hand handlers a capability instead of raw
       request data.

    require_session  → SessionContext for user-scoped endpoints
"""

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from yogaworkout.database import get_database
from yogaworkout.schemas.custom_plan import SessionCredentials
from yogaworkout.services.session_service import SessionContext, session_service
from yogaworkout.validators import require_object_id, require_present

MISSING_CREDENTIALS = "user_id, session and device_id are required"


async def require_session(
    credentials: SessionCredentials,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> SessionContext:
    """
    Check the user/session/device triple from the request body.

    Raises ValidationError (400) when any part is missing or the user ID is
    malformed. A triple that simply does not match yields
    SessionContext(authenticated=False); the handler decides what to answer.
    """
    require_present(credentials.user_id, MISSING_CREDENTIALS, field="user_id")
    require_present(credentials.session, MISSING_CREDENTIALS, field="session")
    require_present(credentials.device_id, MISSING_CREDENTIALS, field="device_id")
    user_id = require_object_id(credentials.user_id, "User", field="user_id")

    return await session_service.authenticate(
        db, user_id, credentials.session, credentials.device_id
    )
