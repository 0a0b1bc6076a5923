"""
Yoga Workout Backend — Session Check
======================================

What:  Verifies the (user_id, session, device_id) triple the mobile app sends
       on user-scoped calls, and models the outcome as an explicit context
       object instead of an exception.
How:   A user is logged in on a device when the `users` document with that
       _id carries the same `session` token and `device_id`.
Who:   routes/dependencies.py builds a SessionContext per request; handlers
       that need a user receive it as a parameter.

A failed check is an ordinary outcome: `authenticated=False`. It is not a
server error and not a validation error (that is reserved for a missing
or malformed triple).
"""

import logging
from dataclasses import dataclass

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from yogaworkout.database import USERS
from yogaworkout.repositories.base import store_errors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionContext:
    user_id: ObjectId
    authenticated: bool


class SessionService:
    async def check_user_login(
        self,
        db: AsyncIOMotorDatabase,
        user_id: ObjectId,
        session: str,
        device_id: str,
    ) -> bool:
        """True when the user's stored session and device match."""
        with store_errors("check user login", user_id=str(user_id)):
            user = await db[USERS].find_one(
                {"_id": user_id, "session": session, "device_id": device_id},
                {"_id": 1},
            )
        if user is None:
            logger.info("Session check failed for user %s", user_id)
        return user is not None

    async def authenticate(
        self,
        db: AsyncIOMotorDatabase,
        user_id: ObjectId,
        session: str,
        device_id: str,
    ) -> SessionContext:
        authenticated = await self.check_user_login(db, user_id, session, device_id)
        return SessionContext(user_id=user_id, authenticated=authenticated)


session_service = SessionService()
