"""
Yoga Workout Backend — MongoDB Client Management
==================================================

What:  Async motor client, database accessor, FastAPI dependency and
       index bootstrap for all collections.
How:   One AsyncIOMotorClient per process (it owns the connection pool);
       route handlers receive the database through `get_database()`.
When:  Client is created at module import; it connects lazily on first use
       and is closed during application shutdown.

Collections:
    stretches            Stretch documents
    weeks                Week documents (challenges_Id → challenges._id)
    challenges           Challenge documents (read-only here, join target)
    customplans          CustomPlan documents (user_id → users._id)
    customplanexercises  CustomPlanExercise documents (custom_plan_id → customplans._id)
    users                User documents carrying the active session/device
"""

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from yogaworkout.config import settings

logger = logging.getLogger(__name__)

# ── Collection Names ──────────────────────────────────────────────────────
STRETCHES = "stretches"
WEEKS = "weeks"
CHALLENGES = "challenges"
CUSTOM_PLANS = "customplans"
CUSTOM_PLAN_EXERCISES = "customplanexercises"
USERS = "users"


# ── Client Configuration ──────────────────────────────────────────────────
# tz_aware=True: datetimes come back timezone-aware (UTC), matching what we write
client: AsyncIOMotorClient = AsyncIOMotorClient(
    settings.mongodb_url,
    maxPoolSize=settings.mongodb_max_pool_size,
    serverSelectionTimeoutMS=settings.mongodb_server_selection_timeout_ms,
    tz_aware=True,
)


def get_database() -> AsyncIOMotorDatabase:
    """
    FastAPI dependency that provides the application database.

    Tests override this dependency with an in-memory database
    (see tests/conftest.py).

    Example usage in a route:
        @router.get("/stretches")
        async def list_stretches(db: AsyncIOMotorDatabase = Depends(get_database)):
            ...
    """
    return client[settings.mongodb_database]


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """
    Create the indexes every list/count query relies on.

    Idempotent: MongoDB ignores create_index for an index that already exists.
    Called once during application startup.
    """
    await db[STRETCHES].create_index([("createdAt", DESCENDING)])
    await db[WEEKS].create_index([("createdAt", DESCENDING)])
    await db[WEEKS].create_index([("challenges_Id", ASCENDING)])
    await db[CUSTOM_PLANS].create_index([("user_id", ASCENDING), ("createdAt", DESCENDING)])
    await db[CUSTOM_PLAN_EXERCISES].create_index([("custom_plan_id", ASCENDING)])
    logger.info("MongoDB indexes ensured on database '%s'", db.name)


async def ping(db: AsyncIOMotorDatabase) -> None:
    """Round-trip a ping command; raises on an unreachable server."""
    await db.command("ping")


def close_client() -> None:
    """
    Close all pooled connections.

    When:  Called during application shutdown (lifespan handler).
    """
    client.close()
