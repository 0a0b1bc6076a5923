"""
Yoga Workout Backend — Health Check Route
===========================================

What:  GET /health for Docker health checks and load balancers.
How:   Pings MongoDB; the service is "healthy" only when the ping succeeds.
       Answers 503 otherwise so the instance is taken out of rotation.
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from yogaworkout import __version__
from yogaworkout.database import get_database, ping
from yogaworkout.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(db: AsyncIOMotorDatabase = Depends(get_database)):
    db_status = "connected"
    overall = "healthy"

    try:
        await ping(db)
    except PyMongoError as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: MongoDB unreachable: %s", str(e))

    body = HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    return JSONResponse(status_code=200 if overall == "healthy" else 503, content=body.model_dump())
