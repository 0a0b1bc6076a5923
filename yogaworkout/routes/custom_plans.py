"""
Yoga Workout Backend — Custom Plan Route Handler
==================================================

What:  POST /getcustomplan: the caller's custom plans with exercise counts.
How:   require_session turns the body's user/session/device triple into a
       SessionContext. A context that is not authenticated is answered here
       with 401 "Please login first"; it never reaches the service.

Outcomes:
    missing/malformed triple   → 400 validation_error
    session does not match     → 401 unauthorized
    logged in, no plans        → 200 success, empty list
    logged in, plans           → 200 success, plans newest first
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorDatabase

from yogaworkout.database import get_database
from yogaworkout.middleware.request_id import request_id_var
from yogaworkout.routes.dependencies import require_session
from yogaworkout.schemas.common import ApiResponse, ErrorResponse, error_response
from yogaworkout.schemas.custom_plan import CustomPlanListData
from yogaworkout.services.custom_plan_service import custom_plan_service
from yogaworkout.services.session_service import SessionContext

router = APIRouter(tags=["Custom Plans"])


def login_required_response() -> JSONResponse:
    return error_response(
        401,
        "unauthorized",
        "Please login first",
        details={"custom_plans": []},
        request_id=request_id_var.get(""),
    )


@router.post(
    "/getcustomplan",
    response_model=ApiResponse[CustomPlanListData],
    responses={
        400: {"description": "user_id, session or device_id missing", "model": ErrorResponse},
        401: {"description": "Session does not match", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List the logged-in user's custom plans",
)
async def get_custom_plan(
    auth: SessionContext = Depends(require_session),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    if not auth.authenticated:
        return login_required_response()
    return await custom_plan_service.list_plans(db, auth)
