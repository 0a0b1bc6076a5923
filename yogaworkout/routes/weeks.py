"""
Yoga Workout Backend — Week Route Handlers
============================================

What:  Week CRUD and listing by challenge (with the challenge name joined).
"""

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from yogaworkout.database import get_database
from yogaworkout.schemas.common import ApiResponse, ErrorResponse
from yogaworkout.schemas.week import (
    WeekCreateRequest,
    WeekDeleteData,
    WeekListData,
    WeekResponse,
    WeekUpdateRequest,
)
from yogaworkout.services.week_service import week_service

router = APIRouter(tags=["Weeks"])

ERRORS = {
    400: {"description": "Missing field or invalid ID", "model": ErrorResponse},
    404: {"description": "Week not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.post(
    "/addWeek",
    status_code=201,
    response_model=ApiResponse[WeekResponse],
    responses={400: ERRORS[400], 500: ERRORS[500]},
    summary="Create a week in a challenge",
)
async def add_week(body: WeekCreateRequest, db: AsyncIOMotorDatabase = Depends(get_database)):
    return await week_service.add_week(db, body.challenge_id, body.week_name)


@router.get(
    "/getWeeks",
    response_model=ApiResponse[WeekListData],
    responses={500: ERRORS[500]},
    summary="List all weeks, newest first",
)
async def get_all_weeks(db: AsyncIOMotorDatabase = Depends(get_database)):
    return await week_service.list_weeks(db)


@router.get(
    "/getWeeksByChallengesId/{challenge_id}",
    response_model=ApiResponse[WeekListData],
    responses={400: ERRORS[400], 500: ERRORS[500]},
    summary="List the weeks of one challenge, with the challenge name",
)
async def get_weeks_by_challenges_id(
    challenge_id: str, db: AsyncIOMotorDatabase = Depends(get_database)
):
    return await week_service.list_weeks_by_challenge(db, challenge_id)


@router.post(
    "/updateWeek/{week_id}",
    response_model=ApiResponse[WeekResponse],
    responses=ERRORS,
    summary="Rename a week",
)
async def update_week(
    week_id: str,
    body: WeekUpdateRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await week_service.update_week(db, week_id, body.week_name)


@router.delete(
    "/deleteWeek/{week_id}",
    response_model=ApiResponse[WeekDeleteData],
    responses=ERRORS,
    summary="Delete a week",
)
async def delete_week(week_id: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    return await week_service.delete_week(db, week_id)
