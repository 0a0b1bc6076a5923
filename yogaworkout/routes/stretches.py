"""
Yoga Workout Backend — Stretch Route Handlers
===============================================

What:  Stretch listing, create/update (multipart, optional image), delete
       and status change.
How:   Reads form/JSON input, delegates to StretchService, returns its envelope.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from motor.motor_asyncio import AsyncIOMotorDatabase

from yogaworkout.database import get_database
from yogaworkout.schemas.common import ApiResponse, ErrorResponse
from yogaworkout.schemas.stretch import (
    StretchDeleteData,
    StretchListData,
    StretchResponse,
    StretchStatusRequest,
)
from yogaworkout.services.stretch_service import UploadedImage, stretch_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Stretches"])

ERRORS = {
    400: {"description": "Missing field or invalid ID", "model": ErrorResponse},
    404: {"description": "Stretch not found", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


async def _read_image(image: Optional[UploadFile]) -> Optional[UploadedImage]:
    """
    Read an optional file part. Forms submitted without choosing a file
    still send an empty part with no filename; that counts as no image.
    """
    if image is None or not image.filename:
        return None
    try:
        content = await image.read()
    finally:
        await image.close()
    logger.info("Received image upload: filename=%s, size=%d bytes", image.filename, len(content))
    return UploadedImage(filename=image.filename, content=content, content_length=image.size)


@router.get(
    "/stretches",
    response_model=ApiResponse[StretchListData],
    responses={500: ERRORS[500]},
    summary="List all stretches, newest first",
)
async def get_all_stretches(db: AsyncIOMotorDatabase = Depends(get_database)):
    return await stretch_service.list_stretches(db)


@router.post(
    "/addstretches",
    status_code=201,
    response_model=ApiResponse[StretchResponse],
    responses={400: ERRORS[400], 500: ERRORS[500]},
    summary="Create a stretch",
)
async def add_stretches(
    stretchesName: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    isActive: Optional[bool] = Form(default=None),
    image: Optional[UploadFile] = File(default=None),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await stretch_service.add_stretch(
        db,
        name=stretchesName,
        description=description,
        is_active=isActive,
        image=await _read_image(image),
    )


@router.post(
    "/updatestretches/{stretch_id}",
    response_model=ApiResponse[StretchResponse],
    responses=ERRORS,
    summary="Update a stretch's name, description, active flag and optionally its image",
)
async def update_stretches(
    stretch_id: str,
    stretchesName: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    isActive: Optional[bool] = Form(default=None),
    image: Optional[UploadFile] = File(default=None),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await stretch_service.update_stretch(
        db,
        stretch_id,
        name=stretchesName,
        description=description,
        is_active=isActive,
        image=await _read_image(image),
    )


@router.delete(
    "/stretches/{stretch_id}",
    response_model=ApiResponse[StretchDeleteData],
    responses=ERRORS,
    summary="Delete a stretch and its image",
)
async def delete_stretches(stretch_id: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    return await stretch_service.delete_stretch(db, stretch_id)


@router.post(
    "/changeStretchesStatus",
    response_model=ApiResponse[StretchResponse],
    responses=ERRORS,
    summary="Activate or deactivate a stretch",
)
async def change_stretches_status(
    body: StretchStatusRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await stretch_service.change_status(db, body.id, body.status)
