"""
Yoga Workout Backend — Stored Image Route
===========================================

What:  GET /uploads/{key} serves images saved by LocalFileStore.
How:   The key is resolved through the same guard used on delete, so a path
       that escapes the storage root is rejected before the filesystem is touched.
"""

from fastapi import APIRouter
from fastapi.responses import FileResponse

from yogaworkout.config import settings
from yogaworkout.exceptions import NotFoundError, ValidationError
from yogaworkout.services.file_service import file_service

router = APIRouter(tags=["Files"])


@router.get(
    settings.files_url_prefix + "/{key:path}",
    summary="Serve an uploaded image",
    responses={
        200: {"description": "Image file"},
        400: {"description": "Path outside the storage root"},
        404: {"description": "File not found"},
    },
)
async def serve_file(key: str) -> FileResponse:
    path = file_service.resolve(key)
    if path is None:
        raise ValidationError(message="Invalid file path")
    if not path.is_file():
        raise NotFoundError(resource="File", resource_id=key)

    return FileResponse(
        path=str(path),
        headers={"Cache-Control": "public, max-age=86400"},
    )
