"""Files API routes."""
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Body, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_caller_id, require_caller
from app.models.file_record import FileRecord
from app.schemas.file import FileCreate, FileResponse
from app.services import file_manager

router = APIRouter(prefix="/files", tags=["files"])


@router.post("", response_model=FileResponse, response_model_exclude_none=True, status_code=201)
async def create_file(
    body: Optional[FileCreate] = Body(None),
    caller_id: UUID = Depends(require_caller),
    db: AsyncSession = Depends(get_db),
):
    """Create a folder, or a file/image from base64 `data`."""
    body = body or FileCreate()
    record = await file_manager.create_file(
        db,
        caller_id,
        name=body.name,
        type=body.type,
        parent_id=body.parent_id,
        is_public=body.is_public,
        data=body.data,
    )
    return _to_response(record)


@router.get("/me", response_model=list[FileResponse], response_model_exclude_none=True)
async def list_my_files(
    page: Optional[str] = Query(None),
    caller_id: UUID = Depends(require_caller),
    db: AsyncSession = Depends(get_db),
):
    """List all of the caller's files, 20 per page."""
    records = await file_manager.list_my_files(db, caller_id, page=page)
    return [_to_response(r) for r in records]


@router.get("", response_model=list[FileResponse], response_model_exclude_none=True)
async def list_files(
    parent_id: Optional[str] = Query(None, alias="parentId"),
    page: Optional[str] = Query(None),
    caller_id: UUID = Depends(require_caller),
    db: AsyncSession = Depends(get_db),
):
    """List the caller's files under a folder (root by default), 20 per page."""
    records = await file_manager.list_files(db, caller_id, parent_id=parent_id, page=page)
    return [_to_response(r) for r in records]


@router.get("/{file_id}", response_model=FileResponse, response_model_exclude_none=True)
async def get_file(
    file_id: str,
    caller_id: UUID = Depends(require_caller),
    db: AsyncSession = Depends(get_db),
):
    """Get file metadata by ID."""
    record = await file_manager.get_file(db, caller_id, file_id)
    return _to_response(record)


@router.put("/{file_id}/publish", response_model=FileResponse, response_model_exclude_none=True)
async def publish_file(
    file_id: str,
    caller_id: UUID = Depends(require_caller),
    db: AsyncSession = Depends(get_db),
):
    """Make a file readable by anyone through /data."""
    record = await file_manager.set_visibility(db, caller_id, file_id, True)
    return _to_response(record)


@router.put("/{file_id}/unpublish", response_model=FileResponse, response_model_exclude_none=True)
async def unpublish_file(
    file_id: str,
    caller_id: UUID = Depends(require_caller),
    db: AsyncSession = Depends(get_db),
):
    """Restrict a file to its owner."""
    record = await file_manager.set_visibility(db, caller_id, file_id, False)
    return _to_response(record)


@router.delete("/{file_id}", status_code=204)
async def delete_file(
    file_id: str,
    caller_id: UUID = Depends(require_caller),
    db: AsyncSession = Depends(get_db),
):
    """Delete a file, or a folder with everything inside it."""
    await file_manager.delete_file(db, caller_id, file_id)
    return Response(status_code=204)


@router.get("/{file_id}/data")
async def get_file_data(
    file_id: str,
    caller_id: Optional[UUID] = Depends(get_caller_id),
    db: AsyncSession = Depends(get_db),
):
    """Download raw file content. Public files need no token."""
    content, content_type = await file_manager.get_file_data(db, caller_id, file_id)
    return Response(content=content, media_type=content_type)


def _to_response(record: FileRecord) -> dict:
    """Convert SQLAlchemy model to response dict."""
    return {
        "id": str(record.id),
        "user_id": str(record.user_id),
        "name": record.name,
        "type": record.type,
        "is_public": record.is_public,
        "parent_id": str(record.parent_id) if record.parent_id else file_manager.ROOT_PARENT_ID,
        "local_path": record.local_path,
    }
