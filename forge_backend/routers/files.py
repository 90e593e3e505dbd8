"""Generated file API endpoints"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from ..models.files import CreateFileRequest, CreateFileResponse, FileListResponse
from ..services.context import AppContext
from ..services.errors import ValidationError
from ..services.materializer import resolve_target, scan, write_file
from .deps import get_context

router = APIRouter()
preview_router = APIRouter()


@router.post("", response_model=CreateFileResponse)
async def create_file(request: CreateFileRequest, context: AppContext = Depends(get_context)) -> CreateFileResponse:
    """Write a single file into the output directory"""
    if not request.file_name or request.content is None:
        raise ValidationError("fileName and content are required")

    path = write_file(context.output_dir, request.file_name, request.content)
    return CreateFileResponse(success=True, file_name=request.file_name, path=str(path))


@router.get("", response_model=FileListResponse)
async def list_files(context: AppContext = Depends(get_context)) -> FileListResponse:
    """Every visible file in the output directory"""
    return FileListResponse(files=scan(context.output_dir))


@preview_router.get("/{file_name:path}")
async def preview_file(file_name: str, context: AppContext = Depends(get_context)) -> FileResponse:
    """Serve a generated file as-is; the media type follows its extension"""
    path = resolve_target(context.output_dir, file_name)
    if not path.is_file():
        raise HTTPException(status_code=404, detail="File not found")
    return FileResponse(path)
