"""File endpoint models"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CreateFileRequest(BaseModel):
    """Request to write a single generated file"""

    model_config = ConfigDict(populate_by_name=True)

    file_name: str | None = Field(default=None, alias="fileName")
    content: str | None = None
    language: str | None = None


class CreateFileResponse(BaseModel):
    """Result of a single file write"""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    file_name: str = Field(alias="fileName")
    path: str


class ListedFile(BaseModel):
    """A file found in the output directory"""

    content: str
    type: str


class FileListResponse(BaseModel):
    """All generated files keyed by relative path"""

    files: dict[str, ListedFile] = {}
