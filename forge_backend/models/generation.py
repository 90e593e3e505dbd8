"""Generation request/response models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class RequestType(str, Enum):
    """What the caller wants back from a prompt"""

    CHAT = "chat"
    PLAN = "plan"
    BUILD = "build"


class FileEntry(BaseModel):
    """Content of one generated file"""

    content: str
    language: str = "text"


class AppPlan(BaseModel):
    """Outline of the app a plan request would build"""

    title: str
    description: str
    features: list[str]


class GenerateRequest(BaseModel):
    """Request body for the generation endpoints"""

    model_config = ConfigDict(populate_by_name=True)

    prompt: str | None = None
    request_type: RequestType = Field(default=RequestType.CHAT, alias="requestType")
    session_id: str | None = Field(default=None, alias="sessionId")


class GenerateResponse(BaseModel):
    """Response body for ``POST /generate``"""

    model_config = ConfigDict(populate_by_name=True)

    response: str
    success: bool = True
    files: dict[str, FileEntry] = {}
    show_build_button: bool | None = Field(default=None, alias="showBuildButton")
    app_plan: AppPlan | None = Field(default=None, alias="appPlan")
    project_saved: bool = Field(default=False, alias="projectSaved")
    session_id: str | None = Field(default=None, alias="sessionId")


class CancelRequest(BaseModel):
    """Request body for ``POST /generate/cancel``"""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId")
