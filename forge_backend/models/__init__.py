"""Models module - Pydantic data models"""

from .chat import ChatLogResponse, ChatMessage, MessageKind, MessageMetadata, Sender
from .events import (
    EventType,
    GenerationEvent,
    GenerationStage,
    LiveCodingState,
    complexity_for,
)
from .files import CreateFileRequest, CreateFileResponse, FileListResponse, ListedFile
from .generation import (
    AppPlan,
    CancelRequest,
    FileEntry,
    GenerateRequest,
    GenerateResponse,
    RequestType,
)

__all__ = [
    # Chat models
    "ChatLogResponse",
    "ChatMessage",
    "MessageKind",
    "MessageMetadata",
    "Sender",
    # Orchestrator models
    "EventType",
    "GenerationEvent",
    "GenerationStage",
    "LiveCodingState",
    "complexity_for",
    # File models
    "CreateFileRequest",
    "CreateFileResponse",
    "FileListResponse",
    "ListedFile",
    # Generation models
    "AppPlan",
    "CancelRequest",
    "FileEntry",
    "GenerateRequest",
    "GenerateResponse",
    "RequestType",
]
