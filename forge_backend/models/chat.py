"""Chat session data models"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Sender(str, Enum):
    """Who wrote a chat message"""

    USER = "user"
    AI = "ai"


class MessageKind(str, Enum):
    """How a chat message should be rendered"""

    SYSTEM = "system"
    CODE = "code"
    NORMAL = "normal"
    RESPONSE = "response"


class MessageMetadata(BaseModel):
    """Extra details attached to an AI message"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    files_generated: tuple[str, ...] = Field(default=(), alias="filesGenerated")
    technologies: tuple[str, ...] = ()
    estimated_lines: int = Field(default=0, ge=0, alias="estimatedLines")


class ChatMessage(BaseModel):
    """A single entry in the append-only chat log"""

    model_config = ConfigDict(frozen=True)

    id: str
    sender: Sender
    content: str
    timestamp: datetime
    kind: MessageKind = MessageKind.NORMAL
    metadata: MessageMetadata | None = None


class ChatLogResponse(BaseModel):
    """Full chat history for one session"""

    session_id: str = Field(serialization_alias="sessionId")
    messages: list[ChatMessage]
