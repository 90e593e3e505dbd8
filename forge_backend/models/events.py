"""Generation orchestrator state and event models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .chat import ChatMessage

DEFAULT_PATTERNS = ["AI-Powered Generation", "Production Ready", "Modern Architecture"]


class GenerationStage(str, Enum):
    """Fixed, ordered phases of a simulated generation"""

    ANALYSIS = "analysis"
    ARCHITECTURE = "architecture"
    STRUCTURE = "structure"
    IMPLEMENTATION = "implementation"
    OPTIMIZATION = "optimization"

    @property
    def weight(self) -> int:
        return _STAGE_WEIGHTS[self]

    @property
    def display_name(self) -> str:
        return _STAGE_NAMES[self]

    @property
    def progress(self) -> int:
        """Percent of total weight completed before this stage starts"""
        stages = list(GenerationStage)
        completed = sum(stage.weight for stage in stages[: stages.index(self)])
        total = sum(stage.weight for stage in stages)
        return round(completed / total * 100)


_STAGE_WEIGHTS = {
    GenerationStage.ANALYSIS: 15,
    GenerationStage.ARCHITECTURE: 25,
    GenerationStage.STRUCTURE: 20,
    GenerationStage.IMPLEMENTATION: 30,
    GenerationStage.OPTIMIZATION: 10,
}

_STAGE_NAMES = {
    GenerationStage.ANALYSIS: "Analyzing Requirements",
    GenerationStage.ARCHITECTURE: "Designing Architecture",
    GenerationStage.STRUCTURE: "Creating File Structure",
    GenerationStage.IMPLEMENTATION: "Implementing Features",
    GenerationStage.OPTIMIZATION: "Optimizing Performance",
}


def complexity_for(line_count: int) -> str:
    """Cosmetic complexity label derived from a file's line count"""
    if line_count > 50:
        return "complex"
    if line_count > 25:
        return "medium"
    return "simple"


class LiveCodingState(BaseModel):
    """Snapshot of the file currently being typed"""

    model_config = ConfigDict(populate_by_name=True)

    file_name: str = Field(default="", alias="fileName")
    content: str = ""
    is_active: bool = Field(default=False, alias="isActive")
    language: str = ""
    progress: int = Field(default=0, ge=0, le=100)
    complexity: str = ""
    patterns: list[str] = []


class EventType(str, Enum):
    """Kinds of events emitted during one generation"""

    STARTED = "started"
    STAGE = "stage"
    FALLBACK = "fallback"
    FILE_STARTED = "file_started"
    TYPING = "typing"
    FILE_COMPLETED = "file_completed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ERROR = "error"


class GenerationEvent(BaseModel):
    """Event emitted by the orchestrator"""

    model_config = ConfigDict(populate_by_name=True)

    type: EventType
    stage: GenerationStage | None = None
    progress: int | None = None
    message: str | None = None
    file_name: str | None = Field(default=None, alias="fileName")
    live: LiveCodingState | None = None
    chat_message: ChatMessage | None = Field(default=None, alias="chatMessage")
    files: list[str] = []
