"""
Generation Orchestrator - replays a generation response as a staged,
cancellable live-typing sequence

The orchestrator only produces ``GenerationEvent`` objects; rendering them
(SSE, terminal, tests) is up to whoever iterates ``run()``.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Awaitable, Callable

from ..models.chat import MessageKind
from ..models.events import (
    DEFAULT_PATTERNS,
    EventType,
    GenerationEvent,
    GenerationStage,
    LiveCodingState,
    complexity_for,
)
from ..models.generation import GenerateResponse, RequestType
from .chat_session import ChatSession
from .classifier import is_code_generation_request
from .code_blocks import FileNamer, build_metadata, extract_code_blocks, strip_code_blocks
from .errors import UpstreamError
from .local_generator import generate_local_code

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]
FileHook = Callable[[str, str, str], Awaitable[Any]]

# Stages paced before the backend call, with their nominal delay in seconds
PRE_FETCH_DELAYS = {
    GenerationStage.ANALYSIS: 0.5,
    GenerationStage.ARCHITECTURE: 1.0,
    GenerationStage.STRUCTURE: 0.75,
}
OPTIMIZATION_DELAY = 0.5
THINKING_EVERY = 8
THINKING_FACTOR = 3


class CancelToken:
    """One-shot cooperative cancellation flag"""

    def __init__(self):
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self):
        self._cancelled = True


@dataclass
class PacingConfig:
    """UI pacing knobs; ``speed`` <= 0 disables every delay"""

    speed: float = 1.0
    fine_grained_cancel: bool = False
    timeout_seconds: float = 30.0

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "PacingConfig":
        pacing = config.get("pacing", {})
        return cls(
            speed=float(pacing.get("speed", 1.0)),
            fine_grained_cancel=bool(pacing.get("fine_grained_cancel", False)),
            timeout_seconds=float(config.get("client", {}).get("timeout_seconds", 30)),
        )


def line_delay(line_count: int) -> float:
    """Seconds between typed lines: bigger files type faster, bounded to 50-150ms"""
    return max(0.05, min(0.15, 2.0 / max(line_count, 1)))


def typing_progress(lines_emitted: int, total_lines: int) -> int:
    """Integer percent that only reaches 100 on the final line"""
    return lines_emitted * 100 // total_lines


@dataclass
class GeneratedFile:
    name: str
    language: str
    content: str
    from_code_block: bool = False
    lines: list[str] = field(init=False)

    def __post_init__(self):
        self.lines = self.content.split("\n")


class GenerationOrchestrator:
    """Drive one chat session's generations through stages and typing"""

    def __init__(
        self,
        backend,
        chat: ChatSession,
        pacing: PacingConfig | None = None,
        sleep: Sleep = asyncio.sleep,
        on_file_generated: FileHook | None = None,
        rng: random.Random | None = None,
    ):
        self.backend = backend
        self.chat = chat
        self.pacing = pacing or PacingConfig()
        self._sleep = sleep
        self.on_file_generated = on_file_generated
        self.rng = rng or random.Random()
        self.live = LiveCodingState()

    async def _pause(self, seconds: float):
        if self.pacing.speed > 0 and seconds > 0:
            await self._sleep(seconds / self.pacing.speed)

    def submit(self, prompt: str, token: CancelToken) -> AsyncIterator[GenerationEvent]:
        """Record the user's message and return the event stream for it"""
        self.chat.append_user_message(prompt)
        return self.run(prompt, token)

    def _cancelled(self) -> GenerationEvent:
        logger.info("Generation cancelled")
        self.live = LiveCodingState()
        return GenerationEvent(type=EventType.CANCELLED, message="⏹️ Generation cancelled")

    async def _fetch(self, prompt: str, request_type: RequestType) -> GenerateResponse:
        return await asyncio.wait_for(
            self.backend.generate(prompt, request_type),
            timeout=self.pacing.timeout_seconds,
        )

    def _collect_files(self, response_text: str, files: dict | None) -> list[GeneratedFile]:
        collected = [GeneratedFile(name, entry.language, entry.content) for name, entry in (files or {}).items()]
        namer = FileNamer(taken={f.name for f in collected})
        for language, code in extract_code_blocks(response_text):
            collected.append(GeneratedFile(namer.name_for(code, language), language, code, from_code_block=True))
        return collected

    async def run(self, prompt: str, token: CancelToken) -> AsyncIterator[GenerationEvent]:
        """Async generator of events for one generation attempt"""
        yield GenerationEvent(type=EventType.STARTED, progress=0, message=prompt)
        self.live = LiveCodingState(file_name="Loading...", is_active=True)

        for stage, delay in PRE_FETCH_DELAYS.items():
            if token.cancelled:
                yield self._cancelled()
                return
            yield GenerationEvent(
                type=EventType.STAGE, stage=stage, progress=stage.progress, message=stage.display_name
            )
            await self._pause(delay)

        if token.cancelled:
            yield self._cancelled()
            return

        build = is_code_generation_request(prompt)
        request_type = RequestType.BUILD if build else RequestType.CHAT
        try:
            response = await self._fetch(prompt, request_type)
            response_text = response.response
            files = self._collect_files(response_text, response.files if build else None)
        except (UpstreamError, asyncio.TimeoutError) as e:
            logger.error("Error generating files: %s", e)
            yield GenerationEvent(
                type=EventType.FALLBACK,
                message="Generation service unavailable, using a locally generated app instead",
            )
            response_text = generate_local_code(prompt, self.rng)
            files = self._collect_files(response_text, None)

        if token.cancelled:
            yield self._cancelled()
            return
        stage = GenerationStage.IMPLEMENTATION
        yield GenerationEvent(type=EventType.STAGE, stage=stage, progress=stage.progress, message=stage.display_name)

        typed: list[GeneratedFile] = []
        for generated in files:
            if token.cancelled:
                yield self._cancelled()
                return
            async for event in self._type_file(generated, token):
                yield event
            if event.type == EventType.CANCELLED:
                return
            typed.append(generated)

        if token.cancelled:
            yield self._cancelled()
            return
        stage = GenerationStage.OPTIMIZATION
        yield GenerationEvent(type=EventType.STAGE, stage=stage, progress=stage.progress, message=stage.display_name)
        await self._pause(OPTIMIZATION_DELAY)

        if token.cancelled:
            yield self._cancelled()
            return

        message = self._append_result(response_text, typed)
        self.live = LiveCodingState()
        yield GenerationEvent(
            type=EventType.COMPLETED,
            progress=100,
            message="✅ Project ready!" if typed else "✅ Done",
            chat_message=message,
            files=[f.name for f in typed],
        )

    async def _type_file(self, generated: GeneratedFile, token: CancelToken) -> AsyncIterator[GenerationEvent]:
        total = len(generated.lines)
        self.live = LiveCodingState(
            file_name=generated.name,
            language=generated.language,
            complexity=complexity_for(total),
            patterns=list(DEFAULT_PATTERNS),
            is_active=True,
        )
        yield GenerationEvent(
            type=EventType.FILE_STARTED,
            file_name=generated.name,
            message=f"📄 Creating {generated.name}...",
            live=self.live.model_copy(),
        )
        if self.on_file_generated:
            await self.on_file_generated(generated.name, generated.content, generated.language)

        delay = line_delay(total)
        content = ""
        for i, line in enumerate(generated.lines):
            if self.pacing.fine_grained_cancel and token.cancelled:
                yield self._cancelled()
                return
            content += line if i == total - 1 else line + "\n"
            self.live = self.live.model_copy(update={"content": content, "progress": typing_progress(i + 1, total)})
            yield GenerationEvent(
                type=EventType.TYPING,
                file_name=generated.name,
                progress=self.live.progress,
                live=self.live,
            )
            await self._pause(delay * THINKING_FACTOR if i % THINKING_EVERY == 0 else delay)

        if generated.from_code_block:
            try:
                await self.backend.save_file(generated.name, generated.content, generated.language)
            except UpstreamError as e:
                logger.error("Failed to create file %s: %s", generated.name, e)

        self.live = self.live.model_copy(update={"content": generated.content, "progress": 100, "is_active": False})
        logger.info("Created file: %s", generated.name)
        yield GenerationEvent(
            type=EventType.FILE_COMPLETED,
            file_name=generated.name,
            progress=100,
            message=f"✅ {generated.name} created successfully",
            live=self.live,
        )

    def _append_result(self, response_text: str, typed: list[GeneratedFile]):
        if not typed:
            return self.chat.append_ai_message(response_text, MessageKind.NORMAL)

        summary = f"✅ I've created your project with {len(typed)} files. Check the file explorer to see what I built!"
        listing = "\n".join(f"📄 {f.name}" for f in typed)
        text = strip_code_blocks(response_text)
        content = f"{text}\n\n{summary}\n\n{listing}" if text else f"{summary}\n\n{listing}"
        metadata = build_metadata([(f.name, f.language, f.content) for f in typed])
        return self.chat.append_ai_message(content, MessageKind.CODE, metadata)
