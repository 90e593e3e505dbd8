"""
Generation Service - classify a prompt and materialize any resulting bundle
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..models.generation import FileEntry, GenerateResponse, RequestType
from .classifier import classify
from .context import AppContext
from .errors import ValidationError
from .materializer import materialize, write_file

logger = logging.getLogger(__name__)


class GenerationService:
    """Server side of ``POST /generate``"""

    def __init__(self, context: AppContext):
        self.context = context

    @property
    def output_dir(self) -> Path:
        return self.context.output_dir

    def generate(
        self,
        prompt: str | None,
        request_type: RequestType | str = RequestType.CHAT,
        session_id: str | None = None,
    ) -> GenerateResponse:
        """Answer a prompt; build requests that match a template are written to disk"""
        if not prompt or not prompt.strip():
            raise ValidationError("Prompt is required")

        session_id, state = self.context.session(session_id)
        result = classify(prompt, request_type)
        logger.info(
            "Processing %s request (intent: %s)",
            RequestType(request_type).value,
            result.intent.keyword if result.intent else "none",
        )

        if result.bundle:
            # Raises MaterializationError; earlier writes are kept
            materialize(result.bundle, self.output_dir)
            state.last_bundle = result.bundle

        files = state.last_bundle or {}
        logger.info("AI response ready, length: %d", len(result.response))
        return GenerateResponse(
            response=result.response,
            success=True,
            files={name: FileEntry(**entry) for name, entry in files.items()},
            show_build_button=result.show_build_button,
            app_plan=result.plan,
            project_saved=bool(files),
            session_id=session_id,
        )

    def save_file(self, file_name: str, content: str) -> Path:
        return write_file(self.output_dir, file_name, content)
