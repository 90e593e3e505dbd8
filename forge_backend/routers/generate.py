"""Generation API endpoints"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sse_starlette.sse import EventSourceResponse

from ..models.chat import ChatLogResponse
from ..models.events import EventType, GenerationEvent
from ..models.generation import CancelRequest, GenerateRequest, GenerateResponse
from ..services.api_client import InProcessBackend
from ..services.context import AppContext
from ..services.errors import ValidationError
from ..services.generator import GenerationService
from ..services.orchestrator import CancelToken, GenerationOrchestrator, PacingConfig
from .deps import get_context

logger = logging.getLogger(__name__)

router = APIRouter()
sessions_router = APIRouter()


@router.post("", response_model=GenerateResponse, response_model_exclude_none=True)
async def generate(request: GenerateRequest, context: AppContext = Depends(get_context)) -> GenerateResponse:
    """Classify a prompt and write any matching template bundle"""
    service = GenerationService(context)
    return service.generate(request.prompt, request.request_type, request.session_id)


@router.post("/stream")
async def generate_stream(request: GenerateRequest, context: AppContext = Depends(get_context)):
    """Run the orchestrator in-process and stream its events (SSE)"""
    if not request.prompt or not request.prompt.strip():
        raise ValidationError("Prompt is required")

    session_id, state = context.session(request.session_id)
    if state.is_generating:
        raise HTTPException(status_code=409, detail="A generation is already running for this session")

    token = CancelToken()
    state.active_token = token
    orchestrator = GenerationOrchestrator(
        InProcessBackend(GenerationService(context), session_id),
        state.chat,
        PacingConfig.from_config(context.config),
    )

    async def event_generator():
        try:
            async for event in orchestrator.submit(request.prompt, token):
                yield {"event": "message", "data": event.model_dump_json(by_alias=True, exclude_none=True)}
        except Exception as e:
            logger.exception("Generation stream failed")
            event = GenerationEvent(type=EventType.ERROR, message=str(e))
            yield {"event": "message", "data": event.model_dump_json(by_alias=True, exclude_none=True)}
        finally:
            # A dropped connection stops the generation too
            token.cancel()
            if state.active_token is token:
                state.active_token = None

    return EventSourceResponse(event_generator(), headers={"X-Session-Id": session_id})


@router.post("/cancel")
async def cancel_generation(request: CancelRequest, context: AppContext = Depends(get_context)) -> dict:
    """Cancel the session's running generation at its next checkpoint"""
    state = context.find_session(request.session_id)
    if state is None or not state.is_generating:
        raise HTTPException(status_code=404, detail="No active generation for this session")
    state.active_token.cancel()
    logger.info("Cancellation requested for session %s", request.session_id)
    return {"success": True, "sessionId": request.session_id}


@sessions_router.get("/{session_id}/messages", response_model=ChatLogResponse)
async def get_messages(session_id: str, context: AppContext = Depends(get_context)) -> ChatLogResponse:
    """Full chat log for a session"""
    state = context.find_session(session_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return ChatLogResponse(session_id=session_id, messages=list(state.chat.messages))
