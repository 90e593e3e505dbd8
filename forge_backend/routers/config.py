"""Configuration API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..services.config_manager import ConfigManager
from ..services.context import AppContext
from .deps import get_context

router = APIRouter()


class ConfigUpdateRequest(BaseModel):
    """Request to update configuration"""

    output_dir: str | None = None
    max_sessions: int | None = Field(default=None, ge=1)
    server: dict | None = None
    client: dict | None = None
    pacing: dict | None = None


class ConfigResponse(BaseModel):
    """Configuration response"""

    output_dir: str
    max_sessions: int
    server: dict
    client: dict
    pacing: dict


@router.get("", response_model=ConfigResponse)
async def get_config() -> ConfigResponse:
    """Get current configuration"""
    config = ConfigManager.get_instance().get_config()

    return ConfigResponse(
        output_dir=config.get("output_dir", "ai-generated"),
        max_sessions=config.get("max_sessions", 100),
        server=config.get("server", {}),
        client=config.get("client", {}),
        pacing=config.get("pacing", {}),
    )


@router.put("")
async def update_config(
    update: ConfigUpdateRequest,
    context: AppContext = Depends(get_context),
) -> dict[str, Any]:
    """Update configuration; only provided fields change"""
    changes = update.model_dump(exclude_none=True)
    if not changes:
        raise HTTPException(status_code=400, detail="No configuration fields provided")

    config_manager = ConfigManager.get_instance()
    try:
        config_manager.save_config(changes)
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))

    # Sessions are kept; new requests pick up the new output dir and pacing
    context.config = config_manager.get_config()
    context.output_dir = config_manager.output_dir()
    context.max_sessions = context.config["max_sessions"]

    return {"status": "success", "message": "Configuration updated"}
