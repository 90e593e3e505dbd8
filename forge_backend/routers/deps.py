"""Shared FastAPI dependencies"""

from __future__ import annotations

from fastapi import Request

from ..services.config_manager import ConfigManager
from ..services.context import AppContext


def build_context() -> AppContext:
    """Create the application context from the current configuration"""
    config_manager = ConfigManager.get_instance()
    return AppContext(config_manager.output_dir(), config_manager.get_config())


def get_context(request: Request) -> AppContext:
    """Application context stored on ``app.state``, created on first use"""
    context = getattr(request.app.state, "context", None)
    if context is None:
        context = request.app.state.context = build_context()
    return context
