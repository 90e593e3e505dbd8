"""Routers module - FastAPI route handlers"""

from . import config, files, generate

__all__ = ["config", "files", "generate"]
