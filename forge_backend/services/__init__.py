"""Services module - Business logic layer"""

from .api_client import HttpGenerationBackend, InProcessBackend
from .chat_session import ChatSession
from .classifier import classify, is_code_generation_request
from .config_manager import ConfigManager
from .context import AppContext, SessionState
from .generator import GenerationService
from .materializer import materialize, scan, write_file
from .orchestrator import CancelToken, GenerationOrchestrator, PacingConfig

__all__ = [
    "HttpGenerationBackend",
    "InProcessBackend",
    "ChatSession",
    "classify",
    "is_code_generation_request",
    "ConfigManager",
    "AppContext",
    "SessionState",
    "GenerationService",
    "materialize",
    "scan",
    "write_file",
    "CancelToken",
    "GenerationOrchestrator",
    "PacingConfig",
]
