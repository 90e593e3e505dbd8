"""Per-application and per-session state passed to request handlers"""

from __future__ import annotations

import threading
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from pathlib import Path

from .chat_session import ChatSession
from .orchestrator import CancelToken

DEFAULT_MAX_SESSIONS = 100


@dataclass
class SessionState:
    """Everything one chat session remembers between requests"""

    chat: ChatSession = field(default_factory=ChatSession)
    last_bundle: dict[str, dict[str, str]] | None = None
    # Set while a stream runs, cleared only when that stream ends;
    # a cancelled generation is still running until its next checkpoint
    active_token: CancelToken | None = None

    @property
    def is_generating(self) -> bool:
        return self.active_token is not None


class AppContext:
    """Application-wide settings plus session states keyed by session id

    At most ``max_sessions`` sessions are kept; the least recently used idle
    session is dropped first. Sessions with a running generation are never
    dropped.
    """

    def __init__(self, output_dir: Path, config: dict | None = None, max_sessions: int | None = None):
        self.output_dir = Path(output_dir)
        self.config = config or {}
        if max_sessions is None:
            max_sessions = int(self.config.get("max_sessions", DEFAULT_MAX_SESSIONS))
        self.max_sessions = max(1, max_sessions)
        self._sessions: OrderedDict[str, SessionState] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def session(self, session_id: str | None = None) -> tuple[str, SessionState]:
        """Look up a session, creating it (and an id if needed) on first use"""
        session_id = session_id or uuid.uuid4().hex
        with self._lock:
            state = self._sessions.get(session_id)
            if state is None:
                state = self._sessions[session_id] = SessionState()
                self._evict(keep=session_id)
            self._sessions.move_to_end(session_id)
        return session_id, state

    def find_session(self, session_id: str) -> SessionState | None:
        with self._lock:
            state = self._sessions.get(session_id)
            if state is not None:
                self._sessions.move_to_end(session_id)
            return state

    def _evict(self, keep: str):
        overflow = len(self._sessions) - self.max_sessions
        if overflow <= 0:
            return
        idle = [sid for sid, state in self._sessions.items() if sid != keep and not state.is_generating]
        for sid in idle[:overflow]:
            del self._sessions[sid]
