"""Append-only chat log"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from ..models.chat import ChatMessage, MessageKind, MessageMetadata, Sender

GREETING = (
    "Hey! 👋 What do you want to make today?\n\n"
    "I can help you build websites, apps, games, calculators, todo lists, and more! "
    "Just tell me your idea and I'll create the code for you.\n\n"
    "Everything works locally - no external APIs needed! What would you like to build?"
)


class ChatSession:
    """Ordered, append-only list of chat messages

    Messages are frozen models, so nothing handed out by ``messages`` can be
    changed after it is appended.
    """

    def __init__(self, greeting: str | None = GREETING):
        self._messages: list[ChatMessage] = []
        if greeting:
            self._append(Sender.AI, greeting, MessageKind.SYSTEM, None)

    def _append(
        self,
        sender: Sender,
        content: str,
        kind: MessageKind,
        metadata: MessageMetadata | None,
    ) -> ChatMessage:
        message = ChatMessage(
            id=uuid.uuid4().hex,
            sender=sender,
            content=content,
            timestamp=datetime.now(timezone.utc),
            kind=kind,
            metadata=metadata,
        )
        self._messages.append(message)
        return message

    def append_user_message(self, text: str) -> ChatMessage:
        return self._append(Sender.USER, text, MessageKind.NORMAL, None)

    def append_ai_message(
        self,
        text: str,
        kind: MessageKind = MessageKind.NORMAL,
        metadata: MessageMetadata | None = None,
    ) -> ChatMessage:
        return self._append(Sender.AI, text, MessageKind(kind), metadata)

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)
