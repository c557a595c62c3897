"""Message types for coach conversations."""

import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class MessageRole(StrEnum):
    """Message role in conversation."""

    USER = "user"
    ASSISTANT = "assistant"


def _new_message_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Message:
    """A message in the conversation. Immutable once created."""

    role: MessageRole
    content: str
    id: str = field(default_factory=_new_message_id)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=MessageRole.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role=MessageRole.ASSISTANT, content=content)

    def to_turn(self) -> dict[str, str]:
        """Role/content pair sent to the generation endpoint. Ids stay local."""
        return {"role": self.role.value, "content": self.content}


@dataclass
class Conversation:
    """An ordered conversation log."""

    messages: list[Message] = field(default_factory=list)

    def add(self, message: Message) -> None:
        """Add a message to the conversation."""
        self.messages.append(message)

    def add_user(self, content: str) -> Message:
        """Add a user message."""
        message = Message.user(content)
        self.add(message)
        return message

    def add_assistant(self, content: str) -> Message:
        """Add an assistant message."""
        message = Message.assistant(content)
        self.add(message)
        return message

    def to_turns(self) -> list[dict[str, str]]:
        """Serialize the whole log as role/content pairs."""
        return [message.to_turn() for message in self.messages]

    def clear(self) -> None:
        """Clear all messages."""
        self.messages.clear()

    def __len__(self) -> int:
        return len(self.messages)


def apply_context_window(
    turns: Sequence[dict[str, Any]], max_turns: int
) -> list[dict[str, Any]]:
    """Keep the most recent ``max_turns`` turns, starting on a user turn.

    A window of 0 keeps the whole history. Leading assistant turns left
    over after the cut are dropped so the model never sees a reply without
    its question.
    """
    window = list(turns)
    if max_turns and len(window) > max_turns:
        window = window[-max_turns:]
        while window and window[0]["role"] != MessageRole.USER:
            window.pop(0)
    return window
