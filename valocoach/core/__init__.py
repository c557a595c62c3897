"""Core module - conversation model and generation contract."""

from valocoach.core.generation import ChatTurn, GenerationError, HttpTextGenerator, TextGenerator
from valocoach.core.messages import Conversation, Message, MessageRole, apply_context_window
from valocoach.core.observable import Observable

__all__ = [
    # Messages
    "Message",
    "MessageRole",
    "Conversation",
    "apply_context_window",
    # Generation
    "ChatTurn",
    "GenerationError",
    "HttpTextGenerator",
    "TextGenerator",
    "Observable",
]
