"""Terminal chat client for the Neura ask proxy."""

from .conversation import Conversation, Message, MessageType
from .formatting import format_answer
from .session import ChatSession

__all__ = [
    "ChatSession",
    "Conversation",
    "Message",
    "MessageType",
    "format_answer",
]
