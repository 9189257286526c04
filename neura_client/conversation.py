"""In-memory conversation log."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class MessageType(str, Enum):
    QUESTION = "question"
    ANSWER = "answer"


@dataclass(frozen=True)
class Message:
    """One question or answer in the conversation."""

    id: int
    type: MessageType
    content: str


class Conversation:
    """Append-only ordered list of messages for one chat session.

    Insertion order is display order. ``reset`` is the only way messages
    leave the log.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._ids = itertools.count(1)

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def add_question(self, content: str) -> Message:
        return self._append(MessageType.QUESTION, content)

    def add_answer(self, content: str) -> Message:
        return self._append(MessageType.ANSWER, content)

    def last_answer(self) -> Message | None:
        for message in reversed(self._messages):
            if message.type is MessageType.ANSWER:
                return message
        return None

    def reset(self) -> None:
        self._messages.clear()

    def _append(self, type_: MessageType, content: str) -> Message:
        message = Message(id=next(self._ids), type=type_, content=content)
        self._messages.append(message)
        return message

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)
