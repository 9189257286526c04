"""Question/answer lifecycle for one chat session."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from .api import AskClientError
from .conversation import Conversation, Message
from .input_collector import InputCollector

logger = logging.getLogger(__name__)

NO_ANSWER = "No answer found."
SOMETHING_WENT_WRONG = "Something went wrong."

Asker = Callable[[str], Awaitable[dict[str, Any]]]


class ChatSession:
    """Owns the conversation and runs one request at a time."""

    def __init__(
        self,
        ask: Asker,
        conversation: Conversation | None = None,
        collector: InputCollector | None = None,
    ) -> None:
        self._ask = ask
        self.conversation = conversation or Conversation()
        self.collector = collector or InputCollector()
        self.loading = False

    async def submit(self, text: str | None = None) -> Message | None:
        """Send a question and record its answer.

        ``text`` defaults to the collector's buffer. Blank questions and
        submissions made while a request is in flight are ignored and return
        None; otherwise the answer message is returned.
        """
        if self.loading:
            logger.debug("Submission ignored: request already in flight")
            return None

        question = self.collector.text if text is None else text
        if not question.strip():
            return None

        self.conversation.add_question(question)
        self.collector.clear()
        self.loading = True
        self.collector.disabled = True
        try:
            content = await self._fetch_answer(question)
        finally:
            self.loading = False
            self.collector.disabled = False

        return self.conversation.add_answer(content)

    async def _fetch_answer(self, question: str) -> str:
        try:
            data = await self._ask(question)
        except AskClientError:
            logger.exception("Ask request failed")
            return SOMETHING_WENT_WRONG
        except Exception:
            logger.exception("Unexpected error while asking")
            return SOMETHING_WENT_WRONG

        answer = data.get("answer")
        if not isinstance(answer, str) or not answer:
            return NO_ANSWER
        return answer

    def new_chat(self) -> None:
        self.conversation.reset()
