from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .analyze import Analysis
from .ask import EXAMPLE_QUESTIONS
from .config import Settings
from .models import ChatMessage, Role

logger = logging.getLogger(__name__)


def greeting(source_name: str) -> str:
    examples = "\n".join(f'- "{q}"' for q in EXAMPLE_QUESTIONS[:5])
    return (
        f'Hi! I\'m your data analysis assistant. I can help you analyze "{source_name}". '
        "You can ask me questions like:\n\n"
        f"{examples}\n\n"
        "What would you like to know about your data?"
    )


class ChatSession:
    """
    Append-only chat log over one Analysis.

    The answer itself comes from the pure router; this class only records
    messages and applies the optional simulated latency before the assistant
    reply is appended. Loading a new file means starting a new session.
    """

    def __init__(
        self,
        analysis: Analysis,
        *,
        settings: Optional[Settings] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.analysis = analysis
        self.settings = settings or Settings()
        self._sleep = sleep
        self._messages: list[ChatMessage] = [
            ChatMessage(role=Role.ASSISTANT, content=greeting(analysis.source_name))
        ]

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return tuple(self._messages)

    def ask(self, question: str) -> ChatMessage:
        """Record the question and the answer; return the answer message."""

        text = question.strip()
        if not text:
            raise ValueError("Question must not be empty.")

        self._messages.append(ChatMessage(role=Role.USER, content=text))

        delay_ms = self.settings.simulated_latency_ms
        if delay_ms > 0:
            self._sleep(delay_ms / 1000.0)

        reply = ChatMessage(role=Role.ASSISTANT, content=self.analysis.answer(text))
        self._messages.append(reply)
        logger.debug("Chat session now holds %d messages", len(self._messages))
        return reply
