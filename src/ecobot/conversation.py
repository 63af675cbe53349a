"""Append-only transcript of a questionnaire session."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

LOGGER = logging.getLogger(__name__)

GREETING = (
    "Hi! I'm EcoBot. I'll help you calculate your carbon footprint. "
    "Let's start by knowing if you're calculating for yourself or your company?"
)


class Speaker(str, Enum):
    BOT = "bot"
    USER = "user"


@dataclass(frozen=True, slots=True)
class ConversationTurn:
    """One prompt or reply in the transcript."""

    speaker: Speaker
    content: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, str]:
        return {
            "speaker": self.speaker.value,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
        }


class ConversationLog:
    """Ordered turns; the only mutation is :meth:`append`."""

    def __init__(self) -> None:
        self._turns: list[ConversationTurn] = []

    @classmethod
    def with_greeting(cls) -> ConversationLog:
        log = cls()
        log.append(Speaker.BOT, GREETING)
        return log

    def append(self, speaker: Speaker, content: str) -> ConversationTurn:
        turn = ConversationTurn(speaker=speaker, content=content)
        self._turns.append(turn)
        LOGGER.debug(
            "Turn appended",
            extra={"speaker": speaker.value, "turn_index": len(self._turns) - 1},
        )
        return turn

    @property
    def turns(self) -> tuple[ConversationTurn, ...]:
        return tuple(self._turns)

    def since(self, index: int) -> tuple[ConversationTurn, ...]:
        """Return the turns appended at or after ``index``."""

        return tuple(self._turns[index:])

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[ConversationTurn]:
        return iter(tuple(self._turns))

    def __getitem__(self, index: int) -> ConversationTurn:
        return self._turns[index]
