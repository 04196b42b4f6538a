"""
Assistant responders — the opaque async function the session asks for replies.
"""

import asyncio
from collections import deque
from typing import Iterable, Protocol, Sequence

from assistant_panel.config import DEFAULT_CANNED_REPLY, DEFAULT_REPLY_DELAY_S
from assistant_panel.errors import ReplyFailureError
from assistant_panel.models.message import Message


class AssistantResponder(Protocol):
    async def request_reply(self, transcript: Sequence[Message]) -> str:
        ...


class CannedResponder:
    """Stub responder: same reply every time after a fixed delay."""

    def __init__(self, reply: str = DEFAULT_CANNED_REPLY, delay: float = DEFAULT_REPLY_DELAY_S):
        self.reply = reply
        self.delay = delay

    async def request_reply(self, transcript: Sequence[Message]) -> str:
        await asyncio.sleep(self.delay)
        return self.reply


class ScriptedResponder:
    """Returns queued replies in order; fails once the script runs out."""

    def __init__(self, replies: Iterable[str], delay: float = 0.0):
        self._replies: deque[str] = deque(replies)
        self.delay = delay
        self.requests: list[tuple[Message, ...]] = []

    def add(self, reply: str) -> None:
        self._replies.append(reply)

    @property
    def remaining(self) -> int:
        return len(self._replies)

    async def request_reply(self, transcript: Sequence[Message]) -> str:
        self.requests.append(tuple(transcript))
        if self.delay:
            await asyncio.sleep(self.delay)
        if not self._replies:
            raise ReplyFailureError("No scripted reply left")
        return self._replies.popleft()

