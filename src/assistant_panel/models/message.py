"""
Message models — one entry of a conversation transcript.
"""

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field

Sender = Literal["user", "assistant"]
MessageKind = Literal["plain", "code", "suggestion"]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Message(BaseModel):
    """Immutable transcript entry. `kind` only affects rendering."""
    id: str
    content: str
    sender: Sender
    timestamp: datetime = Field(default_factory=utc_now)
    kind: MessageKind = "plain"

    model_config = {"frozen": True}
