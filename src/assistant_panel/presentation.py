"""
Presentation helpers — pure derivations from a Message's timestamp, sender and kind.
"""

from datetime import datetime, tzinfo
from typing import Optional

from assistant_panel.models.message import Message

SENDER_LABELS = {"user": "You", "assistant": "Assistant"}
AVATAR_INITIALS = {"user": "ME", "assistant": "AI"}
SUGGESTION_BADGE = "Success"


def format_time(timestamp: datetime, tz: Optional[tzinfo] = None) -> str:
    """Two-digit hour and minute in the given zone (local time by default)."""
    return timestamp.astimezone(tz).strftime("%H:%M")


def sender_label(message: Message) -> str:
    return SENDER_LABELS[message.sender]


def avatar_initials(message: Message) -> str:
    return AVATAR_INITIALS[message.sender]


def is_suggestion(message: Message) -> bool:
    return message.kind == "suggestion"


def caption(message: Message, tz: Optional[tzinfo] = None) -> str:
    """Footer line shown under a message bubble, e.g. "Assistant · 14:05"."""
    return f"{sender_label(message)} · {format_time(message.timestamp, tz)}"
