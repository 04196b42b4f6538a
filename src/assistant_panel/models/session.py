"""
Session models — turn-taking state and read-only snapshots.
"""

from pydantic import BaseModel

from assistant_panel.models.message import Message


class SessionState:
    IDLE = "idle"
    AWAITING_REPLY = "awaiting_reply"


class SessionSnapshot(BaseModel):
    session_id: str
    state: str = SessionState.IDLE
    outstanding_replies: int = 0
    messages: list[Message] = []
