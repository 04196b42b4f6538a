"""
assistant-panel — conversation session core for a side-panel chat assistant.

Keeps the transcript and turn-taking state of one conversation and asks an
assistant responder for replies.
"""

from assistant_panel.session import ConversationSession, PanelEvent
from assistant_panel.config import SessionSettings
from assistant_panel.responder import AssistantResponder, CannedResponder, ScriptedResponder
from assistant_panel.errors import (
    PanelError,
    SessionError,
    SubmissionError,
    EmptyInputError,
    ReplyPendingError,
    SessionDisposedError,
    ReplyTimeoutError,
    ReplyFailureError,
)
from assistant_panel.models.message import Message
from assistant_panel.models.session import SessionSnapshot, SessionState
from assistant_panel.models.events import SessionEvent

__version__ = "0.1.0"
__all__ = [
    "ConversationSession",
    "PanelEvent",
    "SessionSettings",
    "AssistantResponder",
    "CannedResponder",
    "ScriptedResponder",
    "PanelError",
    "SessionError",
    "SubmissionError",
    "EmptyInputError",
    "ReplyPendingError",
    "SessionDisposedError",
    "ReplyTimeoutError",
    "ReplyFailureError",
    "Message",
    "SessionSnapshot",
    "SessionState",
    "SessionEvent",
]
