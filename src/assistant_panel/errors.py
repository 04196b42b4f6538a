"""
Assistant panel error types — submission rejections and reply-side failures.
"""

from typing import Any, Optional


class PanelError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class SessionError(PanelError):
    def __init__(self, message: str, code: str = "session_error", details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, details)


class SubmissionError(PanelError):
    """A submission was rejected; the session is unchanged."""

    def __init__(self, message: str, code: str = "submission_rejected", details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, details)


class EmptyInputError(SubmissionError):
    def __init__(self, message: str = "Message is empty"):
        super().__init__(message, code="empty_input")


class ReplyPendingError(SubmissionError):
    def __init__(self, message: str = "Waiting for the assistant to reply", outstanding: int = 1):
        super().__init__(message, code="reply_pending", details={"outstanding": outstanding})


class SessionDisposedError(SubmissionError):
    def __init__(self, session_id: str):
        super().__init__(f"Session {session_id} is closed", code="session_disposed", details={"session_id": session_id})


class ReplyTimeoutError(PanelError):
    def __init__(self, timeout: Optional[float]):
        message = f"No reply within {timeout:g}s" if timeout else "Reply timed out"
        super().__init__("reply_timeout", message, {"timeout": timeout})


class ReplyFailureError(PanelError):
    def __init__(self, message: str):
        super().__init__("reply_failure", message)
