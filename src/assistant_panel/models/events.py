"""
Session event names pushed to presentation-layer handlers.
"""


class SessionEvent:
    MESSAGE = "session:message"
    STATE = "session:state"
    REPLY_FAILED = "session:reply_failed"
    DISPOSED = "session:disposed"
