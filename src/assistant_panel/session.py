"""
Conversation session — owns the transcript and the turn-taking state.

Reply lifecycle:
- submit() appends the user message and schedules one reply task
- a reply, from the task or from on_reply_received(), settles exactly one
  pending request in submission order
- each reply task carries the session generation; replies from an older
  generation (session disposed) are dropped
- timeouts and responder failures always return the session to idle
"""

import asyncio
import itertools
import logging
import uuid
from collections import deque
from typing import Any, AsyncGenerator, Callable, Iterable, Optional

from assistant_panel.config import SessionSettings
from assistant_panel.errors import (
    EmptyInputError,
    PanelError,
    ReplyFailureError,
    ReplyPendingError,
    ReplyTimeoutError,
    SessionDisposedError,
    SessionError,
)
from assistant_panel.models.events import SessionEvent
from assistant_panel.models.message import Message, Sender, utc_now
from assistant_panel.models.session import SessionSnapshot, SessionState
from assistant_panel.responder import AssistantResponder, CannedResponder

logger = logging.getLogger(__name__)


class PanelEvent:
    __slots__ = ("type", "session_id", "data")

    def __init__(self, type: str, session_id: str, data: Any = None):
        self.type = type
        self.session_id = session_id
        self.data = data

    def __repr__(self) -> str:
        return f"PanelEvent(type={self.type!r}, session_id={self.session_id!r})"


EventHandler = Callable[[PanelEvent], None]


class ConversationSession:
    def __init__(
        self,
        responder: Optional[AssistantResponder] = None,
        settings: Optional[SessionSettings] = None,
        initial_messages: Optional[Iterable[Message]] = None,
        session_id: Optional[str] = None,
    ):
        self.settings = settings or SessionSettings()
        self.id = session_id or str(uuid.uuid4())
        self._responder = responder or CannedResponder(
            reply=self.settings.canned_reply, delay=self.settings.reply_delay,
        )
        self._messages: list[Message] = []
        self._ids: set[str] = set()
        self._seq = itertools.count(1)
        self._state = SessionState.IDLE
        self._generation = 0
        self._disposed = False
        # Reply tasks in submission order; the head is the request the next
        # reply settles.
        self._pending: deque[asyncio.Task[None]] = deque()
        self._reply_lock = asyncio.Lock()
        self._idle = asyncio.Event()
        self._idle.set()
        self._handlers: list[EventHandler] = []
        self.last_error: Optional[PanelError] = None

        for message in initial_messages or ():
            if message.id in self._ids:
                raise SessionError(f"Duplicate message id in history: {message.id}", details={"id": message.id})
            self._messages.append(message)
            self._ids.add(message.id)

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def outstanding_replies(self) -> int:
        return len(self._pending)

    def current_transcript(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def current_state(self) -> str:
        return self._state

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            session_id=self.id,
            state=self._state,
            outstanding_replies=self.outstanding_replies,
            messages=list(self._messages),
        )

    def submit(self, text: str) -> str:
        """Append a user message and request a reply. Returns the new message id.

        Raises a SubmissionError subclass (and changes nothing) when the text is
        blank, a reply is pending under the "reject" policy, or the session is
        closed.
        """
        if self._disposed:
            raise SessionDisposedError(self.id)
        if not text.strip():
            raise EmptyInputError()
        if self._pending and self.settings.overlap_policy == "reject":
            raise ReplyPendingError(outstanding=len(self._pending))
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            raise SessionError("submit() must be called from a running event loop") from None

        message = self._append(text, "user")
        task = loop.create_task(self._request_reply(self._generation))
        self._pending.append(task)
        self._update_state()
        logger.debug("Session %s: submitted %s (%d outstanding)", self.id, message.id, len(self._pending))
        return message.id

    def on_reply_received(self, content: str) -> None:
        """Responder callback: append the assistant reply and settle the oldest pending turn.

        The settled request is cancelled, so its own reply can never be
        counted against a later turn.
        """
        if self._disposed:
            logger.debug("Session %s: discarding reply, session closed", self.id)
            return
        head = self._pending[0] if self._pending else None
        if not isinstance(content, str):
            self._reply_failed(head, ReplyFailureError(f"Reply must be text, got {type(content).__name__}"))
            return
        message = self._append(content, "assistant")
        self._settle(head)
        logger.debug("Session %s: reply %s appended", self.id, message.id)

    async def wait_idle(self, timeout: Optional[float] = None) -> None:
        await asyncio.wait_for(self._idle.wait(), timeout=timeout)

    def add_event_handler(self, handler: EventHandler) -> Callable[[], None]:
        """Add an event handler. Returns a cleanup function."""
        self._handlers.append(handler)

        def remove() -> None:
            try:
                self._handlers.remove(handler)
            except ValueError:
                pass
        return remove

    async def subscribe(self) -> AsyncGenerator[PanelEvent, None]:
        """Yield session events until the session is disposed."""
        if self._disposed:
            return
        queue: asyncio.Queue[Optional[PanelEvent]] = asyncio.Queue()

        def _handler(event: PanelEvent) -> None:
            queue.put_nowait(event)
            if event.type == SessionEvent.DISPOSED:
                queue.put_nowait(None)

        remove = self.add_event_handler(_handler)
        try:
            while True:
                event = await queue.get()
                if event is None:
                    break
                yield event
        finally:
            remove()

    def dispose(self) -> None:
        """Tear the session down. Outstanding replies are cancelled or dropped."""
        if self._disposed:
            return
        self._disposed = True
        self._generation += 1
        while self._pending:
            self._pending.popleft().cancel()
        self._update_state()
        logger.debug("Session %s: disposed", self.id)
        self._emit(SessionEvent.DISPOSED, None)

    async def aclose(self) -> None:
        pending = list(self._pending)
        self.dispose()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    async def __aenter__(self) -> "ConversationSession":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _request_reply(self, generation: int) -> None:
        task = asyncio.current_task()
        # The lock serializes replies for the "queue" policy; each request sees
        # every earlier reply in its transcript.
        async with self._reply_lock:
            if generation != self._generation or task not in self._pending:
                return
            transcript = self.current_transcript()
            try:
                content = await asyncio.wait_for(
                    self._responder.request_reply(transcript),
                    timeout=self.settings.reply_timeout,
                )
                if not isinstance(content, str):
                    raise ReplyFailureError(f"Reply must be text, got {type(content).__name__}")
            except asyncio.TimeoutError:
                self._reply_failed(task, ReplyTimeoutError(self.settings.reply_timeout))
                return
            except PanelError as e:
                self._reply_failed(task, e)
                return
            except Exception as e:
                self._reply_failed(task, ReplyFailureError(f"Responder failed: {e}"))
                return
            self._deliver(generation, task, content)

    def _deliver(self, generation: int, task: Optional[asyncio.Task[None]], content: str) -> None:
        if generation != self._generation or task not in self._pending:
            logger.debug("Session %s: discarding stale reply", self.id)
            return
        try:
            message = self._append(content, "assistant")
        except Exception as e:
            self._reply_failed(task, ReplyFailureError(f"Could not record reply: {e}"))
            return
        self._settle(task)
        logger.debug("Session %s: reply %s appended", self.id, message.id)

    def _settle(self, task: Optional[asyncio.Task[None]]) -> None:
        if task is not None and task in self._pending:
            self._pending.remove(task)
            if task is not asyncio.current_task():
                task.cancel()
        self._update_state()

    def _reply_failed(self, task: Optional[asyncio.Task[None]], error: PanelError) -> None:
        if self._disposed or task is None or task not in self._pending:
            logger.debug("Session %s: discarding stale failure %s", self.id, error.code)
            return
        logger.warning("Session %s: reply failed (%s): %s", self.id, error.code, error)
        self.last_error = error
        self._emit(SessionEvent.REPLY_FAILED, {"code": error.code, "message": str(error)})
        if self.settings.failure_notice:
            try:
                self._append(self.settings.failure_notice, "assistant")
            except Exception:
                logger.warning("Session %s: could not record failure notice", self.id, exc_info=True)
        self._settle(task)

    def _append(self, content: str, sender: Sender) -> Message:
        message = Message(
            id=self._next_id(),
            content=content,
            sender=sender,
            timestamp=utc_now(),
        )
        self._messages.append(message)
        self._emit(SessionEvent.MESSAGE, message)
        return message

    def _next_id(self) -> str:
        while True:
            candidate = f"m{next(self._seq)}"
            if candidate not in self._ids:
                self._ids.add(candidate)
                return candidate

    def _update_state(self) -> None:
        outstanding = len(self._pending)
        self._state = SessionState.AWAITING_REPLY if outstanding else SessionState.IDLE
        if outstanding:
            self._idle.clear()
        else:
            self._idle.set()
        self._emit(SessionEvent.STATE, {"state": self._state, "outstanding": outstanding})

    def _emit(self, event_type: str, data: Any) -> None:
        event = PanelEvent(type=event_type, session_id=self.id, data=data)
        for handler in list(self._handlers):
            try:
                handler(event)
            except Exception:
                logger.warning("Session %s: handler failed for %s", self.id, event_type, exc_info=True)
