"""Lifecycle of one streaming sentiment query: open, pump, cancel, notify."""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Callable
from contextlib import aclosing
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

import httpx

from sentiment_stream.client.http import build_client, send_stop_notification, streaming_timeout
from sentiment_stream.config import BackendConfig, StreamConfig
from sentiment_stream.errors import SessionActiveError, StreamTransportError
from sentiment_stream.streaming.framing import LineFramer, decode_chunks
from sentiment_stream.streaming.records import parse_record
from sentiment_stream.streaming.schemas import SentimentEvent
from sentiment_stream.streaming.timeline import Timeline, TimelineSnapshot

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    STREAMING = "streaming"
    STOPPING = "stopping"
    STOPPED = "stopped"


class SessionOutcome(str, Enum):
    COMPLETED = "completed"  # backend closed the body
    CANCELLED = "cancelled"  # user stop; not an error
    FAILED = "failed"  # transport or decode error


class CancellationToken:
    """One-shot cancellation signal bound to a single pump task.

    Cancelling also cancels the bound task, so a read suspended on the network
    resolves immediately instead of waiting for the next chunk.
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._task: asyncio.Task | None = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def bind(self, task: asyncio.Task) -> None:
        if self._task is not None:
            raise RuntimeError("cancellation token is already bound to a task")
        self._task = task

    def cancel(self) -> bool:
        """Signal cancellation; returns False if it had already been signalled."""
        if self._cancelled:
            return False
        self._cancelled = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
        return True


@dataclass(eq=False)
class StreamSession:
    """Everything owned by one streaming query. Never reused across queries."""

    keyword: str
    time_window_sec: int
    timeline: Timeline
    token: CancellationToken = field(default_factory=CancellationToken)
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    state: SessionState = SessionState.IDLE
    outcome: SessionOutcome | None = None
    error: StreamTransportError | None = None
    # None = no stop notification attempted; otherwise whether the backend accepted it
    stop_notified: bool | None = None
    started_at: datetime | None = None
    ended_at: datetime | None = None
    finished: asyncio.Event = field(default_factory=asyncio.Event, repr=False)

    @property
    def active(self) -> bool:
        return self.state in (SessionState.STREAMING, SessionState.STOPPING)

    def accept(self, event: SentimentEvent) -> bool:
        """Append ``event`` unless the session is no longer streaming."""
        if self.state is not SessionState.STREAMING or self.token.cancelled:
            return False
        self.timeline.append(event)
        return True

    def snapshot(self, window: int | None = None) -> TimelineSnapshot:
        return self.timeline.snapshot(window)

    def _mark_stopped(self) -> None:
        self.state = SessionState.STOPPED
        if self.ended_at is None:
            self.ended_at = datetime.now(tz=UTC)
        self.finished.set()


EventListener = Callable[[StreamSession, SentimentEvent], None]


class StreamController:
    """Run at most one streaming session at a time against the backend.

    ``start`` schedules the pump as an asyncio task and returns immediately; the
    pump suspends only while waiting for the next body chunk, so other coroutines
    (text analysis, UI) keep running. ``on_event`` is called synchronously after
    every append.
    """

    def __init__(
        self,
        config: BackendConfig | None = None,
        stream_config: StreamConfig | None = None,
        client: httpx.AsyncClient | None = None,
        on_event: EventListener | None = None,
    ) -> None:
        self._cfg = config or BackendConfig()
        self._stream_cfg = stream_config or StreamConfig()
        self._owns_client = client is None
        self._client = client or build_client(self._cfg)
        self._on_event = on_event
        self._session: StreamSession | None = None
        self._task: asyncio.Task | None = None

    @property
    def session(self) -> StreamSession | None:
        return self._session

    async def __aenter__(self) -> StreamController:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.stop()
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def start(self, keyword: str, time_window_sec: int | None = None) -> StreamSession:
        """Open a new streaming session for ``keyword``.

        Raises:
            SessionActiveError: The previous session has not reached STOPPED.
            ValueError: Blank keyword or a time window outside the allowed range.
        """
        current = self._session
        if current is not None and current.active:
            raise SessionActiveError(
                f"session {current.session_id} is still {current.state.value}"
            )

        keyword = keyword.strip()
        if not keyword:
            raise ValueError("keyword must not be empty")
        window = (
            self._stream_cfg.default_time_window if time_window_sec is None else time_window_sec
        )
        lo, hi = self._stream_cfg.min_time_window, self._stream_cfg.max_time_window
        if not lo <= window <= hi:
            raise ValueError(f"time_window_sec must be between {lo} and {hi}, got {window}")

        if current is not None:
            current.token.cancel()

        session = StreamSession(
            keyword=keyword,
            time_window_sec=window,
            timeline=Timeline(self._stream_cfg.display_window),
        )
        session.state = SessionState.STREAMING
        session.started_at = datetime.now(tz=UTC)
        task = asyncio.create_task(
            self._pump(session), name=f"sentiment-stream-{session.session_id}"
        )
        session.token.bind(task)
        self._session, self._task = session, task

        logger.info(
            "session %s started: keyword=%r window=%ss", session.session_id, keyword, window
        )
        return session

    async def stop(self) -> StreamSession | None:
        """Cancel the live session and tell the backend to release it.

        The stop notification is sent exactly once per cancelled session, whether
        or not the pump had already died; its failure is logged, never raised.
        A session that already ended on its own is returned untouched.
        """
        session, task = self._session, self._task
        if session is None or task is None:
            return session
        if session.state is not SessionState.STREAMING:
            # Another stop() may still be notifying; wait until it reaches STOPPED
            await asyncio.wait({task})
            await session.finished.wait()
            return session

        session.state = SessionState.STOPPING
        session.token.cancel()
        await asyncio.wait({task})
        if not task.cancelled() and task.exception() is not None:
            # Already logged by the pump
            session.outcome = SessionOutcome.FAILED
        elif session.outcome is None:
            # Cancelled before the pump ever ran
            session.outcome = SessionOutcome.CANCELLED

        session.stop_notified = await send_stop_notification(self._client, self._cfg.stop_path)
        session._mark_stopped()
        logger.info(
            "session %s stopped (%d events, notified=%s)",
            session.session_id,
            len(session.timeline),
            session.stop_notified,
        )
        return session

    async def wait(self) -> StreamSession | None:
        """Wait for the current session to reach STOPPED without cancelling it.

        Safe to wrap in ``asyncio.wait_for``: a timeout leaves the pump running.
        Re-raises any unexpected (non-transport) exception from the pump.
        """
        session, task = self._session, self._task
        if session is None or task is None:
            return session
        await asyncio.wait({task})
        await session.finished.wait()
        if not task.cancelled() and (exc := task.exception()) is not None:
            raise exc
        return session

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _pump(self, session: StreamSession) -> None:
        try:
            await self._consume(session)
        except asyncio.CancelledError:
            session.outcome = SessionOutcome.CANCELLED
            logger.info("session %s cancelled", session.session_id)
            raise
        except (httpx.HTTPError, UnicodeDecodeError) as exc:
            error = StreamTransportError(f"stream for {session.keyword!r} failed: {exc}", exc)
            error.__cause__ = exc
            session.error = error
            session.outcome = SessionOutcome.FAILED
            logger.error("session %s failed: %s", session.session_id, exc)
        except Exception:
            session.outcome = SessionOutcome.FAILED
            logger.exception("session %s crashed", session.session_id)
            raise
        else:
            if session.token.cancelled:
                session.outcome = SessionOutcome.CANCELLED
            else:
                session.outcome = SessionOutcome.COMPLETED
                logger.info(
                    "session %s completed (%d events)", session.session_id, len(session.timeline)
                )
        finally:
            # A user stop is finished by stop() once the notification is sent
            if session.state is SessionState.STREAMING:
                session._mark_stopped()

    async def _consume(self, session: StreamSession) -> None:
        framer = LineFramer(self._cfg.record_delimiter)
        params = {"text": session.keyword, "timeWindowSec": session.time_window_sec}

        async with self._client.stream(
            "GET",
            self._cfg.stream_path,
            params=params,
            timeout=streaming_timeout(self._cfg),
        ) as resp:
            resp.raise_for_status()
            chunks = decode_chunks(resp.aiter_bytes(), self._cfg.encoding)
            async with aclosing(chunks):
                async for chunk in chunks:
                    if session.token.cancelled:
                        # Arrived after cancellation: dropped unprocessed
                        break
                    for line in framer.feed(chunk):
                        event = parse_record(line)
                        if event is None or not session.accept(event):
                            continue
                        if self._on_event is not None:
                            self._on_event(session, event)

        if framer.pending.strip():
            logger.debug("discarding unterminated tail: %r", framer.pending)
