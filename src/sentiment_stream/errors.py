"""Exception types raised by the streaming and analysis paths."""

from __future__ import annotations


class SentimentStreamError(Exception):
    """Base class for sentiment-stream errors."""


class SessionActiveError(SentimentStreamError):
    """A streaming session is already running; stop it before starting another."""


class StreamTransportError(SentimentStreamError):
    """The stream connection or body decoding failed mid-session.

    The underlying exception is kept on ``original`` (and chained as ``__cause__``
    where the error is raised from it).
    """

    def __init__(self, message: str, original: BaseException | None = None) -> None:
        super().__init__(message)
        self.original = original
