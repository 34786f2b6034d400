"""Append-only sentiment timeline with a running average."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from sentiment_stream.streaming.schemas import SentimentEvent

DEFAULT_DISPLAY_WINDOW = 20


@dataclass(frozen=True)
class TimelineSnapshot:
    """Point-in-time view of a timeline.

    ``aggregate`` is the mean over ``events`` (every event received, not just the
    ``recent`` display window); ``None`` when nothing has been received yet.
    """

    events: tuple[SentimentEvent, ...]
    recent: tuple[SentimentEvent, ...]
    aggregate: float | None

    @property
    def total(self) -> int:
        return len(self.events)


class Timeline:
    """Ordered store of the events received during one streaming session."""

    def __init__(self, display_window: int = DEFAULT_DISPLAY_WINDOW) -> None:
        if display_window < 1:
            raise ValueError("display_window must be >= 1")
        self._display_window = display_window
        self._events: list[SentimentEvent] = []
        self._sentiment_sum = 0.0

    @property
    def display_window(self) -> int:
        return self._display_window

    @property
    def aggregate(self) -> float | None:
        """Arithmetic mean sentiment over all events, or None when empty."""
        if not self._events:
            return None
        return self._sentiment_sum / len(self._events)

    def append(self, event: SentimentEvent) -> None:
        self._events.append(event)
        self._sentiment_sum += event.sentiment

    def snapshot(self, window: int | None = None) -> TimelineSnapshot:
        """Return the events, the last ``window`` of them, and the matching aggregate."""
        if window is not None and window < 1:
            raise ValueError("window must be >= 1")
        size = self._display_window if window is None else window
        events = tuple(self._events)
        return TimelineSnapshot(
            events=events,
            recent=events[-size:],
            aggregate=self.aggregate,
        )

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[SentimentEvent]:
        return iter(tuple(self._events))
