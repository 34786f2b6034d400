"""Dataclasses for events received on the streaming sentiment feed."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SentimentEvent:
    """One aggregated sentiment sample parsed from a streamed record."""

    # Client-side reception time; the backend sends no timestamp of its own
    received_at: datetime
    message_count: int
    # Nominally in [0, 5]; never clamped here
    sentiment: float
    raw_line: str

    def to_dict(self) -> dict:
        return {
            "received_at": self.received_at,
            "message_count": self.message_count,
            "sentiment": self.sentiment,
            "raw_line": self.raw_line,
        }
