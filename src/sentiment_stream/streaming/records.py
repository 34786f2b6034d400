"""Fixed-format grammar for streamed sentiment records and analysis score lines.

Stream record (searched anywhere within one framed record)::

    record  := count " messages, sentiment = " decimal
    count   := digit+
    decimal := digit+ ("." digit*)? | "." digit+

Analysis response (first occurrence anywhere in the body)::

    score   := "Score is:" digit+ ("." digit*)?

A record that does not match is not an error: the feed may carry incidental
non-data lines, so ``parse_record`` returns ``None`` and the caller skips it.
"""

from __future__ import annotations

import logging
import re
from datetime import UTC, datetime

from sentiment_stream.streaming.schemas import SentimentEvent

logger = logging.getLogger(__name__)

_RECORD_RE = re.compile(
    r"""
    (?P<count>\d+)
    [ ]messages,[ ]sentiment[ ]=[ ]
    (?P<sentiment>\d+(?:\.\d*)?|\.\d+)
    """,
    re.VERBOSE,
)

_SCORE_RE = re.compile(r"Score is:(?P<score>\d+(?:\.\d*)?)")


def parse_record(line: str, now: datetime | None = None) -> SentimentEvent | None:
    """Parse one framed record into a SentimentEvent, or ``None`` on mismatch.

    Args:
        line: The record text as produced by the framer; kept verbatim as ``raw_line``.
        now: Reception time to stamp on the event (defaults to the current UTC time).
    """
    match = _RECORD_RE.search(line)
    if match is None:
        logger.debug("skipping non-record line: %r", line)
        return None

    # Both groups are digit-only by construction; float() may still overflow to inf,
    # which is passed through unchanged
    return SentimentEvent(
        received_at=now or datetime.now(tz=UTC),
        message_count=int(match.group("count")),
        sentiment=float(match.group("sentiment")),
        raw_line=line,
    )


def parse_score(body: str) -> float | None:
    """Return the first ``Score is:<decimal>`` value in a response body, if any."""
    match = _SCORE_RE.search(body or "")
    if match is None:
        return None
    return float(match.group("score"))
