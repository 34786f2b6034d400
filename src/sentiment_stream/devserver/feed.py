"""Synthetic keyword news feed emitting one aggregated record per time window."""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import AsyncIterator

from sentiment_stream.config import DevServerConfig
from sentiment_stream.devserver.scoring import VaderScorer

logger = logging.getLogger(__name__)

RECORD_DELIMITER = "<br>"

# {kw} is replaced by the requested keyword
_HEADLINE_TEMPLATES: list[str] = [
    "{kw} stocks rally as investors cheer strong earnings",
    "Regulators criticise {kw} firms over serious privacy failures",
    "{kw} conference draws record crowds and great reviews",
    "Analysts warn of a terrible slump in {kw} spending",
    "New {kw} report released today",
    "{kw} startup wins award for excellent design",
    "Fears grow over {kw} layoffs and weak demand",
    "{kw} sector remains stable this quarter",
    "Customers love the latest {kw} launch",
    "{kw} outage leaves thousands angry and frustrated",
]


class NewsFeedSimulator:
    """Generate scored headline batches for a keyword until stopped.

    Only the most recently opened feed can be stopped, mirroring a backend that
    tracks a single consumer.
    """

    def __init__(self, config: DevServerConfig | None = None, scorer: VaderScorer | None = None):
        self._cfg = config or DevServerConfig()
        self._scorer = scorer or VaderScorer()
        self._rng = random.Random(self._cfg.seed)
        self._current: asyncio.Event | None = None

    @property
    def scorer(self) -> VaderScorer:
        return self._scorer

    def headlines(self, keyword: str, count: int) -> list[str]:
        return [self._rng.choice(_HEADLINE_TEMPLATES).format(kw=keyword) for _ in range(count)]

    def window_record(self, keyword: str) -> str:
        """One delimited record aggregating a random batch of headlines."""
        count = self._rng.randint(1, self._cfg.headlines_per_window)
        avg = self._scorer.mean_score(self.headlines(keyword, count))
        return f"{count} messages, sentiment = {avg:.2f}{RECORD_DELIMITER}"

    def stop(self) -> bool:
        """Release the most recent feed; returns False if there was none running."""
        if self._current is None or self._current.is_set():
            return False
        self._current.set()
        return True

    async def records(self, keyword: str, time_window_sec: int) -> AsyncIterator[str]:
        stop = asyncio.Event()
        self._current = stop
        delay = time_window_sec * self._cfg.time_scale
        emitted = 0

        while not stop.is_set():
            try:
                await asyncio.wait_for(stop.wait(), timeout=delay)
            except TimeoutError:
                pass
            if stop.is_set():
                break  # /stopNews
            yield self.window_record(keyword)
            emitted += 1
            if self._cfg.max_windows and emitted >= self._cfg.max_windows:
                break

        logger.info("feed for %r closed after %d windows", keyword, emitted)
