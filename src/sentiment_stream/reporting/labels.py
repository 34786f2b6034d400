"""Sentiment label, colour and bar-length mapping for the [0, 5] score scale."""

from __future__ import annotations

import math
from dataclasses import dataclass

SCORE_MAX = 5.0


@dataclass(frozen=True)
class SentimentInfo:
    label: str
    color: str  # hex, for HTML-style renderers
    emoji: str
    style: str  # click/ANSI colour name for terminals


# (lower bound, info) checked top-down; the last entry catches everything else
_BANDS: list[tuple[float, SentimentInfo]] = [
    (4.0, SentimentInfo("Positive", "#22c55e", "😊", "green")),
    (3.0, SentimentInfo("Neutral", "#eab308", "😐", "yellow")),
    (2.0, SentimentInfo("Negative", "#f97316", "😞", "bright_red")),
    (-math.inf, SentimentInfo("Very Negative", "#ef4444", "😢", "red")),
]


def sentiment_info(score: float) -> SentimentInfo:
    """Map a score to its band: >=4 positive, >=3 neutral, >=2 negative, else very negative."""
    for lower, info in _BANDS:
        if score >= lower:
            return info
    # NaN compares false against every bound
    return _BANDS[-1][1]


def bar_fraction(score: float) -> float:
    """Share of a full-width bar for ``score``, clamped to [0, 1]."""
    if math.isnan(score):
        return 0.0
    return max(0.0, min(1.0, score / SCORE_MAX))
