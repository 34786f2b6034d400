"""VADER scoring rescaled to the backend's [0, 5] sentiment scale."""

from __future__ import annotations

from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

NEUTRAL_SCORE = 2.5


def to_five_point(compound: float) -> float:
    """Map a VADER compound score in [-1, 1] onto [0, 5]."""
    return round((compound + 1.0) * 2.5, 2)


class VaderScorer:
    """Score headlines on the five-point scale the stream records use."""

    def __init__(self) -> None:
        self._analyzer = SentimentIntensityAnalyzer()

    def score(self, text: str) -> float:
        if not text.strip():
            return NEUTRAL_SCORE
        return to_five_point(self._analyzer.polarity_scores(text)["compound"])

    def mean_score(self, texts: list[str]) -> float:
        """Average five-point score of a headline batch; neutral when empty."""
        if not texts:
            return NEUTRAL_SCORE
        return sum(map(self.score, texts)) / len(texts)
