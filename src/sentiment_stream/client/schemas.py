"""Result type for single-shot text analysis."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TextAnalysisResult:
    """Outcome of one analysis request.

    ``score`` and ``error`` are mutually exclusive. When the request succeeded
    but the body held no ``Score is:`` line, both are None and callers show
    ``raw_response`` as-is.
    """

    raw_response: str = ""
    score: float | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if self.error is not None and self.score is not None:
            raise ValueError("a failed request cannot carry a score")

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def has_score(self) -> bool:
        return self.score is not None
