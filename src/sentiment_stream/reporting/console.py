"""Plain-text rendering of analysis results and sentiment timelines for the CLI."""

from __future__ import annotations

import click

from sentiment_stream.client.schemas import TextAnalysisResult
from sentiment_stream.reporting.labels import bar_fraction, sentiment_info
from sentiment_stream.streaming.schemas import SentimentEvent
from sentiment_stream.streaming.timeline import TimelineSnapshot

BAR_WIDTH = 30


def _bar(score: float, width: int = BAR_WIDTH) -> str:
    filled = round(bar_fraction(score) * width)
    return "█" * filled + "·" * (width - filled)


def format_event(event: SentimentEvent, color: bool = True) -> str:
    """One timeline row: time, article count, sentiment, bar and label."""
    info = sentiment_info(event.sentiment)
    bar = _bar(event.sentiment)
    if color:
        bar = click.style(bar, fg=info.style)
    stamp = event.received_at.astimezone().strftime("%H:%M:%S")
    return (
        f"{stamp}  {bar}  {event.message_count} articles | "
        f"Sentiment: {event.sentiment:.2f} ({info.label})"
    )


def format_aggregate(aggregate: float | None, color: bool = True) -> str:
    """Average-sentiment line; empty string when nothing has been received."""
    if aggregate is None:
        return ""
    info = sentiment_info(aggregate)
    text = f"Average Sentiment: {aggregate:.2f}/5 ({info.label})"
    return click.style(text, fg=info.style, bold=True) if color else text


def format_snapshot(snapshot: TimelineSnapshot, color: bool = True) -> str:
    """Display window of the timeline followed by the all-events average."""
    if not snapshot.total:
        return "No sentiment records received."
    lines = ["Sentiment Timeline"]
    if snapshot.total > len(snapshot.recent):
        lines.append(f"(last {len(snapshot.recent)} of {snapshot.total})")
    lines.extend(format_event(e, color=color) for e in snapshot.recent)
    lines.append(format_aggregate(snapshot.aggregate, color=color))
    return "\n".join(lines)


def format_analysis(result: TextAnalysisResult, color: bool = True) -> str:
    """Render an analysis result: score and label, raw body, or the error."""
    if result.error is not None:
        return f"Error: {result.error}"
    if result.score is None:
        # No score line in the body: show what the backend said
        return result.raw_response
    info = sentiment_info(result.score)
    text = f"{info.emoji} {result.score:.1f}/5 {info.label}"
    return click.style(text, fg=info.style, bold=True) if color else text
