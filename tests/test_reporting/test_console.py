"""Tests for CLI text rendering."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from sentiment_stream.client.schemas import TextAnalysisResult
from sentiment_stream.reporting.console import (
    format_aggregate,
    format_analysis,
    format_event,
    format_snapshot,
)
from sentiment_stream.streaming.records import parse_record
from sentiment_stream.streaming.timeline import Timeline

_T0 = datetime(2026, 1, 1, 9, 30, tzinfo=UTC)


def _timeline(n: int, sentiment: float = 3.5) -> Timeline:
    timeline = Timeline(display_window=20)
    for i in range(n):
        timeline.append(
            parse_record(f"{i} messages, sentiment = {sentiment}", now=_T0 + timedelta(seconds=i))
        )
    return timeline


def test_format_event_contents():
    event = parse_record("12 messages, sentiment = 3.50", now=_T0)
    line = format_event(event, color=False)
    assert "12 articles" in line
    assert "Sentiment: 3.50" in line
    assert "(Neutral)" in line


def test_format_event_bar_is_clamped():
    event = parse_record("1 messages, sentiment = 9.0", now=_T0)
    assert "·" not in format_event(event, color=False)


def test_format_aggregate_empty():
    assert format_aggregate(None) == ""


def test_format_aggregate_value():
    assert format_aggregate(2.8, color=False) == "Average Sentiment: 2.80/5 (Negative)"


def test_format_snapshot_empty():
    assert format_snapshot(Timeline().snapshot()) == "No sentiment records received."


def test_format_snapshot_shows_window_and_average():
    text = format_snapshot(_timeline(25).snapshot(), color=False)
    assert "(last 20 of 25)" in text
    assert "  0 articles" not in text
    assert "24 articles" in text
    assert text.endswith("Average Sentiment: 3.50/5 (Neutral)")


def test_format_snapshot_small_timeline_has_no_window_note():
    text = format_snapshot(_timeline(3).snapshot(), color=False)
    assert "last" not in text
    assert text.count("articles") == 3


def test_format_analysis_score():
    text = format_analysis(TextAnalysisResult(raw_response="Score is:4.2", score=4.2), color=False)
    assert "4.2/5" in text
    assert "Positive" in text


def test_format_analysis_raw_fallback():
    result = TextAnalysisResult(raw_response="no score today")
    assert format_analysis(result) == "no score today"


def test_format_analysis_error():
    assert format_analysis(TextAnalysisResult(error="timed out")) == "Error: timed out"
