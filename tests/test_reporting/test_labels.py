"""Tests for sentiment band mapping and bar sizing."""

from __future__ import annotations

import math

import pytest

from sentiment_stream.reporting.labels import bar_fraction, sentiment_info


@pytest.mark.parametrize(
    "score,label",
    [
        (5.0, "Positive"),
        (4.0, "Positive"),
        (3.99, "Neutral"),
        (3.0, "Neutral"),
        (2.5, "Negative"),
        (2.0, "Negative"),
        (1.99, "Very Negative"),
        (0.0, "Very Negative"),
        (-1.0, "Very Negative"),
    ],
)
def test_sentiment_bands(score, label):
    assert sentiment_info(score).label == label


def test_band_colours_match_labels():
    assert sentiment_info(4.5).color == "#22c55e"
    assert sentiment_info(0.5).color == "#ef4444"


def test_nan_falls_into_lowest_band():
    assert sentiment_info(math.nan).label == "Very Negative"


@pytest.mark.parametrize(
    "score,expected",
    [(0.0, 0.0), (2.5, 0.5), (5.0, 1.0), (7.5, 1.0), (-3.0, 0.0), (math.inf, 1.0)],
)
def test_bar_fraction_is_clamped(score, expected):
    assert bar_fraction(score) == pytest.approx(expected)


def test_bar_fraction_nan():
    assert bar_fraction(math.nan) == 0.0
