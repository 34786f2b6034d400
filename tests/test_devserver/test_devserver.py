"""Tests for the local stand-in backend."""

from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from sentiment_stream.config import BackendConfig, DevServerConfig
from sentiment_stream.devserver.app import create_app
from sentiment_stream.devserver.feed import NewsFeedSimulator
from sentiment_stream.devserver.scoring import VaderScorer, to_five_point
from sentiment_stream.streaming.framing import frame_lines
from sentiment_stream.streaming.records import parse_record, parse_score
from sentiment_stream.streaming.session import SessionOutcome, SessionState, StreamController


def _cfg(**overrides) -> DevServerConfig:
    values = {"max_windows": 3, "time_scale": 0.0, "seed": 7, "headlines_per_window": 4}
    values.update(overrides)
    return DevServerConfig(**values)


@pytest.fixture
def client():
    return TestClient(create_app(_cfg()))


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("compound,expected", [(-1.0, 0.0), (0.0, 2.5), (1.0, 5.0)])
def test_to_five_point(compound, expected):
    assert to_five_point(compound) == pytest.approx(expected)


def test_scorer_orders_positive_above_negative():
    scorer = VaderScorer()
    assert scorer.score("I absolutely love this, amazing!") > scorer.score("Terrible, awful, hate it")


def test_scorer_empty_text_is_neutral():
    assert VaderScorer().score("   ") == pytest.approx(2.5)


def test_mean_score_of_batch():
    scorer = VaderScorer()
    texts = ["Customers love it", "Terrible outage"]
    expected = (scorer.score(texts[0]) + scorer.score(texts[1])) / 2
    assert scorer.mean_score(texts) == pytest.approx(expected)
    assert scorer.mean_score([]) == pytest.approx(2.5)


# ---------------------------------------------------------------------------
# /hello
# ---------------------------------------------------------------------------


def test_hello_returns_parseable_score(client):
    resp = client.get("/hello", params={"text": "What a wonderful day"})
    assert resp.status_code == 200
    score = parse_score(resp.text)
    assert score is not None
    assert 2.5 < score <= 5.0


def test_hello_negative_text(client):
    score = parse_score(client.get("/hello", params={"text": "This is horrible"}).text)
    assert score < 2.5


# ---------------------------------------------------------------------------
# /sentiment and /stopNews
# ---------------------------------------------------------------------------


def test_sentiment_streams_delimited_records(client):
    resp = client.get("/sentiment", params={"text": "bitcoin", "timeWindowSec": 1})
    assert resp.status_code == 200
    assert resp.text.endswith("<br>")
    lines = list(frame_lines([resp.text]))
    assert len(lines) == 3
    events = [parse_record(line) for line in lines]
    assert all(e is not None for e in events)
    assert all(1 <= e.message_count <= 4 for e in events)
    assert all(0.0 <= e.sentiment <= 5.0 for e in events)


@pytest.mark.parametrize("window", [0, 61])
def test_sentiment_rejects_bad_window(client, window):
    resp = client.get("/sentiment", params={"text": "bitcoin", "timeWindowSec": window})
    assert resp.status_code == 422


def test_sentiment_requires_keyword(client):
    assert client.get("/sentiment", params={"timeWindowSec": 3}).status_code == 422


def test_stop_news_without_stream(client):
    resp = client.get("/stopNews")
    assert resp.status_code == 200
    assert resp.text == "No active stream"


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_feed_stops_when_released():
    feed = NewsFeedSimulator(_cfg(max_windows=0))
    records = []
    async for record in feed.records("bitcoin", 1):
        records.append(record)
        if len(records) == 2:
            assert feed.stop() is True
    assert len(records) == 2
    assert feed.stop() is False


def test_feed_is_seeded():
    a = NewsFeedSimulator(_cfg(seed=1)).headlines("ai", 5)
    b = NewsFeedSimulator(_cfg(seed=1)).headlines("ai", 5)
    assert a == b
    assert all("ai" in h for h in a)


# ---------------------------------------------------------------------------
# Controller against the dev backend
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_controller_consumes_dev_backend():
    app = create_app(_cfg())
    http = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")
    controller = StreamController(BackendConfig(base_url="http://testserver"), client=http)

    session = await controller.start("climate", 2)
    await controller.wait()
    await http.aclose()

    assert session.state is SessionState.STOPPED
    assert session.outcome is SessionOutcome.COMPLETED
    assert len(session.timeline) == 3
    assert session.snapshot().aggregate is not None
