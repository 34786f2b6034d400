"""FastAPI stand-in for the sentiment backend.

Run with:
    sentiment-stream devserver
"""

from __future__ import annotations

from fastapi import FastAPI, Query
from fastapi.responses import PlainTextResponse, StreamingResponse

from sentiment_stream.config import DevServerConfig, devserver_config
from sentiment_stream.devserver.feed import NewsFeedSimulator


def create_app(config: DevServerConfig | None = None) -> FastAPI:
    cfg = config or devserver_config
    feed = NewsFeedSimulator(cfg)

    app = FastAPI(
        title="Sentiment Stream Dev Backend",
        description=(
            "Local implementation of the /hello, /sentiment and /stopNews contract. "
            "Scores come from VADER rescaled to [0, 5]."
        ),
        version="0.1.0",
    )
    app.state.feed = feed

    # ---------------------------------------------------------------------------
    # Routes
    # ---------------------------------------------------------------------------

    @app.get("/health", tags=["Meta"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/hello", response_class=PlainTextResponse, tags=["Inference"])
    def hello(text: str = "") -> str:
        """Score one piece of text."""
        score = feed.scorer.score(text)
        return f"Text: {text}\nScore is:{score:.2f}"

    @app.get("/sentiment", tags=["Streaming"])
    def sentiment(
        text: str = Query(..., min_length=1),
        time_window_sec: int = Query(3, alias="timeWindowSec", ge=1, le=60),
    ) -> StreamingResponse:
        """Stream one aggregated record per time window until stopped."""
        return StreamingResponse(
            feed.records(text, time_window_sec),
            media_type="text/html; charset=utf-8",
        )

    @app.get("/stopNews", response_class=PlainTextResponse, tags=["Streaming"])
    def stop_news() -> str:
        return "Stopped" if feed.stop() else "No active stream"

    return app


app = create_app()
