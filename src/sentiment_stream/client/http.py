"""httpx client construction and the best-effort stop notification."""

from __future__ import annotations

import logging

import httpx

from sentiment_stream.config import BackendConfig

logger = logging.getLogger(__name__)

_HEADERS = {"User-Agent": "sentiment-stream/0.1"}


def build_client(config: BackendConfig | None = None) -> httpx.AsyncClient:
    """Create an AsyncClient rooted at the configured backend."""
    cfg = config or BackendConfig()
    return httpx.AsyncClient(
        base_url=cfg.base_url,
        headers=_HEADERS,
        timeout=httpx.Timeout(cfg.request_timeout, connect=cfg.connect_timeout),
    )


def streaming_timeout(config: BackendConfig) -> httpx.Timeout:
    """Timeout for an open-ended body: bounded connect, unbounded reads."""
    return httpx.Timeout(config.request_timeout, connect=config.connect_timeout, read=None)


async def send_stop_notification(client: httpx.AsyncClient, path: str) -> bool:
    """Ask the backend to release the most recent streaming session.

    Failures are logged and reported through the return value only; the caller's
    own shutdown never depends on this call succeeding.
    """
    try:
        resp = await client.get(path)
        resp.raise_for_status()
    except httpx.HTTPError as exc:
        logger.warning("stop notification to %s failed: %s", path, exc)
        return False
    return True
