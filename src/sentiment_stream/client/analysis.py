"""Single-shot text analysis against the backend's scoring endpoint."""

from __future__ import annotations

import logging

import httpx

from sentiment_stream.client.http import build_client
from sentiment_stream.client.schemas import TextAnalysisResult
from sentiment_stream.config import BackendConfig
from sentiment_stream.streaming.records import parse_score

logger = logging.getLogger(__name__)


class TextAnalysisClient:
    """Score one piece of text per request.

    Calls are independent: a new ``analyze`` does not cancel one already in
    flight. Callers that want one request at a time (and non-blank input) must
    enforce that themselves.
    """

    def __init__(
        self,
        config: BackendConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._cfg = config or BackendConfig()
        self._owns_client = client is None
        self._client = client or build_client(self._cfg)

    async def __aenter__(self) -> TextAnalysisClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def analyze(self, text: str) -> TextAnalysisResult:
        """Send ``text`` for scoring and return the parsed result.

        Transport failures are returned as a result carrying ``error``; they are
        never raised to the caller.
        """
        try:
            resp = await self._client.get(self._cfg.analyze_path, params={"text": text})
            body = resp.text
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as exc:
            # Text that cannot be URL-encoded fails like a transport error
            logger.warning("analysis request failed: %s", exc)
            return TextAnalysisResult(error=str(exc) or type(exc).__name__)

        if resp.is_error:
            logger.warning("analysis endpoint returned HTTP %s", resp.status_code)

        return TextAnalysisResult(raw_response=body, score=parse_score(body))
