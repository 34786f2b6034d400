"""Incremental decoding and delimiter framing of a chunked response body."""

from __future__ import annotations

import codecs
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator

DEFAULT_DELIMITER = "<br>"


class LineFramer:
    """Split arbitrarily-sized text chunks into delimiter-terminated records.

    Text after the last delimiter is held back until a later chunk completes it.
    Whatever is still held when the stream ends is never emitted: the backend
    terminates every real record with the delimiter. Records that are blank
    after trimming are dropped; the rest are returned untrimmed.
    """

    def __init__(self, delimiter: str = DEFAULT_DELIMITER) -> None:
        if not delimiter:
            raise ValueError("delimiter must not be empty")
        self._delimiter = delimiter
        self._tail = ""

    @property
    def delimiter(self) -> str:
        return self._delimiter

    @property
    def pending(self) -> str:
        """Unterminated text buffered since the last delimiter."""
        return self._tail

    def feed(self, chunk: str) -> list[str]:
        """Consume one chunk and return the records it completed, in order."""
        if not chunk:
            return []
        # Join first so a delimiter split across two chunks is still found
        *complete, self._tail = (self._tail + chunk).split(self._delimiter)
        return [line for line in complete if line.strip()]

    def reset(self) -> None:
        self._tail = ""


def frame_lines(chunks: Iterable[str], delimiter: str = DEFAULT_DELIMITER) -> Iterator[str]:
    """Lazily yield complete records from an iterable of text chunks.

    Each call gets its own framer, so the same source can be re-framed from the
    start for a new session.
    """
    framer = LineFramer(delimiter)
    for chunk in chunks:
        yield from framer.feed(chunk)


async def decode_chunks(
    byte_chunks: AsyncIterable[bytes], encoding: str = "utf-8"
) -> AsyncIterator[str]:
    """Decode raw body bytes into text chunks with an incremental decoder.

    Multi-byte sequences split across reads are carried over to the next read.
    Invalid byte sequences raise ``UnicodeDecodeError``. Incomplete bytes left at
    the end of the body are part of the unterminated tail and are dropped.
    """
    decoder = codecs.getincrementaldecoder(encoding)(errors="strict")
    async for raw in byte_chunks:
        text = decoder.decode(raw)
        if text:
            yield text
