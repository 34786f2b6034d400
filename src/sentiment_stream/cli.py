"""Click CLI: analyze | watch | devserver."""

from __future__ import annotations

import asyncio
import logging
import sys

import click

from sentiment_stream.config import (
    BackendConfig,
    StreamConfig,
    devserver_config,
    logging_config,
    stream_config,
)
from sentiment_stream.reporting.console import (
    format_aggregate,
    format_analysis,
    format_event,
    format_snapshot,
)
from sentiment_stream.streaming.schemas import SentimentEvent
from sentiment_stream.streaming.session import (
    SessionOutcome,
    StreamController,
    StreamSession,
)


@click.group()
@click.option(
    "--log-level",
    default=None,
    help="Logging level (default: SENTIMENT_LOG_LEVEL or INFO)",
)
def cli(log_level: str | None) -> None:
    """Text sentiment scoring and live news sentiment streams."""
    logging.basicConfig(
        level=(log_level or logging_config.log_level).upper(),
        format=logging_config.log_format,
        stream=sys.stderr,
    )


@cli.command()
@click.argument("text")
def analyze(text: str) -> None:
    """Score TEXT with the backend's analysis endpoint."""
    from sentiment_stream.client.analysis import TextAnalysisClient

    if not text.strip():
        raise click.UsageError("TEXT must not be blank")

    async def _run():
        async with TextAnalysisClient(BackendConfig()) as client:
            return await client.analyze(text)

    result = asyncio.run(_run())
    click.echo(format_analysis(result))
    if result.failed:
        sys.exit(1)


async def _watch(keyword: str, window: int, duration: float | None) -> StreamSession | None:
    def _print_event(session: StreamSession, event: SentimentEvent) -> None:
        click.echo(format_event(event))
        click.echo(f"  {format_aggregate(session.timeline.aggregate)}")

    async with StreamController(
        BackendConfig(), StreamConfig(), on_event=_print_event
    ) as controller:
        session = await controller.start(keyword, window)
        click.echo(f'Streaming news for "{session.keyword}"... (Ctrl-C to stop)')
        try:
            await asyncio.wait_for(controller.wait(), timeout=duration)
        except TimeoutError:
            await controller.stop()
        except asyncio.CancelledError:
            # Ctrl-C: stop cleanly, then let asyncio.run surface the interrupt
            await controller.stop()
            _summarise(session)
            raise
        _summarise(session)
        return session


def _summarise(session: StreamSession) -> None:
    click.echo("")
    click.echo(format_snapshot(session.snapshot()))
    if session.outcome is SessionOutcome.FAILED and session.error is not None:
        click.echo(f"Stream error: {session.error}", err=True)
    else:
        click.echo(f"Stream {session.outcome.value if session.outcome else 'ended'}.")


@cli.command()
@click.argument("keyword", required=False, default=None)
@click.option(
    "--window",
    "-w",
    type=click.IntRange(stream_config.min_time_window, stream_config.max_time_window),
    default=stream_config.default_time_window,
    show_default=True,
    help="Aggregation time window in seconds",
)
@click.option(
    "--duration",
    "-d",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Stop the stream after this many seconds (default: until the backend closes it)",
)
def watch(keyword: str | None, window: int, duration: float | None) -> None:
    """Stream live news sentiment for KEYWORD and print the running timeline."""
    keyword = keyword or stream_config.default_keyword
    if not keyword.strip():
        raise click.UsageError("KEYWORD must not be blank")

    try:
        session = asyncio.run(_watch(keyword, window, duration))
    except KeyboardInterrupt:
        return

    if session is not None and session.outcome is SessionOutcome.FAILED:
        sys.exit(1)


@cli.command()
@click.option("--host", default=devserver_config.host, show_default=True)
@click.option("--port", default=devserver_config.port, show_default=True, type=int)
def devserver(host: str, port: int) -> None:
    """Run the local stand-in backend (/hello, /sentiment, /stopNews)."""
    import uvicorn

    uvicorn.run("sentiment_stream.devserver.app:app", host=host, port=port)


if __name__ == "__main__":
    cli()
