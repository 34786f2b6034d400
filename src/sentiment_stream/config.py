"""Configuration via pydantic-settings (reads from .env or environment variables)."""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root = two levels up from this file (src/sentiment_stream/config.py)
_ROOT = Path(__file__).parent.parent.parent


class BackendConfig(BaseSettings):
    """Where the sentiment backend lives and how its responses are framed."""

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_file=_ROOT / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="SENTIMENT_BACKEND_",
    )

    base_url: str = "http://localhost:8080"
    analyze_path: str = "/hello"
    stream_path: str = "/sentiment"
    stop_path: str = "/stopNews"
    request_timeout: float = 10.0
    connect_timeout: float = 5.0
    # The backend terminates every streamed record with this token
    record_delimiter: str = "<br>"
    encoding: str = "utf-8"


class StreamConfig(BaseSettings):
    """Streaming-session parameters."""

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_file=_ROOT / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="SENTIMENT_STREAM_",
    )

    display_window: int = Field(default=20, ge=1)
    default_keyword: str = "technology"
    default_time_window: int = 3
    min_time_window: int = 1
    max_time_window: int = 60


class DevServerConfig(BaseSettings):
    """Local stand-in backend used for development and integration tests."""

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_file=_ROOT / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="SENTIMENT_DEVSERVER_",
    )

    host: str = "127.0.0.1"
    port: int = 8080
    headlines_per_window: int = Field(default=5, ge=1)
    # 0 = stream until stopped or disconnected
    max_windows: int = Field(default=0, ge=0)
    # Seconds slept per window = timeWindowSec * time_scale
    time_scale: float = Field(default=1.0, ge=0.0)
    seed: int | None = None


class LoggingConfig(BaseSettings):
    """Logging level and format for the CLI."""

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_file=_ROOT / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="SENTIMENT_",
    )

    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# Singleton instances (import these in application code)
backend_config = BackendConfig()
stream_config = StreamConfig()
devserver_config = DevServerConfig()
logging_config = LoggingConfig()
