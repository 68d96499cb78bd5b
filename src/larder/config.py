"""Runtime configuration for page fetching and the command-line entrypoint."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from typing import Mapping


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0 Safari/537.36"
)
DEFAULT_FETCH_TIMEOUT_SECONDS = 20.0
DEFAULT_MAX_PAGE_BYTES = 5_000_000
DEFAULT_LOG_LEVEL = "INFO"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _parse_positive_int(*, name: str, raw_value: str, minimum: int = 1) -> int:
    try:
        value = int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


def _parse_positive_float(*, name: str, raw_value: str, minimum: float = 0.001) -> float:
    try:
        value = float(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


@dataclass(frozen=True, slots=True)
class FetchSettings:
    """Validated settings for retrieving recipe pages."""

    user_agent: str = DEFAULT_USER_AGENT
    timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS
    max_page_bytes: int = DEFAULT_MAX_PAGE_BYTES
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "FetchSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        user_agent = source.get("LARDER_USER_AGENT", DEFAULT_USER_AGENT).strip()
        timeout_raw = source.get("LARDER_FETCH_TIMEOUT_SECONDS", str(DEFAULT_FETCH_TIMEOUT_SECONDS)).strip()
        max_bytes_raw = source.get("LARDER_MAX_PAGE_BYTES", str(DEFAULT_MAX_PAGE_BYTES)).strip()
        log_level = source.get("LARDER_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()

        if not user_agent:
            raise ValueError("LARDER_USER_AGENT cannot be empty")
        if not timeout_raw:
            raise ValueError("LARDER_FETCH_TIMEOUT_SECONDS cannot be empty")
        if not max_bytes_raw:
            raise ValueError("LARDER_MAX_PAGE_BYTES cannot be empty")
        if log_level not in _LOG_LEVELS:
            raise ValueError(f"LARDER_LOG_LEVEL must be one of: {', '.join(sorted(_LOG_LEVELS))}")

        timeout_seconds = _parse_positive_float(
            name="LARDER_FETCH_TIMEOUT_SECONDS",
            raw_value=timeout_raw,
            minimum=0.1,
        )
        max_page_bytes = _parse_positive_int(
            name="LARDER_MAX_PAGE_BYTES",
            raw_value=max_bytes_raw,
            minimum=1024,
        )

        return cls(
            user_agent=user_agent,
            timeout_seconds=timeout_seconds,
            max_page_bytes=max_page_bytes,
            log_level=log_level,
        )
