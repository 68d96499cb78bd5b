"""Single-shot HTTP retrieval of recipe page markup."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

from charset_normalizer import from_bytes
import requests

from larder.config import FetchSettings
from larder.extraction.extractor import validate_source_url

logger = logging.getLogger(__name__)

_ACCEPT = "text/html,application/xhtml+xml"
_CHUNK_SIZE = 64 * 1024


@dataclass(slots=True)
class FetchError(RuntimeError):
    """Domain error for transport failures and unusable responses."""

    url: str
    message: str
    status_code: int | None = None

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (url={self.url}, status={self.status_code})"
        return f"{self.message} (url={self.url})"


def decode_markup(content: bytes, declared_encoding: str | None) -> str:
    """Decode with the declared charset, else a detected one, else UTF-8."""

    if declared_encoding:
        try:
            return content.decode(declared_encoding)
        except (LookupError, UnicodeDecodeError):
            logger.debug("Declared encoding %s failed; detecting instead", declared_encoding)

    best = from_bytes(content).best()
    if best is not None and best.encoding:
        return str(best)
    return content.decode("utf-8", errors="replace")


class PageFetcher:
    """Fetch markup once; retries and caching are the caller's business."""

    def __init__(self, settings: FetchSettings | None = None, *, session: Any | None = None) -> None:
        self._settings = settings or FetchSettings()
        self._session = session if session is not None else requests.Session()

    @property
    def settings(self) -> FetchSettings:
        return self._settings

    def fetch(self, url: str) -> str:
        target = validate_source_url(url)
        headers = {"User-Agent": self._settings.user_agent, "Accept": _ACCEPT}

        try:
            response = self._session.get(
                target,
                headers=headers,
                timeout=self._settings.timeout_seconds,
                allow_redirects=True,
                stream=True,
            )
        except requests.RequestException as exc:
            raise FetchError(target, f"Failed to fetch recipe page: {exc}") from exc

        try:
            if response.status_code >= 400:
                raise FetchError(target, "Failed to fetch recipe page", status_code=response.status_code)
            content = self._read_body(target, response)
        finally:
            response.close()

        declared = response.encoding if "charset" in response.headers.get("Content-Type", "").lower() else None
        markup = decode_markup(content, declared)
        if not markup.strip():
            raise FetchError(target, "Recipe page body is empty", status_code=response.status_code)

        logger.info("Fetched %s (%d bytes)", target, len(content))
        return markup

    def _read_body(self, url: str, response: Any) -> bytes:
        limit = self._settings.max_page_bytes
        buffer = bytearray()
        try:
            for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                if not chunk:
                    continue
                buffer.extend(chunk)
                if len(buffer) > limit:
                    raise FetchError(url, f"Recipe page exceeds {limit} bytes")
        except requests.RequestException as exc:
            raise FetchError(url, f"Failed to read recipe page: {exc}") from exc
        return bytes(buffer)


def fetch_page(url: str, settings: FetchSettings | None = None) -> str:
    return PageFetcher(settings).fetch(url)
