"""Markup acquisition — fetches page markup for a scan target.

Every failure surfaces as :class:`AcquisitionError`; the scan manager turns
it into a Failed scan carrying the message.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable
from urllib.parse import unquote, urlparse

import aiohttp

from accessaudit.errors import AcquisitionError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; AccessibilityBot/1.0)"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_BYTES = 5 * 1024 * 1024
MAX_REDIRECTS = 5

_TEXT_CONTENT_TYPES = ("text/", "application/xhtml+xml", "application/xml")
_HTML_SUFFIXES = {".html", ".htm", ".xhtml"}


@runtime_checkable
class MarkupFetcher(Protocol):
    """Interface for markup sources."""

    def accepts(self, target: str) -> bool:
        """Whether this fetcher can handle ``target``."""
        ...

    async def fetch(self, target: str) -> str:
        """Return the markup for ``target`` or raise AcquisitionError."""
        ...


class HttpFetcher:
    """Fetches http(s) targets with aiohttp."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        max_bytes: int = DEFAULT_MAX_BYTES,
        user_agent: str = DEFAULT_USER_AGENT,
        max_redirects: int = MAX_REDIRECTS,
    ) -> None:
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.max_bytes = max_bytes
        self.user_agent = user_agent
        self.max_redirects = max_redirects
        self._session: aiohttp.ClientSession | None = None

    def accepts(self, target: str) -> bool:
        parsed = urlparse(target)
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
            )
        return self._session

    async def fetch(self, target: str) -> str:
        if not self.accepts(target):
            raise AcquisitionError(f"Unsupported URL: {target}")
        session = await self._ensure_session()
        try:
            async with session.get(
                target,
                allow_redirects=True,
                max_redirects=self.max_redirects,
            ) as resp:
                if not 200 <= resp.status < 300:
                    raise AcquisitionError(
                        f"Unexpected HTTP status {resp.status} from {target}"
                    )
                content_type = resp.headers.get("Content-Type", "").lower()
                if content_type and not content_type.startswith(_TEXT_CONTENT_TYPES):
                    raise AcquisitionError(
                        f"Non-text response from {target}: {content_type}"
                    )
                if resp.content_length is not None and resp.content_length > self.max_bytes:
                    raise AcquisitionError(
                        f"Response from {target} exceeds {self.max_bytes} bytes"
                    )

                body = bytearray()
                async for chunk in resp.content.iter_chunked(64 * 1024):
                    body.extend(chunk)
                    if len(body) > self.max_bytes:
                        raise AcquisitionError(
                            f"Response from {target} exceeds {self.max_bytes} bytes"
                        )
                charset = resp.charset or "utf-8"
        except aiohttp.TooManyRedirects:
            raise AcquisitionError(f"Too many redirects fetching {target}") from None
        except asyncio.TimeoutError:
            raise AcquisitionError(f"Timed out fetching {target}") from None
        except aiohttp.ClientError as e:
            raise AcquisitionError(f"Could not reach {target}: {e}") from e

        logger.debug("Fetched %d bytes from %s", len(body), target)
        try:
            return body.decode(charset, errors="replace")
        except LookupError:
            return body.decode("utf-8", errors="replace")

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()


class FileFetcher:
    """Reads local HTML files, given as a path or a ``file://`` URL."""

    def __init__(self, max_bytes: int = DEFAULT_MAX_BYTES) -> None:
        self.max_bytes = max_bytes

    @staticmethod
    def _to_path(target: str) -> Path | None:
        parsed = urlparse(target)
        if parsed.scheme == "file":
            return Path(unquote(parsed.path))
        if not parsed.scheme or len(parsed.scheme) == 1:
            # bare path; a single-letter scheme is a Windows drive
            return Path(target)
        return None

    def accepts(self, target: str) -> bool:
        path = self._to_path(target)
        return path is not None and path.suffix.lower() in _HTML_SUFFIXES

    async def fetch(self, target: str) -> str:
        path = self._to_path(target)
        if path is None:
            raise AcquisitionError(f"Not a local file target: {target}")
        try:
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise AcquisitionError(f"Could not read {path}: {e.strerror or e}") from e
        if len(data) > self.max_bytes:
            raise AcquisitionError(f"{path} exceeds {self.max_bytes} bytes")
        return data.decode("utf-8", errors="replace")

    async def close(self) -> None:
        pass


class CompositeFetcher:
    """Dispatches each target to the first fetcher that accepts it."""

    def __init__(self, fetchers: Sequence[MarkupFetcher]) -> None:
        self._fetchers = tuple(fetchers)

    def accepts(self, target: str) -> bool:
        return any(f.accepts(target) for f in self._fetchers)

    async def fetch(self, target: str) -> str:
        for fetcher in self._fetchers:
            if fetcher.accepts(target):
                return await fetcher.fetch(target)
        raise AcquisitionError(f"No fetcher accepts target: {target}")

    async def close(self) -> None:
        for fetcher in self._fetchers:
            close = getattr(fetcher, "close", None)
            if close is not None:
                await close()


def default_fetcher(
    timeout: float = DEFAULT_TIMEOUT,
    max_bytes: int = DEFAULT_MAX_BYTES,
    user_agent: str = DEFAULT_USER_AGENT,
) -> CompositeFetcher:
    """HTTP first, then local files."""
    return CompositeFetcher(
        [
            HttpFetcher(timeout=timeout, max_bytes=max_bytes, user_agent=user_agent),
            FileFetcher(max_bytes=max_bytes),
        ]
    )
