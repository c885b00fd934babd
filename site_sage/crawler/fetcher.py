# site_sage/crawler/fetcher.py
"""
Fetcher module: one GET at a time over a shared aiohttp session, with a total
timeout per request.
"""
from __future__ import annotations

import asyncio
from typing import Optional, Protocol

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_sage.config import SageConfig
from site_sage.errors import FetchError
from site_sage.logger import logger


class PageFetcher(Protocol):
    """Anything that can turn a URL into page markup."""

    async def fetch(self, url: str) -> str:
        ...


class Fetcher:
    """HTTP fetcher used by both the crawler and the answer stage.

    Use as an async context manager so the session is always closed::

        async with Fetcher(config) as fetcher:
            html = await fetcher.fetch(url)
    """

    def __init__(self, config: SageConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> Fetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def fetch(self, url: str) -> str:
        """
        Return the decoded body of *url*.

        Raises FetchError on a non-2xx status, a transport error or a timeout.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        try:
            async with self.session.get(url) as resp:
                if not 200 <= resp.status < 300:
                    raise FetchError(url, f"HTTP {resp.status}", status=resp.status)
                return await resp.text(errors="replace")
        except asyncio.TimeoutError as exc:
            logger.debug("Timeout after %.1f s for %s", self.config.timeout, url)
            raise FetchError(url, "timed out") from exc
        except ClientError as exc:
            raise FetchError(url, str(exc) or type(exc).__name__) from exc


__all__ = ["PageFetcher", "Fetcher"]
