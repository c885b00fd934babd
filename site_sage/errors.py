"""Exception hierarchy for SiteSage.

Crawl-time :class:`FetchError` is the only recoverable failure: the crawler
logs it and moves on. Everything else aborts the pipeline.
"""
from __future__ import annotations

from typing import Optional


class SiteSageError(Exception):
    """Base class for all SiteSage failures."""


class FetchError(SiteSageError):
    """A page could not be downloaded."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        self.url = url
        self.reason = reason
        self.status = status
        super().__init__(f"Error fetching URL {url}: {reason}")


class ServiceError(SiteSageError):
    """A call to an external model service failed."""


class CompletionError(ServiceError):
    """The completion service rejected or failed a request."""


class EmbeddingError(ServiceError):
    """The embedding service rejected or failed a request."""


class CacheUnavailableError(SiteSageError):
    """The crawl cache cannot be used in its current state."""

    def __init__(self, state: object, detail: str = "") -> None:
        self.state = state
        self.detail = detail
        message = f"Crawl cache unavailable ({state})"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class NoDocumentsError(SiteSageError):
    """There is nothing to rank: the crawl produced no documents."""


__all__ = [
    "SiteSageError",
    "FetchError",
    "ServiceError",
    "CompletionError",
    "EmbeddingError",
    "CacheUnavailableError",
    "NoDocumentsError",
]
