# site_sage/crawler/link_extractor.py
"""
Link resolution and same-origin filtering for SiteSage.

The same-origin check is a string-prefix test on the absolute base URL, not a
host comparison: with a base of ``https://x.com/ai`` the sibling
``https://x.com/aibot`` is accepted too.
"""
from __future__ import annotations

from typing import Iterable, List, Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

from site_sage.logger import logger

_WEB_SCHEMES = ("http", "https")


def absolute_url(url: str) -> str:
    """Canonical absolute form: a bare host gains a ``/`` path."""
    parts = urlsplit(url)
    if parts.netloc and not parts.path:
        parts = parts._replace(path="/")
    return urlunsplit(parts)


def base_url_for(domain: str) -> str:
    """Absolute base URL for a bare domain or a full URL."""
    url = domain if domain.startswith("http") else f"https://{domain}"
    return absolute_url(url)


def _resolve(href: str, base: str) -> Optional[str]:
    try:
        resolved = urljoin(base, href.strip())
        parts = urlsplit(resolved)
        # touching .port validates the netloc
        parts.port
    except ValueError as exc:
        logger.debug("Dropping malformed href %r: %s", href, exc)
        return None
    if parts.scheme not in _WEB_SCHEMES or not parts.netloc:
        return None
    return absolute_url(resolved)


def filter_and_convert_urls(hyperlinks: Iterable[str], domain: str) -> List[str]:
    """
    Resolve *hyperlinks* against *domain* and keep only same-origin URLs.

    Order is preserved and duplicates are left in place; deduplication is the
    crawler's job.
    """
    base = base_url_for(domain)
    urls: List[str] = []
    for href in hyperlinks:
        url = _resolve(href, base)
        if url is not None and url.startswith(base):
            urls.append(url)
    return urls


__all__ = ["absolute_url", "base_url_for", "filter_and_convert_urls"]
