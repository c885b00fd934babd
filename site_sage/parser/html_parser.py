"""HTML helpers for SiteSage.

Only two things are ever needed from a page's markup:

* the raw ``href`` of every anchor, for link discovery during the crawl;
* a rough plain-text rendition, for the answer prompt.

Neither tries to be clever. Link filtering lives in
:mod:`site_sage.crawler.link_extractor`; tag stripping is a regular
expression, not a DOM walk, so inline ``[...]`` segments disappear too.
"""
from __future__ import annotations

import re
from collections.abc import Sequence
from typing import List

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from bs4.element import Tag

from site_sage.logger import logger

__all__: Sequence[str] = ("extract_hyperlinks", "strip_html_tags")

_TAG_OR_BRACKET_RE = re.compile(r"(<([^>]+)>|\[.*?\])", re.IGNORECASE)


def extract_hyperlinks(html: str) -> List[str]:
    """Return every non-empty ``<a href>`` value in document order.

    Relative paths, fragments and ``mailto:`` targets are returned untouched.
    Markup the parser rejects yields an empty list.
    """
    if not html or not isinstance(html, str):
        return []
    try:
        soup = BeautifulSoup(html, "html.parser")
    except (ParserRejectedMarkup, AssertionError) as exc:
        logger.debug("Unparsable markup skipped: %s", exc)
        return []

    hyperlinks: List[str] = []
    for anchor in soup.find_all("a"):
        if not isinstance(anchor, Tag):
            continue
        href = anchor.get("href")
        if isinstance(href, str) and href:
            hyperlinks.append(href)
    return hyperlinks


def strip_html_tags(html: str) -> str:
    """Remove ``<...>`` tags and ``[...]`` segments, keep everything else."""
    return _TAG_OR_BRACKET_RE.sub("", html)
