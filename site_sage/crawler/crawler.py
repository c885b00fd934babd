from __future__ import annotations

import time
from typing import List

from site_sage.crawler.fetcher import PageFetcher
from site_sage.crawler.link_extractor import absolute_url, filter_and_convert_urls
from site_sage.crawler.models import CrawlResult, CrawlState, Document
from site_sage.errors import FetchError
from site_sage.logger import logger
from site_sage.parser.html_parser import extract_hyperlinks
from site_sage.parser.tokenizer import tokenize_content

__all__ = ("DomainCrawler",)


class DomainCrawler:
    """Sequential breadth-first crawler confined to one domain.

    There is no depth or page limit: the crawl ends when the frontier is
    empty. Pages that fail to download are skipped, never retried.
    """

    def __init__(self, domain: str, fetcher: PageFetcher) -> None:
        self.domain = domain
        self.fetcher = fetcher
        self.failed: List[str] = []

    async def crawl(self, start_url: str) -> CrawlResult:
        state = CrawlState.seeded(absolute_url(start_url))
        documents: List[Document] = []
        self.failed = []
        logger.info("Crawl started: %s (domain %s)", start_url, self.domain)
        start = time.monotonic()

        while not state.done:
            url = state.next_url()
            logger.info("Crawling: %s", url)
            try:
                html = await self.fetcher.fetch(url)
            except FetchError as exc:
                logger.warning("%s", exc)
                self.failed.append(url)
                continue
            if not html:
                logger.debug("Empty page skipped: %s", url)
                continue

            hyperlinks = extract_hyperlinks(html)
            queued = sum(state.enqueue(link) for link in filter_and_convert_urls(hyperlinks, self.domain))
            logger.debug("%s: %d links, %d new", url, len(hyperlinks), queued)

            documents.append(Document(url=url, tokens=tuple(tokenize_content(html))))

        duration = time.monotonic() - start
        logger.info(
            "Crawl finished: %d URLs, %d documents, %d failures in %.2f s",
            len(state.visited), len(documents), len(self.failed), duration,
        )
        return CrawlResult(urls=state.visited, documents=documents)
