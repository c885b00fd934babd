"""site_sage.engine: orchestration of cache, crawl, ranking and answer stages."""

from __future__ import annotations

from contextlib import AsyncExitStack
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from site_sage.answer import answer_question, select_best_url
from site_sage.cache import CacheState, CrawlCache
from site_sage.config import SageConfig
from site_sage.crawler.crawler import DomainCrawler
from site_sage.crawler.fetcher import Fetcher, PageFetcher
from site_sage.crawler.models import CrawlResult, SimilarityScore
from site_sage.errors import CacheUnavailableError
from site_sage.llm.base import CompletionService, EmbeddingService
from site_sage.llm.openai_services import (
    OpenAICompletionService,
    OpenAIEmbeddingService,
    build_client,
)
from site_sage.logger import logger
from site_sage.similarity import calculate_similarity_scores, rank_scores

__all__ = ["AnswerReport", "Engine"]


@dataclass(slots=True)
class AnswerReport:
    """Outcome of one question: the page used, the answer and all scores."""

    question: str
    url: str
    answer: str
    scores: List[SimilarityScore] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class Engine:
    """Facade for the CLI and tests.

    Collaborators not passed in are built from *config* on first use: an
    aiohttp :class:`Fetcher` and OpenAI services sharing one client. Use the
    engine as an async context manager so both HTTP clients get closed.
    """

    def __init__(
        self,
        config: SageConfig,
        *,
        fetcher: Optional[PageFetcher] = None,
        completion: Optional[CompletionService] = None,
        embedding: Optional[EmbeddingService] = None,
        cache: Optional[CrawlCache] = None,
    ) -> None:
        self.config = config
        self.cache = cache or CrawlCache.from_config(config)
        self._fetcher = fetcher
        self._completion = completion
        self._embedding = embedding
        self._stack = AsyncExitStack()

    async def __aenter__(self) -> Engine:
        if self._fetcher is None:
            self._fetcher = await self._stack.enter_async_context(Fetcher(self.config))
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._stack.aclose()

    # ------------------------------------------------------------------ #
    # Collaborators                                                      #
    # ------------------------------------------------------------------ #

    @property
    def fetcher(self) -> PageFetcher:
        if self._fetcher is None:
            raise RuntimeError("Engine used outside 'async with'")
        return self._fetcher

    def _ensure_services(self) -> None:
        if self._completion is not None and self._embedding is not None:
            return
        client = build_client(self.config)
        self._stack.push_async_callback(client.close)
        if self._completion is None:
            self._completion = OpenAICompletionService.from_config(self.config, client)
        if self._embedding is None:
            self._embedding = OpenAIEmbeddingService.from_config(self.config, client)

    @property
    def completion(self) -> CompletionService:
        self._ensure_services()
        assert self._completion is not None
        return self._completion

    @property
    def embedding(self) -> EmbeddingService:
        self._ensure_services()
        assert self._embedding is not None
        return self._embedding

    # ------------------------------------------------------------------ #
    # Stages                                                             #
    # ------------------------------------------------------------------ #

    async def crawl(self) -> CrawlResult:
        """Crawl the configured domain and rewrite the cache.

        A crawl without documents (e.g. an unreachable seed) is not cached, so
        the next run crawls again.
        """
        crawler = DomainCrawler(self.config.domain, self.fetcher)
        result = await crawler.crawl(self.config.start_url)
        if not result.documents:
            logger.warning("Crawl of %s produced no documents; cache left untouched", self.config.start_url)
            return result
        self.cache.save(result)
        return result

    async def load_or_crawl(self, refresh: bool = False) -> CrawlResult:
        """
        Use the cache when it is fresh, crawl when it is missing.

        A corrupt cache is an error unless *refresh* is set, in which case it is
        overwritten by a new crawl like any other refresh.
        """
        if refresh:
            logger.info("Refresh requested, crawling domain...")
            return await self.crawl()
        try:
            cached = self.cache.load()
        except CacheUnavailableError as exc:
            if exc.state is CacheState.CORRUPT:
                raise CacheUnavailableError(
                    exc.state, f"{exc.detail}; rerun with --refresh to recrawl"
                ) from exc
            logger.info("CSV files not found. Crawling domain...")
            return await self.crawl()
        logger.info("Using existing CSV files...")
        return cached

    async def ask(self, question: str, refresh: bool = False) -> AnswerReport:
        crawled = await self.load_or_crawl(refresh=refresh)
        scores = await calculate_similarity_scores(
            question, crawled.documents, self.completion, self.embedding
        )
        url = select_best_url(scores)
        logger.info("Most relevant URL: %s", url)
        answer = await answer_question(question, url, self.fetcher, self.completion)
        return AnswerReport(question=question, url=url, answer=answer, scores=rank_scores(scores))
