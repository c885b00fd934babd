"""
Data models for the SiteSage crawler and ranking pipeline.
"""
from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional, Set, Tuple


@dataclass(slots=True)
class CrawlState:
    """Breadth-first frontier: FIFO queue plus every URL ever enqueued."""

    visited: Set[str] = field(default_factory=set)
    queue: Deque[str] = field(default_factory=deque)

    @classmethod
    def seeded(cls, url: str) -> CrawlState:
        return cls(visited={url}, queue=deque([url]))

    def enqueue(self, url: str) -> bool:
        """Queue *url* unless it was seen before. Returns True if queued."""
        if url in self.visited:
            return False
        self.visited.add(url)
        self.queue.append(url)
        return True

    def next_url(self) -> str:
        return self.queue.popleft()

    @property
    def done(self) -> bool:
        return not self.queue


@dataclass(frozen=True, slots=True)
class Document:
    """Token sequence of one successfully fetched page."""

    url: str
    tokens: Tuple[str, ...]

    @property
    def text(self) -> str:
        return " ".join(self.tokens)


@dataclass(slots=True)
class CrawlResult:
    """Everything a crawl (or a cache load) hands to the ranking stages."""

    urls: Set[str] = field(default_factory=set)
    documents: List[Document] = field(default_factory=list)


@dataclass(slots=True)
class RelevantTokenSet:
    """Model-distilled keywords for one document."""

    url: str
    tokens: List[str]


@dataclass(slots=True)
class SimilarityScore:
    url: str
    score: Optional[float]

    @property
    def rankable(self) -> bool:
        return self.score is not None and not math.isnan(self.score)


__all__ = ["CrawlState", "Document", "CrawlResult", "RelevantTokenSet", "SimilarityScore"]
