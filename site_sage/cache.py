"""site_sage.cache: CSV persistence of a crawl, consulted before re-crawling.

Two files live in the configured cache directory:

* ``crawled_urls.csv`` – header ``URL``, one visited URL per row;
* ``contents.csv`` – header ``URL,Content``, page tokens joined by spaces.

Tokens never contain whitespace, so splitting ``Content`` on whitespace gives
back the original token sequence.
"""
from __future__ import annotations

import csv
import enum
from pathlib import Path
from typing import List, Sequence, Set, Tuple

from site_sage.config import SageConfig
from site_sage.crawler.models import CrawlResult, Document
from site_sage.errors import CacheUnavailableError
from site_sage.logger import logger

URLS_HEADER: Tuple[str, ...] = ("URL",)
CONTENTS_HEADER: Tuple[str, ...] = ("URL", "Content")

# page contents can exceed the csv module's default 128 KiB field limit
csv.field_size_limit(16 * 1024 * 1024)


class CacheState(enum.Enum):
    FRESH = "fresh"
    MISSING = "missing"
    CORRUPT = "corrupt"

    def __str__(self) -> str:
        return self.value


def _read_rows(path: Path, header: Sequence[str]) -> List[List[str]]:
    with path.open("r", encoding="utf-8", newline="") as fh:
        reader = csv.reader(fh)
        first = next(reader, None)
        if first is None or tuple(first) != tuple(header):
            raise ValueError(f"{path.name}: expected header {list(header)}, got {first}")
        rows = []
        for lineno, row in enumerate(reader, start=2):
            if not row:
                continue
            if len(row) != len(header):
                raise ValueError(f"{path.name}:{lineno}: expected {len(header)} columns, got {len(row)}")
            rows.append(row)
        return rows


class CrawlCache:
    """Reads and writes the two cache files for one configuration."""

    def __init__(self, urls_path: Path, contents_path: Path) -> None:
        self.urls_path = Path(urls_path)
        self.contents_path = Path(contents_path)

    @classmethod
    def from_config(cls, config: SageConfig) -> CrawlCache:
        return cls(config.crawled_urls_path, config.contents_path)

    def probe(self) -> CacheState:
        """Classify the cache without raising."""
        if not (self.urls_path.is_file() and self.contents_path.is_file()):
            return CacheState.MISSING
        try:
            self._load()
        except (OSError, UnicodeDecodeError, ValueError, csv.Error) as exc:
            logger.warning("Crawl cache is corrupt: %s", exc)
            return CacheState.CORRUPT
        return CacheState.FRESH

    def load(self) -> CrawlResult:
        """Load a cached crawl; CacheUnavailableError unless the cache is fresh."""
        if not (self.urls_path.is_file() and self.contents_path.is_file()):
            raise CacheUnavailableError(CacheState.MISSING)
        try:
            result = self._load()
        except (OSError, UnicodeDecodeError, ValueError, csv.Error) as exc:
            raise CacheUnavailableError(CacheState.CORRUPT, str(exc)) from exc
        logger.info(
            "Loaded %d URLs and %d documents from cache", len(result.urls), len(result.documents)
        )
        return result

    def _load(self) -> CrawlResult:
        urls: Set[str] = {row[0] for row in _read_rows(self.urls_path, URLS_HEADER)}
        documents = [
            Document(url=url, tokens=tuple(content.split()))
            for url, content in _read_rows(self.contents_path, CONTENTS_HEADER)
        ]
        return CrawlResult(urls=urls, documents=documents)

    def save(self, result: CrawlResult) -> None:
        self.urls_path.parent.mkdir(parents=True, exist_ok=True)
        self.contents_path.parent.mkdir(parents=True, exist_ok=True)

        with self.urls_path.open("w", encoding="utf-8", newline="") as fh:
            writer = csv.writer(fh)
            writer.writerow(URLS_HEADER)
            writer.writerows([url] for url in sorted(result.urls))
        logger.info("URLs saved to %s", self.urls_path)

        with self.contents_path.open("w", encoding="utf-8", newline="") as fh:
            writer = csv.writer(fh)
            writer.writerow(CONTENTS_HEADER)
            writer.writerows([doc.url, doc.text] for doc in result.documents)
        logger.info("Contents saved to %s", self.contents_path)


__all__ = ["CacheState", "CrawlCache", "URLS_HEADER", "CONTENTS_HEADER"]
