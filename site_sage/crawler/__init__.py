"""site_sage.crawler: same-domain breadth-first crawling."""

from site_sage.crawler.crawler import DomainCrawler
from site_sage.crawler.fetcher import Fetcher, PageFetcher
from site_sage.crawler.models import CrawlResult, CrawlState, Document

__all__ = ["DomainCrawler", "Fetcher", "PageFetcher", "CrawlResult", "CrawlState", "Document"]
