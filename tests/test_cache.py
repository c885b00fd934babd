# File: tests/test_cache.py
import pytest

from site_sage.cache import CacheState, CrawlCache
from site_sage.crawler.models import CrawlResult, Document
from site_sage.errors import CacheUnavailableError


@pytest.fixture()
def cache(tmp_path) -> CrawlCache:
    return CrawlCache(tmp_path / "crawled_urls.csv", tmp_path / "contents.csv")


@pytest.fixture()
def crawl_result() -> CrawlResult:
    return CrawlResult(
        urls={"https://x.com/", "https://x.com/a", "https://x.com/broken"},
        documents=[
            Document("https://x.com/", ("Welcome", "to", "x", "com")),
            Document("https://x.com/a", ("Quotes", "commas", "and", "Ünïcode")),
            Document("https://x.com/empty", ()),
        ],
    )


def test_missing_when_no_files(cache):
    assert cache.probe() is CacheState.MISSING
    with pytest.raises(CacheUnavailableError) as excinfo:
        cache.load()
    assert excinfo.value.state is CacheState.MISSING


def test_missing_when_only_one_file(cache, crawl_result):
    cache.save(crawl_result)
    cache.contents_path.unlink()
    assert cache.probe() is CacheState.MISSING


def test_round_trip(cache, crawl_result):
    cache.save(crawl_result)
    assert cache.probe() is CacheState.FRESH

    loaded = cache.load()
    assert loaded.urls == crawl_result.urls
    assert [(d.url, d.text) for d in loaded.documents] == [
        (d.url, d.text) for d in crawl_result.documents
    ]
    assert loaded.documents[1].tokens == crawl_result.documents[1].tokens


def test_written_headers(cache, crawl_result):
    cache.save(crawl_result)
    assert cache.urls_path.read_text(encoding="utf-8").splitlines()[0] == "URL"
    assert cache.contents_path.read_text(encoding="utf-8").splitlines()[0] == "URL,Content"


def test_fields_with_commas_and_quotes(cache):
    result = CrawlResult(
        urls={"https://x.com/?q=a,b"},
        documents=[Document('https://x.com/?q="a,b"', ("one", "two"))],
    )
    cache.save(result)
    loaded = cache.load()
    assert loaded.urls == result.urls
    assert loaded.documents[0].url == 'https://x.com/?q="a,b"'


@pytest.mark.parametrize(
    "urls_text,contents_text",
    [
        ("Link\nhttps://x.com/\n", "URL,Content\nhttps://x.com/,hello\n"),
        ("URL\nhttps://x.com/\n", "URL,Body\nhttps://x.com/,hello\n"),
        ("URL\nhttps://x.com/\n", "URL,Content\nhttps://x.com/,hello,extra\n"),
        ("", "URL,Content\n"),
    ],
)
def test_corrupt_cache(cache, urls_text, contents_text):
    cache.urls_path.write_text(urls_text, encoding="utf-8")
    cache.contents_path.write_text(contents_text, encoding="utf-8")

    assert cache.probe() is CacheState.CORRUPT
    with pytest.raises(CacheUnavailableError) as excinfo:
        cache.load()
    assert excinfo.value.state is CacheState.CORRUPT


def test_undecodable_cache_is_corrupt(cache):
    cache.urls_path.write_bytes(b"URL\n\xff\xfe\n")
    cache.contents_path.write_text("URL,Content\n", encoding="utf-8")
    assert cache.probe() is CacheState.CORRUPT


def test_from_config(basic_config):
    cache = CrawlCache.from_config(basic_config)
    assert cache.urls_path == basic_config.cache_dir / "crawled_urls.csv"
    assert cache.contents_path == basic_config.cache_dir / "contents.csv"
