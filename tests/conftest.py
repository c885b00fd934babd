# File: tests/conftest.py
from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

import pytest

from site_sage.config import SageConfig
from site_sage.errors import CompletionError, EmbeddingError, FetchError
from site_sage.parser.tokenizer import as_token_string
from site_sage.prompts import RELEVANT_TOKENS_PREAMBLE, RELEVANT_TOKENS_TRAILER

#: words the fake completion service treats as "relevant"
KEYWORDS: Dict[str, List[float]] = {
    "apples": [1.0, 0.0, 0.0],
    "bananas": [0.0, 1.0, 0.0],
    "cherries": [0.0, 0.0, 1.0],
}


class FakeFetcher:
    """Serves pages from a dict; unknown URLs fail like an HTTP 404."""

    def __init__(self, pages: Dict[str, str]) -> None:
        self.pages = pages
        self.calls: List[str] = []

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        if url not in self.pages:
            raise FetchError(url, "HTTP 404", status=404)
        return self.pages[url]


class FakeCompletion:
    """
    Deterministic completion service.

    Keyword prompts get back the KEYWORDS found in the embedded text (or
    "nothing"); any other prompt gets *answer*.
    """

    def __init__(self, answer: str = "  Bananas are yellow.  ", fail: bool = False) -> None:
        self.answer = answer
        self.fail = fail
        self.calls: List[Tuple[str, int, float]] = []

    async def complete(self, prompt: str, *, max_tokens: int, temperature: float) -> str:
        self.calls.append((prompt, max_tokens, temperature))
        if self.fail:
            raise CompletionError("service down")
        if prompt.startswith(RELEVANT_TOKENS_PREAMBLE):
            body = prompt[len(RELEVANT_TOKENS_PREAMBLE):-len(RELEVANT_TOKENS_TRAILER)]
            hits = [w for w in body.split() if w in KEYWORDS]
            return " " + (" ".join(hits) or "nothing") + "\n"
        return self.answer


class FakeEmbedding:
    """Maps the first known keyword of the input to a fixed vector."""

    def __init__(self, fail: bool = False, default: Optional[List[float]] = None) -> None:
        self.fail = fail
        self.default = default or [0.2, 0.2, 0.2]
        self.calls: List[str] = []

    async def embed(self, tokens: Union[str, Sequence[str]]) -> List[float]:
        text = as_token_string(tokens)
        self.calls.append(text)
        if self.fail:
            raise EmbeddingError("service down")
        for word in text.split():
            if word in KEYWORDS:
                return KEYWORDS[word]
        return self.default


@pytest.fixture()
def fake_completion() -> FakeCompletion:
    return FakeCompletion()


@pytest.fixture()
def fake_embedding() -> FakeEmbedding:
    return FakeEmbedding()


@pytest.fixture()
def fruit_site() -> Dict[str, str]:
    """Three-page site, one page per fruit, plus an external link."""
    base = "https://ai-wiki.fintakers.com"
    return {
        f"{base}/": (
            "<html><body><h1>apples</h1>"
            '<a href="/bananas">B</a><a href="/cherries">C</a>'
            '<a href="https://other.com/x">X</a></body></html>'
        ),
        f"{base}/bananas": "<html><body><p>bananas are [1] yellow</p></body></html>",
        f"{base}/cherries": '<html><body><p>cherries</p><a href="/">home</a></body></html>',
    }


@pytest.fixture()
def fake_fetcher_factory() -> Callable[[Dict[str, str]], FakeFetcher]:
    return FakeFetcher


@pytest.fixture()
def basic_config(tmp_path) -> SageConfig:
    """Config pointing at the example domain with the cache in *tmp_path*."""
    return SageConfig(
        domain="ai-wiki.fintakers.com",
        start_url="https://ai-wiki.fintakers.com",
        openai_api_key="sk-test",
        timeout=2.0,
        user_agent="TestAgent/1.0",
        cache_dir=tmp_path,
    )
