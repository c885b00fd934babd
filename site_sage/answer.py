"""site_sage.answer: turn the best-matching page into an answer."""

from __future__ import annotations

from typing import Sequence

from site_sage.crawler.fetcher import PageFetcher
from site_sage.crawler.models import SimilarityScore
from site_sage.errors import NoDocumentsError
from site_sage.llm.base import CompletionService
from site_sage.logger import logger
from site_sage.parser.html_parser import strip_html_tags
from site_sage.prompts import PROMPT_CHAR_BUDGET, answer_prompt
from site_sage.similarity import rank_scores

ANSWER_MAX_TOKENS = 1000
ANSWER_TEMPERATURE = 1.0


def select_best_url(scores: Sequence[SimilarityScore]) -> str:
    if not scores:
        raise NoDocumentsError("No crawled documents to rank; is the start URL reachable?")
    return rank_scores(scores)[0].url


def build_answer_prompt(context: str, question: str, budget: int = PROMPT_CHAR_BUDGET) -> str:
    """Fill the answer template, shortening only the context to fit *budget*."""
    available = max(0, budget - len(answer_prompt("", question)))
    if len(context) > available:
        context = context[:available]
    return answer_prompt(context, question)


async def answer_question(
    question: str, url: str, fetcher: PageFetcher, completion: CompletionService
) -> str:
    """Re-fetch *url* and ask the completion service to answer from its text.

    Unlike during the crawl, a FetchError here is fatal and propagates.
    """
    logger.info("Answering from %s", url)
    html = await fetcher.fetch(url)
    prompt = build_answer_prompt(strip_html_tags(html), question)
    text = await completion.complete(
        prompt, max_tokens=ANSWER_MAX_TOKENS, temperature=ANSWER_TEMPERATURE
    )
    return text.strip()


__all__ = ["select_best_url", "build_answer_prompt", "answer_question"]
