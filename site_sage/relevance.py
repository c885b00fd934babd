"""site_sage.relevance: distil a page's tokens into a short keyword list."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, List, Union

from site_sage.crawler.models import Document, RelevantTokenSet
from site_sage.llm.base import CompletionService
from site_sage.logger import logger
from site_sage.parser.tokenizer import TokensT, as_token_string
from site_sage.prompts import (
    PROMPT_CHAR_BUDGET,
    RELEVANT_TOKENS_PREAMBLE,
    RELEVANT_TOKENS_TRAILER,
    relevant_tokens_prompt,
)

KEYWORD_MAX_TOKENS = 50
KEYWORD_TEMPERATURE = 0.8

AVAILABLE_CHARS = PROMPT_CHAR_BUDGET - len(RELEVANT_TOKENS_PREAMBLE) - len(RELEVANT_TOKENS_TRAILER)


def build_relevance_prompt(tokens: TokensT) -> str:
    """Embed the token string in the keyword prompt, cut to the character budget."""
    token_string = as_token_string(tokens)
    if len(token_string) > AVAILABLE_CHARS:
        token_string = token_string[:AVAILABLE_CHARS]
    return relevant_tokens_prompt(token_string)


async def get_relevant_tokens(tokens: TokensT, completion: CompletionService) -> List[str]:
    """Ask the completion service for the most relevant tokens of *tokens*.

    CompletionError is not caught here: a failed call ends the run.
    """
    prompt = build_relevance_prompt(tokens)
    text = await completion.complete(
        prompt, max_tokens=KEYWORD_MAX_TOKENS, temperature=KEYWORD_TEMPERATURE
    )
    relevant = text.strip().split()
    logger.debug("Relevant tokens: %s", relevant)
    return relevant


async def extract_relevant_token_sets(
    documents: Iterable[Document], completion: CompletionService
) -> List[RelevantTokenSet]:
    sets: List[RelevantTokenSet] = []
    for doc in documents:
        sets.append(RelevantTokenSet(url=doc.url, tokens=await get_relevant_tokens(doc.tokens, completion)))
    return sets


async def save_relevant_tokens(
    documents: Iterable[Document], completion: CompletionService, path: Union[str, Path]
) -> Path:
    """Write a ``URL,Relevant Tokens`` CSV for *documents* and return its path."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    token_sets = await extract_relevant_token_sets(documents, completion)
    with out.open("w", encoding="utf-8", newline="") as fh:
        writer = csv.writer(fh)
        writer.writerow(["URL", "Relevant Tokens"])
        for item in token_sets:
            writer.writerow([item.url, " ".join(item.tokens)])
    logger.info("Relevant tokens saved to %s", out)
    return out


__all__ = [
    "AVAILABLE_CHARS",
    "build_relevance_prompt",
    "get_relevant_tokens",
    "extract_relevant_token_sets",
    "save_relevant_tokens",
]
