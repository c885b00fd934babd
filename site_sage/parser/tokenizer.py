"""
Page tokenisation: blocklist cleanup followed by NLTK word tokenisation.

The blocklist is a noise filter for markup vocabulary (tag and attribute names,
font and asset identifiers). It matches whole words anywhere in the text, so a
prose occurrence of e.g. "font" is dropped as well.
"""
from __future__ import annotations

import re
from typing import Final, List, Sequence, Union

from nltk.tokenize import RegexpTokenizer

MAX_TOKENS: Final[int] = 3000

HTML_VOCABULARY: Final[tuple[str, ...]] = (
    "div", "span", "li", "a", "ul", "section", "script", "footer", "body",
    "html", "link", "img", "href", "svg", "alt", "target", "js", "javascript",
    "lang", "head", "gtag", "meta", "charset", "utf", "woff2", "crossorigin",
    "anonymous", "rel", "preload", "as", "font", "assets", "fonts", "Inter",
    "UI", "var", "type", "css", "stylesheet", "text",
)

_VOCABULARY_RE = re.compile(r"\b(" + "|".join(map(re.escape, HTML_VOCABULARY)) + r")\b")

# same split as a plain word tokenizer: runs of letters, digits and underscores
_word_tokenizer = RegexpTokenizer(r"\w+")

TokensT = Union[Sequence[str], str]


def remove_html_element_names(content: str) -> str:
    return _VOCABULARY_RE.sub("", content)


def tokenize_content(content: str, limit: int = MAX_TOKENS) -> List[str]:
    """Clean *content* and return at most *limit* word tokens."""
    if not content:
        return []
    tokens = _word_tokenizer.tokenize(remove_html_element_names(content))
    return tokens[:limit]


def as_token_string(tokens: TokensT) -> str:
    """A token sequence and its space-joined string are interchangeable."""
    if isinstance(tokens, str):
        return tokens
    return " ".join(tokens)


__all__ = [
    "MAX_TOKENS",
    "HTML_VOCABULARY",
    "TokensT",
    "remove_html_element_names",
    "tokenize_content",
    "as_token_string",
]
