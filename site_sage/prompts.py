"""
Prompt templates and the character budget shared by both completion calls.

``PROMPT_CHAR_BUDGET`` stands in for the model's context window. It is
compared against string lengths, not real token counts.
"""
from __future__ import annotations

from typing import Final

from jinja2 import Environment, StrictUndefined

PROMPT_CHAR_BUDGET: Final[int] = 4096

RELEVANT_TOKENS_PREAMBLE: Final[str] = (
    "Given the following tokenized text, identify the most relevant tokens:\n\n"
)
RELEVANT_TOKENS_TRAILER: Final[str] = "\n\nRelevant tokens:"

_env = Environment(autoescape=False, undefined=StrictUndefined, keep_trailing_newline=True)

ANSWER_TEMPLATE = _env.from_string(
    "Answer the question based on the context below, and if the question can't be "
    "answered based on the context, say \"I don't know\"\n\n"
    "Context: {{ context }}\n\n---\n\n"
    "Question: {{ question }}\nAnswer:"
)


def relevant_tokens_prompt(token_string: str) -> str:
    return RELEVANT_TOKENS_PREAMBLE + token_string + RELEVANT_TOKENS_TRAILER


def answer_prompt(context: str, question: str) -> str:
    return ANSWER_TEMPLATE.render(context=context, question=question)


__all__ = [
    "PROMPT_CHAR_BUDGET",
    "RELEVANT_TOKENS_PREAMBLE",
    "RELEVANT_TOKENS_TRAILER",
    "relevant_tokens_prompt",
    "answer_prompt",
]
