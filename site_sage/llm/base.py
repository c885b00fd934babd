"""Interfaces for the external model services."""
from __future__ import annotations

from typing import List, Protocol, Sequence, Union


class CompletionService(Protocol):
    """Text completion: prompt in, generated text out."""

    async def complete(self, prompt: str, *, max_tokens: int, temperature: float) -> str:
        ...


class EmbeddingService(Protocol):
    """One embedding vector per input (a string or a token list)."""

    async def embed(self, tokens: Union[str, Sequence[str]]) -> List[float]:
        ...


__all__ = ["CompletionService", "EmbeddingService"]
