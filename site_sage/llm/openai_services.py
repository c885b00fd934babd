"""OpenAI-backed completion and embedding services."""
from __future__ import annotations

from typing import List, Optional, Sequence, Union

from openai import AsyncOpenAI, OpenAIError

from site_sage.config import SageConfig
from site_sage.errors import CompletionError, EmbeddingError
from site_sage.logger import logger
from site_sage.parser.tokenizer import as_token_string


def build_client(config: SageConfig) -> AsyncOpenAI:
    # the client's own retry loop is disabled: a failed call aborts the run
    return AsyncOpenAI(api_key=config.api_key(), timeout=config.timeout, max_retries=0)


class OpenAICompletionService:
    """Legacy completions endpoint, single choice, no stop sequence."""

    def __init__(self, client: AsyncOpenAI, model: str) -> None:
        self._client = client
        self.model = model

    @classmethod
    def from_config(cls, config: SageConfig, client: Optional[AsyncOpenAI] = None) -> OpenAICompletionService:
        return cls(client or build_client(config), config.completion_model)

    async def complete(self, prompt: str, *, max_tokens: int, temperature: float) -> str:
        logger.debug("Completion call: model=%s max_tokens=%d temperature=%.1f", self.model, max_tokens, temperature)
        try:
            resp = await self._client.completions.create(
                model=self.model,
                prompt=prompt,
                max_tokens=max_tokens,
                n=1,
                stop=None,
                temperature=temperature,
            )
        except OpenAIError as exc:
            logger.error("Completion call failed: %s", exc)
            raise CompletionError(f"Completion request failed: {exc}") from exc
        if not resp.choices:
            raise CompletionError("Completion response contained no choices")
        return resp.choices[0].text or ""


class OpenAIEmbeddingService:
    """Embeddings endpoint; a token list is embedded as one space-joined input."""

    def __init__(self, client: AsyncOpenAI, model: str) -> None:
        self._client = client
        self.model = model

    @classmethod
    def from_config(cls, config: SageConfig, client: Optional[AsyncOpenAI] = None) -> OpenAIEmbeddingService:
        return cls(client or build_client(config), config.embedding_model)

    async def embed(self, tokens: Union[str, Sequence[str]]) -> List[float]:
        text = as_token_string(tokens)
        logger.debug("Embedding call: model=%s chars=%d", self.model, len(text))
        try:
            resp = await self._client.embeddings.create(model=self.model, input=text)
        except OpenAIError as exc:
            logger.error("Embedding call failed: %s", exc)
            raise EmbeddingError(f"Embedding request failed: {exc}") from exc
        if not resp.data:
            raise EmbeddingError("Embedding response contained no vectors")
        return list(resp.data[0].embedding)


__all__ = ["build_client", "OpenAICompletionService", "OpenAIEmbeddingService"]
