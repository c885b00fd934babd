"""site_sage.llm: model-service interfaces and their OpenAI implementations."""

from site_sage.llm.base import CompletionService, EmbeddingService
from site_sage.llm.openai_services import OpenAICompletionService, OpenAIEmbeddingService, build_client

__all__ = [
    "CompletionService",
    "EmbeddingService",
    "OpenAICompletionService",
    "OpenAIEmbeddingService",
    "build_client",
]
