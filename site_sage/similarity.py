"""site_sage.similarity: embedding comparison and page ranking.

The ranking score is a *blended* similarity. For question vector ``q`` and
candidate ``c`` with midpoint ``m = (q + c) / 2``::

    score = cos(q, m) * cos(c, m)

The score is symmetric in ``q`` and ``c``. For unit-length vectors each factor
is ``cos(θ / 2)``, so the score reduces to ``(1 + cos θ) / 2``.
"""
from __future__ import annotations

import math
from typing import List, Optional, Sequence

import numpy as np

from site_sage.crawler.models import Document, SimilarityScore
from site_sage.llm.base import CompletionService, EmbeddingService
from site_sage.logger import logger
from site_sage.parser.tokenizer import tokenize_content
from site_sage.relevance import get_relevant_tokens

VectorT = Optional[Sequence[float]]


def _as_array(vec: VectorT) -> Optional[np.ndarray]:
    if vec is None or len(vec) == 0:
        return None
    return np.asarray(vec, dtype=float)


def cosine_similarity(a: VectorT, b: VectorT) -> Optional[float]:
    """Cosine of the angle between *a* and *b*; None if either is missing."""
    va, vb = _as_array(a), _as_array(b)
    if va is None or vb is None:
        return None
    if va.shape != vb.shape:
        raise ValueError(f"Vector length mismatch: {va.shape[0]} != {vb.shape[0]}")
    den = float(np.linalg.norm(va) * np.linalg.norm(vb))
    return float(np.dot(va, vb)) / den if den else 0.0


def blended_similarity(question: VectorT, candidate: VectorT) -> Optional[float]:
    vq, vc = _as_array(question), _as_array(candidate)
    if vq is None or vc is None:
        return None
    midpoint = (vq + vc) / 2
    left = cosine_similarity(vq, midpoint)
    right = cosine_similarity(vc, midpoint)
    if left is None or right is None:
        return None
    return left * right


def rank_scores(scores: Sequence[SimilarityScore]) -> List[SimilarityScore]:
    """Highest score first; ties keep input order, unscorable entries go last."""
    return sorted(
        scores,
        key=lambda s: s.score if s.rankable else -math.inf,
        reverse=True,
    )


async def embed_question(
    question: str, completion: CompletionService, embedding: EmbeddingService
) -> List[float]:
    relevant = await get_relevant_tokens(tokenize_content(question), completion)
    return await embedding.embed(relevant)


async def calculate_similarity_scores(
    question: str,
    documents: Sequence[Document],
    completion: CompletionService,
    embedding: EmbeddingService,
) -> List[SimilarityScore]:
    """Score every document against *question*, one service call at a time."""
    logger.info("Scoring %d documents", len(documents))
    question_vec = await embed_question(question, completion, embedding)

    scores: List[SimilarityScore] = []
    for doc in documents:
        relevant = await get_relevant_tokens(doc.tokens, completion)
        doc_vec = await embedding.embed(relevant)
        score = blended_similarity(question_vec, doc_vec)
        logger.debug("Score %s -> %s", doc.url, score)
        scores.append(SimilarityScore(url=doc.url, score=score))
    return scores


__all__ = [
    "cosine_similarity",
    "blended_similarity",
    "rank_scores",
    "embed_question",
    "calculate_similarity_scores",
]
