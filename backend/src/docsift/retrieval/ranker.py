from __future__ import annotations

import math
import re
from typing import Any, Iterable, Mapping, Sequence

from docsift.chunking.models import Chunk, ScoredChunk

STOP_WORDS: frozenset[str] = frozenset(
    {
        "the", "is", "at", "which", "on", "an", "in", "with", "to", "for",
        "a", "and", "or", "of", "as", "by", "but", "this", "that", "it",
    }
)

MIN_TOKEN_LENGTH = 3
WHOLE_WORD_WEIGHT = 3.0
PARTIAL_MATCH_WEIGHT = 1.5
CO_OCCURRENCE_WEIGHT = 2.0
POSITION_DECAY = 0.1


def tokenize_query(query: str) -> list[str]:
    """
    Lowercase, split on whitespace, drop short tokens and stop words.
    Repeated tokens are kept once, in first-seen order.
    """
    tokens = [
        t for t in (query or "").lower().split()
        if len(t) >= MIN_TOKEN_LENGTH and t not in STOP_WORDS
    ]
    return list(dict.fromkeys(tokens))


def count_whole_word(content: str, token: str) -> int:
    # token is untrusted text: escape it, boundaries are non-word chars or string edges
    pattern = rf"(?<!\w){re.escape(token)}(?!\w)"
    return len(re.findall(pattern, content))


def count_substring(content: str, token: str) -> int:
    return content.count(token)


def score_chunk(content: str, tokens: Sequence[str]) -> tuple[float, int]:
    """
    Term-frequency score of one chunk before length and position adjustments.

    Returns:
        (raw_score, matched_words)
    """
    text = content.lower()
    score = 0.0

    for token in tokens:
        exact = count_whole_word(text, token)
        partial = count_substring(text, token)
        score += exact * WHOLE_WORD_WEIGHT
        score += max(0, partial - exact) * PARTIAL_MATCH_WEIGHT

    matched_words = sum(1 for t in tokens if t in text)
    if matched_words > 1:
        score += matched_words * CO_OCCURRENCE_WEIGHT

    return score, matched_words


def _as_chunk(chunk: Chunk | Mapping[str, Any]) -> Chunk:
    if isinstance(chunk, Chunk):
        return chunk
    return Chunk.model_validate(chunk)


def rank_chunks(
    chunks: Iterable[Chunk | Mapping[str, Any]],
    query: str,
    max_chunks: int = 3,
) -> list[ScoredChunk]:
    """
    Rank one document's chunks against a free-text query.

    Accepts Chunk models or their stored dict form. When the query has no
    usable terms the first `max_chunks` chunks are returned unscored, in order.
    """
    items = [_as_chunk(c) for c in (chunks or [])]
    if not items or not query:
        return []

    limit = max(0, max_chunks)
    tokens = tokenize_query(query)

    if not tokens:
        return [ScoredChunk(**c.model_dump()) for c in items[:limit]]

    total = len(items)
    scored: list[ScoredChunk] = []
    for position, c in enumerate(items):
        raw, matched = score_chunk(c.content, tokens)

        word_count = max(1, len(c.content.split()))
        normalized = raw / math.sqrt(word_count)
        position_bonus = 1 - (position / total) * POSITION_DECAY

        scored.append(
            ScoredChunk(
                **c.model_dump(),
                score=normalized * position_bonus,
                raw_score=raw,
                matched_words=matched,
            )
        )

    hits = [s for s in scored if s.score > 0]
    hits.sort(key=lambda s: (-s.score, -s.matched_words, s.chunk_index))
    return hits[:limit]
