from __future__ import annotations

import logging
import re
import time
from typing import Sequence

from ..analytics.store import record_event
from ..llm.groq_client import match_advocate
from .cache import cache_get, cache_set
from .models import Advocate, RecommendResponse

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"[a-z0-9]+")

# Filler words carry no signal about what kind of advocate is wanted
_STOPWORDS = frozenset({
    "a", "an", "and", "are", "as", "at", "be", "but", "by", "can", "do", "for",
    "from", "get", "have", "help", "i", "im", "in", "is", "it", "me", "my",
    "need", "of", "on", "or", "someone", "that", "the", "to", "want", "who",
    "with", "looking", "find", "please", "some", "am", "been", "this",
})

_STEM = 4

_WEIGHTS = {"specialty": 0.7, "degree": 0.2, "city": 0.1}


def _tokens(text: str) -> set[str]:
    return {t for t in _TOKEN_RE.findall(text.lower()) if t not in _STOPWORDS and len(t) > 1}


def _overlap(query_tokens: set[str], text: str) -> float:
    field_tokens = _tokens(text)
    if not field_tokens:
        return 0.0
    hits = 0
    for q in query_tokens:
        # Four letter stem so "anxious" finds "anxiety" and "parent" finds "parenting"
        if any(f.startswith(q[:_STEM]) for f in field_tokens):
            hits += 1
    return hits / len(query_tokens)


def _score_advocate(
    advocate: Advocate,
    query_tokens: set[str],
    weights: dict[str, float] | None = None,
) -> float:
    """Compute a heuristic relevance score for a single advocate."""
    w = weights or _WEIGHTS

    specialty_score = _overlap(query_tokens, " ".join(advocate.specialties))
    degree_score = _overlap(query_tokens, advocate.degree)
    city_score = _overlap(query_tokens, advocate.city)

    return w["specialty"] * specialty_score + w["degree"] * degree_score + w["city"] * city_score


def _explain(advocate: Advocate, query_tokens: set[str]) -> str:
    matched = [
        s for s in advocate.specialties
        if _overlap(query_tokens, s) > 0
    ]
    focus = ", ".join(matched) if matched else ", ".join(advocate.specialties[:2])
    return (
        f"{advocate.full_name} ({advocate.degree}, {advocate.city}) focuses on {focus} "
        f"and brings {advocate.years_of_experience} years of experience."
    )


def heuristic_match(query: str, candidates: Sequence[Advocate]) -> tuple[Advocate, str] | None:
    """Pick the highest scoring advocate, or None when nothing overlaps the query."""
    query_tokens = _tokens(query)
    if not query_tokens or not candidates:
        return None

    best: Advocate | None = None
    best_key: tuple[float, int] = (0.0, -1)
    for advocate in candidates:
        score = _score_advocate(advocate, query_tokens)
        if score <= 0:
            continue
        # Ties go to the more experienced advocate, then to roster order
        key = (round(score, 6), advocate.years_of_experience)
        if best is None or key > best_key:
            best, best_key = advocate, key

    if best is None:
        return None
    return best, _explain(best, query_tokens)


def find_best_match(query: str, candidates: Sequence[Advocate]) -> RecommendResponse:
    start_time = time.time()

    hit, cached = cache_get(query, candidates)
    if hit:
        _record(query, candidates, cached, start_time, cache_hit=True, source="cache")
        return cached

    source = "llm"
    result = match_advocate(query, candidates)
    if result is None:
        source = "heuristic"
        result = heuristic_match(query, candidates)

    if result is None:
        response = RecommendResponse()
    else:
        advocate, explanation = result
        response = RecommendResponse(recommendation=explanation, advocate=advocate)

    cache_set(query, candidates, response)
    _record(query, candidates, response, start_time, cache_hit=False, source=source)
    return response


def _record(
    query: str,
    candidates: Sequence[Advocate],
    response: RecommendResponse,
    start_time: float,
    *,
    cache_hit: bool,
    source: str,
) -> None:
    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    matched_id = response.advocate.id if response.advocate else None
    logger.info(
        "recommend query=%r candidates=%d matched=%s source=%s",
        query, len(candidates), matched_id, source,
    )
    record_event("recommend", {
        "query": query,
        "total_candidates": len(candidates),
        "matched_id": matched_id,
        "source": source,
        "response_time_ms": elapsed_ms,
        "cache_hit": cache_hit,
    })
