from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException

from .advocates.cache import get_cache_stats
from .advocates.data_store import get_advocates
from .advocates.matching import find_best_match
from .advocates.models import (
    AdvocateListResponse,
    RecommendRequest,
    RecommendResponse,
)
from .analytics.store import record_event, summarize_events

logger = logging.getLogger(__name__)

app = FastAPI(title="Advocate Search API", version="1.0.0")


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/advocates", response_model=AdvocateListResponse)
def list_advocates() -> AdvocateListResponse:
    try:
        advocates = get_advocates()
    except (OSError, ValueError) as exc:
        logger.error("Failed to load advocate roster", exc_info=True)
        raise HTTPException(status_code=503, detail="Advocate roster unavailable") from exc

    record_event("list", {"returned": len(advocates)})
    return AdvocateListResponse(data=advocates)


@app.post(
    "/api/recommend",
    response_model=RecommendResponse,
    response_model_exclude_none=True,
)
def recommend(body: RecommendRequest) -> RecommendResponse:
    # Candidates come from the caller so the match runs over the roster it
    # actually has loaded, not whatever the server holds now.
    return find_best_match(body.query, body.advocates)


# ── Operational endpoints ────────────────────────────────────────────────


@app.get("/stats")
def stats() -> dict:
    return {
        "cache": get_cache_stats(),
        "events": summarize_events(),
    }
