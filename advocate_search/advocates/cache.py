from __future__ import annotations

import hashlib
import json
import time
from typing import Any, Sequence

from .models import Advocate

_cache: dict[str, dict[str, Any]] = {}
_hits: int = 0
_misses: int = 0
_DEFAULT_TTL = 300  # 5 minutes


def _make_key(query: str, candidates: Sequence[Advocate]) -> str:
    normalized = json.dumps(
        {
            "query": query.strip().lower(),
            "candidates": [c.to_wire() for c in candidates],
        },
        sort_keys=True,
        default=str,
    )
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


def cache_get(query: str, candidates: Sequence[Advocate]) -> tuple[bool, Any]:
    """Return ``(hit, value)``; a cached ``None`` (no match) is a valid hit."""
    global _hits, _misses
    key = _make_key(query, candidates)
    entry = _cache.get(key)
    if entry and time.time() - entry["created_at"] < _DEFAULT_TTL:
        _hits += 1
        return True, entry["value"]
    if entry:
        del _cache[key]
    _misses += 1
    return False, None


def _sweep_expired(now: float) -> None:
    expired = [k for k, entry in _cache.items() if now - entry["created_at"] >= _DEFAULT_TTL]
    for key in expired:
        del _cache[key]


def cache_set(query: str, candidates: Sequence[Advocate], value: Any) -> None:
    now = time.time()
    _sweep_expired(now)
    key = _make_key(query, candidates)
    _cache[key] = {"value": value, "created_at": now}


def get_cache_stats() -> dict:
    total = _hits + _misses
    return {
        "size": len(_cache),
        "hits": _hits,
        "misses": _misses,
        "hit_rate": round(_hits / total * 100, 1) if total > 0 else 0.0,
    }


def clear_cache() -> None:
    global _hits, _misses
    _cache.clear()
    _hits = 0
    _misses = 0
