from __future__ import annotations

import time
from collections import Counter
from typing import Any

_events: list[dict[str, Any]] = []


def record_event(event_type: str, data: dict[str, Any]) -> None:
    _events.append({
        "type": event_type,
        "timestamp": time.time(),
        **data,
    })


def get_events(event_type: str | None = None) -> list[dict[str, Any]]:
    if event_type is None:
        return list(_events)
    return [e for e in _events if e["type"] == event_type]


def summarize_events() -> dict[str, Any]:
    """Event counts by type plus the recommend match rate."""
    counts = Counter(e["type"] for e in _events)
    recommends = get_events("recommend")
    matched = sum(1 for e in recommends if e.get("matched_id") is not None)
    return {
        "total": len(_events),
        "by_type": dict(counts),
        "match_rate": round(matched / len(recommends) * 100, 1) if recommends else 0.0,
    }


def clear_events() -> None:
    _events.clear()
