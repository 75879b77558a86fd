"""
Local substring filter over the advocate roster.

Every evaluation re-scans the whole roster, O(records x fields). The roster is
session-sized so no index is kept.
"""
from __future__ import annotations

from typing import Iterable, Iterator

from .models import Advocate


def _searchable_fields(advocate: Advocate) -> Iterator[str]:
    yield advocate.first_name
    yield advocate.last_name
    yield advocate.city
    yield advocate.degree
    yield from advocate.specialties
    # Years of experience is matched as plain text too. Of doubtful use to
    # searchers; candidate for removal.
    yield str(advocate.years_of_experience)


def matches(advocate: Advocate, query: str) -> bool:
    """Return True if any searchable field contains ``query``, ignoring case."""
    needle = query.lower()
    return any(needle in field.lower() for field in _searchable_fields(advocate))


def filter_advocates(advocates: Iterable[Advocate], query: str) -> list[Advocate]:
    """
    Return the advocates matching ``query``, preserving their original order.

    A blank query matches everything.
    """
    if not query or not query.strip():
        return list(advocates)
    return [a for a in advocates if matches(a, query)]
