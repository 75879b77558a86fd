"""Plain-text rendering of a ``SessionView`` for the presentation layer."""
from __future__ import annotations

from ..advocates.models import Advocate
from .models import (
    Failed,
    LoadState,
    Matched,
    NoMatch,
    NoQuery,
    Pending,
    RecommendationResult,
    SessionView,
)

TABLE_HEADERS = (
    "First Name",
    "Last Name",
    "City",
    "Degree",
    "Specialties",
    "Years of Experience",
    "Phone Number",
)

LOADING_MESSAGE = "Loading advocates..."
NO_DATA_MESSAGE = "Advocate data is unavailable right now. Please reload the page."
NO_RESULTS_MESSAGE = "No advocates match your search."
SEARCHING_MESSAGE = "Searching..."
RECOMMENDING_MESSAGE = "Finding the best advocate for you..."


def advocate_row(advocate: Advocate) -> tuple[str, ...]:
    return (
        advocate.first_name,
        advocate.last_name,
        advocate.city,
        advocate.degree,
        "\n".join(advocate.specialties),
        str(advocate.years_of_experience),
        advocate.phone_number,
    )


def status_message(view: SessionView) -> str | None:
    """The message to show instead of (or above) the table, if any."""
    if view.records_loading:
        return LOADING_MESSAGE
    if view.load_state is LoadState.failed:
        return NO_DATA_MESSAGE
    if view.filter_pending:
        return SEARCHING_MESSAGE
    if view.has_data and not view.filtered:
        return NO_RESULTS_MESSAGE
    return None


def searching_for(view: SessionView) -> str:
    return f"Searching for: {view.filter_query}"


def recommendation_message(result: RecommendationResult) -> str | None:
    if isinstance(result, NoQuery):
        return None
    if isinstance(result, Pending):
        return RECOMMENDING_MESSAGE
    if isinstance(result, Matched):
        return f"Recommended: {result.advocate.full_name}\n{result.explanation}"
    if isinstance(result, (NoMatch, Failed)):
        return result.explanation
    raise TypeError(f"Unknown recommendation result {result!r}")


def render_table(view: SessionView) -> list[tuple[str, ...]]:
    """Header plus one row per visible advocate; empty when there is no data."""
    if not view.has_data:
        return []
    return [TABLE_HEADERS, *(advocate_row(a) for a in view.filtered)]
