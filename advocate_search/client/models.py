from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from ..advocates.models import Advocate

NO_MATCH_EXPLANATION = (
    "We couldn't find an advocate who fits that description. "
    "Try describing what you need in different words."
)
FAILED_EXPLANATION = (
    "Sorry, we couldn't get a recommendation right now. Please try again in a moment."
)


class _Result(BaseModel):
    model_config = ConfigDict(frozen=True)


class NoQuery(_Result):
    kind: Literal["no_query"] = "no_query"


class Pending(_Result):
    kind: Literal["pending"] = "pending"
    query: str


class Matched(_Result):
    kind: Literal["matched"] = "matched"
    advocate: Advocate
    explanation: str


class NoMatch(_Result):
    kind: Literal["no_match"] = "no_match"
    explanation: str = NO_MATCH_EXPLANATION


class Failed(_Result):
    kind: Literal["failed"] = "failed"
    explanation: str = FAILED_EXPLANATION
    # Technical cause, for logs only
    reason: str = ""


RecommendationResult = Annotated[
    Union[NoQuery, Pending, Matched, NoMatch, Failed],
    Field(discriminator="kind"),
]


class LoadState(str, Enum):
    idle = "idle"
    loading = "loading"
    loaded = "loaded"
    failed = "failed"


class SessionView(BaseModel):
    """Read-only snapshot of everything the presentation layer may show."""

    model_config = ConfigDict(frozen=True)

    load_state: LoadState = LoadState.idle
    advocates: tuple[Advocate, ...] = ()
    filter_query: str = ""
    settled_filter_query: str = ""
    filtered: tuple[Advocate, ...] = ()
    filter_pending: bool = False
    recommendation_query: str = ""
    recommendation: RecommendationResult = Field(default_factory=NoQuery)

    @property
    def records_loading(self) -> bool:
        return self.load_state is LoadState.loading

    @property
    def recommendation_pending(self) -> bool:
        return isinstance(self.recommendation, Pending)

    @property
    def has_data(self) -> bool:
        return self.load_state is LoadState.loaded
