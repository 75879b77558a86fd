from __future__ import annotations

import logging
from typing import Sequence

from pydantic import ValidationError

from ..advocates.models import Advocate
from .models import (
    Failed,
    Matched,
    NoMatch,
    NoQuery,
    Pending,
    RecommendationResult,
)
from .transport import AdvocateApi, AdvocateApiError

logger = logging.getLogger(__name__)


class RecommendationClient:
    """
    Send free-text queries to the recommend endpoint and hold the latest result.

    Each accepted submission takes the next sequence number. When a call
    resolves, its outcome only becomes ``result`` if no newer submission (or
    ``clear``) happened in the meantime.
    """

    def __init__(self, api: AdvocateApi):
        self._api = api
        self._sequence = 0
        self.result: RecommendationResult = NoQuery()

    @property
    def pending(self) -> bool:
        return isinstance(self.result, Pending)

    def clear(self) -> None:
        """Reset to ``NoQuery`` and orphan any in-flight call."""
        self._sequence += 1
        self.result = NoQuery()

    def start(self, query: str) -> int | None:
        """
        Accept a submission and mark the result ``Pending``.

        Returns the submission's sequence number, or None for a blank query
        (which resets to ``NoQuery`` without any network call).
        """
        if not query.strip():
            self.clear()
            return None
        self._sequence += 1
        self.result = Pending(query=query)
        return self._sequence

    async def complete(
        self,
        token: int,
        query: str,
        candidates: Sequence[Advocate],
    ) -> RecommendationResult:
        """
        Run the network call for submission ``token``.

        Returns the outcome of this call. ``result`` is only updated when this
        call is still the latest submission, so the return value and
        ``result`` differ for superseded calls.
        """
        outcome = await self._call(query, candidates)

        if token != self._sequence:
            logger.debug("Discarding superseded recommendation #%d (%s)", token, outcome.kind)
            return outcome

        self.result = outcome
        return outcome

    async def recommend(
        self,
        query: str,
        candidates: Sequence[Advocate],
    ) -> RecommendationResult:
        """Ask for the single best advocate among ``candidates``."""
        token = self.start(query)
        if token is None:
            return self.result
        return await self.complete(token, query, candidates)

    async def _call(self, query: str, candidates: Sequence[Advocate]) -> RecommendationResult:
        try:
            payload = await self._api.recommend(query, candidates)
        except AdvocateApiError as exc:
            logger.warning("Recommendation request failed", exc_info=True)
            return Failed(reason=str(exc))

        explanation = payload.get("recommendation")
        if not explanation:
            return NoMatch()

        if not isinstance(explanation, str):
            return Failed(reason=f"recommendation is {type(explanation).__name__}, expected str")

        try:
            advocate = Advocate.model_validate(payload.get("advocate"))
        except ValidationError as exc:
            logger.warning("Recommendation carried an invalid advocate: %s", exc)
            return Failed(reason=f"invalid advocate: {exc.error_count()} error(s)")

        return Matched(advocate=advocate, explanation=explanation)
