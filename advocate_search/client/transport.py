from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx
from httpx import Timeout

from ..advocates.models import Advocate
from .config import DEFAULT_CLIENT_CONFIG, ClientConfig

logger = logging.getLogger(__name__)


class AdvocateApiError(Exception):
    """Raised when the advocate service is unreachable or answers badly."""


class AdvocateApi:
    """Thin async wrapper over the list and recommend endpoints."""

    def __init__(
        self,
        config: ClientConfig = DEFAULT_CLIENT_CONFIG,
        http: httpx.AsyncClient | None = None,
    ):
        self._config = config
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(
            base_url=config.base_url,
            timeout=Timeout(config.timeout),
        )

    async def list_advocates(self) -> list[Advocate]:
        """
        Fetch the full roster.

        Raises:
            AdvocateApiError: On transport errors, non-2xx status or a payload
                that is not ``{"data": [Advocate, ...]}``.
        """
        try:
            logger.debug("GET %s", self._config.advocates_path)
            response = await self._http.get(self._config.advocates_path)
            response.raise_for_status()
            payload = response.json()
            rows = payload["data"]
            return [Advocate.model_validate(row) for row in rows]
        except httpx.HTTPError as exc:
            raise AdvocateApiError(f"Advocate list request failed: {exc}") from exc
        except (ValueError, KeyError, TypeError) as exc:
            # ValidationError and JSON decode errors are ValueErrors
            raise AdvocateApiError(f"Malformed advocate list: {exc}") from exc

    async def recommend(self, query: str, advocates: Sequence[Advocate]) -> dict[str, Any]:
        """
        Post a free-text query with the candidate roster.

        Returns the decoded JSON object; interpretation is up to the caller.

        Raises:
            AdvocateApiError: On transport errors, non-2xx status or a body
                that is not a JSON object.
        """
        body = {
            "query": query,
            "advocates": [a.to_wire() for a in advocates],
        }
        try:
            logger.debug("POST %s (%d candidates)", self._config.recommend_path, len(advocates))
            response = await self._http.post(self._config.recommend_path, json=body)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise AdvocateApiError(f"Recommend request failed: {exc}") from exc
        except ValueError as exc:
            raise AdvocateApiError(f"Recommend response is not JSON: {exc}") from exc

        if not isinstance(payload, dict):
            raise AdvocateApiError(
                f"Recommend response is {type(payload).__name__}, expected object"
            )
        return payload

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()
