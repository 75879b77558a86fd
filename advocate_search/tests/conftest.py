"""Shared fakes for the client-side tests."""
from __future__ import annotations

import asyncio
from typing import Any

import pytest

from advocate_search.advocates.models import Advocate
from advocate_search.client.transport import AdvocateApiError


def make_advocate(id: str, first: str, specialties=(), years: int = 5, **fields) -> Advocate:
    return Advocate(
        id=id,
        first_name=first,
        last_name=fields.get("last_name", "Test"),
        city=fields.get("city", "Austin"),
        degree=fields.get("degree", "MSW"),
        specialties=specialties,
        years_of_experience=years,
        phone_number=fields.get("phone_number", "5550000000"),
    )


class FakeAdvocateApi:
    """
    Stand-in for ``AdvocateApi``.

    ``responses`` maps a query to a payload dict or an exception. Queries in
    ``gates`` block until their event is set, so tests can choose the order
    in which calls resolve. ``list_plan`` scripts successive roster fetches as
    ``(gate, outcome)`` pairs, where outcome is a roster or an exception.
    """

    def __init__(self, advocates=None, list_error: Exception | None = None):
        self.advocates = list(advocates or [])
        self.list_error = list_error
        self.responses: dict[str, Any] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[tuple[str, list[Advocate]]] = []
        self.list_plan: list[tuple[asyncio.Event | None, Any]] = []
        self.list_calls = 0
        self.closed = False

    async def list_advocates(self) -> list[Advocate]:
        self.list_calls += 1
        if self.list_plan:
            gate, outcome = self.list_plan.pop(0)
            if gate is not None:
                await gate.wait()
            else:
                await asyncio.sleep(0)
            if isinstance(outcome, Exception):
                raise outcome
            return list(outcome)
        await asyncio.sleep(0)
        if self.list_error is not None:
            raise self.list_error
        return list(self.advocates)

    async def recommend(self, query, advocates) -> dict:
        self.calls.append((query, list(advocates)))
        gate = self.gates.get(query)
        if gate is not None:
            await gate.wait()
        else:
            await asyncio.sleep(0)
        outcome = self.responses.get(query, {})
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def aclose(self) -> None:
        self.closed = True


JANE = make_advocate("1", "Jane", ("anxiety",), 8)
TOM = make_advocate("2", "Tom", ("family therapy",), 12)


@pytest.fixture
def roster() -> list[Advocate]:
    return [JANE, TOM]


@pytest.fixture
def fake_api(roster) -> FakeAdvocateApi:
    return FakeAdvocateApi(roster)


@pytest.fixture
def unreachable() -> AdvocateApiError:
    return AdvocateApiError("Recommend request failed: connection refused")
