from unittest.mock import patch

from fastapi.testclient import TestClient

from advocate_search.advocates.cache import clear_cache
from advocate_search.analytics.store import clear_events
from advocate_search.app import app

client = TestClient(app)


def _roster() -> list[dict]:
    return client.get("/api/advocates").json()["data"]


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


# ── List ─────────────────────────────────────────────────────────────────


def test_list_advocates_returns_roster():
    resp = client.get("/api/advocates")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert len(data) == 15
    ids = [a["id"] for a in data]
    assert len(set(ids)) == len(ids)


def test_list_advocates_uses_camel_case_fields():
    first = _roster()[0]
    assert set(first) == {
        "id",
        "firstName",
        "lastName",
        "city",
        "degree",
        "specialties",
        "yearsOfExperience",
        "phoneNumber",
    }
    assert first["firstName"] == "John"
    assert first["specialties"] == ["Bipolar", "LGBTQ", "Medication/Prescribing"]
    assert first["yearsOfExperience"] == 10
    assert isinstance(first["id"], str)


def test_list_advocates_keeps_insertion_order():
    ids = [a["id"] for a in _roster()]
    assert ids == [str(i) for i in range(1, 16)]


@patch("advocate_search.app.get_advocates", side_effect=OSError("missing csv"))
def test_list_advocates_unavailable(mock_get):
    resp = client.get("/api/advocates")
    assert resp.status_code == 503


# ── Recommend ────────────────────────────────────────────────────────────


@patch("advocate_search.advocates.matching.match_advocate", return_value=None)
def test_recommend_returns_match(mock_llm):
    clear_cache()
    resp = client.post(
        "/api/recommend",
        json={"query": "I need help with anxiety", "advocates": _roster()},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["recommendation"]
    # Three advocates list anxiety; the most experienced one wins
    assert body["advocate"]["firstName"] == "Jessica"
    assert body["advocate"]["yearsOfExperience"] == 11


@patch("advocate_search.advocates.matching.match_advocate", return_value=None)
def test_recommend_only_considers_posted_candidates(mock_llm):
    clear_cache()
    roster = _roster()
    jane = next(a for a in roster if a["firstName"] == "Jane")
    resp = client.post(
        "/api/recommend",
        json={"query": "I need help with anxiety", "advocates": [jane]},
    )
    assert resp.json()["advocate"]["id"] == jane["id"]


@patch("advocate_search.advocates.matching.match_advocate", return_value=None)
def test_recommend_no_match_is_empty_object(mock_llm):
    clear_cache()
    resp = client.post(
        "/api/recommend",
        json={"query": "xyzzy", "advocates": _roster()},
    )
    assert resp.status_code == 200
    assert resp.json() == {}


@patch("advocate_search.advocates.matching.match_advocate", return_value=None)
def test_recommend_without_candidates_is_empty_object(mock_llm):
    clear_cache()
    resp = client.post("/api/recommend", json={"query": "anxiety"})
    assert resp.status_code == 200
    assert resp.json() == {}


def test_recommend_validation_rejects_blank_query():
    resp = client.post("/api/recommend", json={"query": "   ", "advocates": []})
    assert resp.status_code == 422


def test_recommend_validation_rejects_missing_query():
    resp = client.post("/api/recommend", json={"advocates": []})
    assert resp.status_code == 422


def test_recommend_validation_rejects_bad_advocate():
    resp = client.post(
        "/api/recommend",
        json={"query": "anxiety", "advocates": [{"id": "1", "firstName": "NoRest"}]},
    )
    assert resp.status_code == 422


# ── Stats ────────────────────────────────────────────────────────────────


@patch("advocate_search.advocates.matching.match_advocate", return_value=None)
def test_stats_reports_cache_and_events(mock_llm):
    clear_cache()
    clear_events()
    roster = _roster()
    client.post("/api/recommend", json={"query": "veteran", "advocates": roster})
    client.post("/api/recommend", json={"query": "veteran", "advocates": roster})

    body = client.get("/stats").json()
    assert body["cache"]["hits"] == 1
    assert body["cache"]["misses"] == 1
    assert body["events"]["by_type"] == {"list": 1, "recommend": 2}
    assert body["events"]["match_rate"] == 100.0
