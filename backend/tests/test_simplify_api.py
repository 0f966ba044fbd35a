"""
Tests for the simplification endpoint.

The endpoint should simplify open lines and rings, auto-detect rings
from closed input and reject input that cannot form a valid curve.
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.append(str(Path(__file__).resolve().parents[1]))
from app.main import app  # type: ignore


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_health(client: TestClient) -> None:
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_simplify_open_line(client: TestClient) -> None:
    """A nearly straight line collapses to its endpoints."""
    body = {
        "points": [[0, 0], [1, 0.05], [2, -0.04], [3, 0.02], [4, 0]],
        "tolerance": 0.1,
    }
    resp = client.post("/api/simplify", json=body)
    assert resp.status_code == 200
    data = resp.json()
    assert data["ring"] is False
    assert data["points"] == [[0.0, 0.0], [4.0, 0.0]]
    assert data["originalSize"] == 5
    assert data["resultSize"] == 2


def test_simplify_detects_ring(client: TestClient) -> None:
    """Closed input is simplified as a ring and stays closed."""
    body = {
        "points": [[5, 0], [10, 0], [10, 10], [0, 10], [0, 0], [5, 0]],
        "tolerance": 0.5,
    }
    resp = client.post("/api/simplify", json=body)
    assert resp.status_code == 200
    data = resp.json()
    assert data["ring"] is True
    assert data["points"][0] == data["points"][-1] == [0.0, 0.0]
    assert data["resultSize"] == 5


def test_simplify_can_treat_closed_input_as_line(client: TestClient) -> None:
    """An explicit ring flag overrides closure detection."""
    body = {
        "points": [[0, 0], [10, 0], [10, 10], [0, 0]],
        "tolerance": 0.5,
        "ring": False,
    }
    resp = client.post("/api/simplify", json=body)
    assert resp.status_code == 200
    assert resp.json()["ring"] is False


def test_short_closed_input_is_simplified_as_line(client: TestClient) -> None:
    """Closed input too short for a ring is handled as an open line."""
    body = {"points": [[0, 0], [5, 5], [0, 0]], "tolerance": 0.1}
    resp = client.post("/api/simplify", json=body)
    assert resp.status_code == 200
    data = resp.json()
    assert data["ring"] is False
    assert data["points"] == [[0.0, 0.0], [5.0, 5.0], [0.0, 0.0]]
    assert data["resultSize"] == 3


@pytest.mark.parametrize(
    "body",
    [
        {"points": [[0, 0]], "tolerance": 1.0},
        {"points": [], "tolerance": 1.0},
        {"points": [[0, 0], [1, 1], [2, 0]], "tolerance": 1.0, "ring": True},
        {"points": [[0, 0], [1, 1, 1]], "tolerance": 1.0},
    ],
)
def test_simplify_rejects_invalid_curves(client: TestClient, body: dict) -> None:
    resp = client.post("/api/simplify", json=body)
    assert resp.status_code == 400


def test_simplify_rejects_negative_tolerance(client: TestClient) -> None:
    resp = client.post("/api/simplify", json={"points": [[0, 0], [1, 1]], "tolerance": -1})
    assert resp.status_code == 422
