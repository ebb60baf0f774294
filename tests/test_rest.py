from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from ahaguide.mcp.service import GuidelineService
from ahaguide.rest import create_app
from ahaguide.seeds import seed_documents
from ahaguide.store import GuidelineStore


@pytest.fixture
def client():
    service = GuidelineService(GuidelineStore(seed_documents()))
    with TestClient(create_app(service)) as test_client:
        yield test_client


def test_health(client: TestClient) -> None:
    assert client.get("/healthz").json() == {"status": "ok"}


def test_query_returns_ranked_outcome(client: TestClient) -> None:
    response = client.post("/query", json={"query": "heart failure"})
    assert response.status_code == 200
    body = response.json()
    assert body["query"] == "heart failure"
    assert body["results"][0]["id"] == "aha-001"
    assert body["total_matches"] >= len(body["results"])
    assert len(body["results"]) <= 5


def test_query_without_matches_is_empty(client: TestClient) -> None:
    body = client.post("/query", json={"query": "xyzxyz-no-match"}).json()
    assert body["total_matches"] == 0
    assert body["results"] == []


@pytest.mark.parametrize("payload", [{"query": ""}, {"query": "   "}, {}])
def test_blank_query_is_unprocessable(client: TestClient, payload: dict) -> None:
    assert client.post("/query", json=payload).status_code == 422


def test_add_and_fetch_document(client: TestClient) -> None:
    response = client.post("/documents", json={"title": "T", "content": "C"})
    assert response.status_code == 201
    doc = response.json()
    assert doc["category"] == "General"
    assert doc["source"] == "AHA"
    assert doc["keywords"] == []
    fetched = client.get(f"/documents/{doc['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == doc
    assert len(client.get("/documents").json()) == 7


def test_add_document_validation(client: TestClient) -> None:
    assert client.post("/documents", json={"title": "T"}).status_code == 422
    duplicate = {"id": "aha-001", "title": "T", "content": "C"}
    assert client.post("/documents", json=duplicate).status_code == 409


def test_missing_document_is_404(client: TestClient) -> None:
    assert client.get("/documents/nope").status_code == 404
