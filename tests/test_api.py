"""Tests for the deepchat HTTP API."""

import json

import pytest
from fastapi.testclient import TestClient

from deepchat import __version__
from deepchat.main import app

ARRAY_SCHEMA = '{ "type": "array" }'


@pytest.fixture
def client():
    """Client with the app lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        res = client.get("/health")

        assert res.status_code == 200
        assert res.json() == {"status": "healthy", "version": __version__}


class TestNormalizeEndpoint:
    """Test /v1/normalize."""

    def test_wraps_single_object(self, client: TestClient) -> None:
        res = client.post(
            "/v1/normalize",
            json={"content": '{ "title": "Only task" }', "json_schema": ARRAY_SCHEMA},
        )

        assert res.status_code == 200
        body = res.json()
        assert body["expect_array"] is True
        assert body["repairs_applied"] == ["wrapped_object"]
        assert json.loads(body["response"])[0]["title"] == "Only task"

    def test_passes_through_without_schema(self, client: TestClient) -> None:
        res = client.post("/v1/normalize", json={"content": '{ "a": 1 }'})

        assert res.status_code == 200
        assert res.json() == {
            "response": '{ "a": 1 }',
            "expect_array": False,
            "repairs_applied": None,
        }

    def test_null_content(self, client: TestClient) -> None:
        res = client.post("/v1/normalize", json={"content": None, "json_schema": ARRAY_SCHEMA})

        assert res.status_code == 200
        assert res.json()["response"] is None


class TestCompletionEndpoint:
    """Test /v1/completions/normalize."""

    def test_normalizes_envelope(self, client: TestClient) -> None:
        envelope = {"choices": [{"message": {"content": '{"t": 1},\n{"t": 2}\n]'}}]}

        res = client.post(
            "/v1/completions/normalize",
            json={"body": envelope, "json_schema": ARRAY_SCHEMA},
        )

        assert res.status_code == 200
        body = res.json()
        assert json.loads(body["response"]) == [{"t": 1}, {"t": 2}]
        assert json.loads(body["raw"]) == envelope

    def test_accepts_envelope_as_text(self, client: TestClient) -> None:
        envelope = '{"choices": [{"message": {"content": "Berlin"}}]}'

        res = client.post("/v1/completions/normalize", json={"body": envelope})

        assert res.status_code == 200
        assert res.json() == {"response": "Berlin", "raw": envelope}

    def test_upstream_error_maps_to_502(self, client: TestClient) -> None:
        res = client.post(
            "/v1/completions/normalize",
            json={"body": {"error": {"message": "Insufficient Balance"}}, "status_code": 402},
        )

        assert res.status_code == 502
        assert "Insufficient Balance" in res.json()["detail"]

    def test_malformed_envelope_maps_to_502(self, client: TestClient) -> None:
        res = client.post("/v1/completions/normalize", json={"body": {"choices": []}})

        assert res.status_code == 502
        assert "Malformed completion envelope" in res.json()["detail"]


def test_not_initialized_without_lifespan() -> None:
    """Outside the lifespan the service reports 503."""
    client = TestClient(app)

    res = client.post("/v1/normalize", json={"content": "{}"})

    assert res.status_code == 503
