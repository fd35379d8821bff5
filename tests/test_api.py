"""
FastAPI endpoint tests for the numeral extractor API.

Uses httpx + FastAPI TestClient — no real server needed.
"""

from __future__ import annotations

import api
import pytest
from api import app
from fastapi.testclient import TestClient

from cn_numerals.config import NumeralSettings
from cn_numerals.pipeline import NumeralPipeline

client = TestClient(app)


@pytest.fixture(scope="module", autouse=True)
def _warm_pipeline() -> None:
    """Initialise the pipeline once for all API tests (bypasses lifespan)."""
    api._pipeline = NumeralPipeline(NumeralSettings(max_text_length=200))
    yield  # type: ignore[misc]
    api._pipeline = None


SENTENCE = "价格是二百五十块，温度负三点一四度"


class TestHealthEndpoint:
    def test_health_returns_200(self) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200

    def test_health_response_shape(self) -> None:
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert data["levels"][0] == "hundred-million"
        assert data["levels"][-1] == "ten"


class TestExtractEndpoint:
    def test_extracts_matches(self) -> None:
        resp = client.post("/extract", json={"text": SENTENCE})
        assert resp.status_code == 200
        data = resp.json()
        assert data["count"] == 2
        assert [m["display"] for m in data["matches"]] == ["250", "-3.14"]

    def test_match_fields(self) -> None:
        data = client.post("/extract", json={"text": SENTENCE}).json()
        first = data["matches"][0]
        assert first["begin"] == 3
        assert first["end"] == 7
        assert first["integer_value"] == 250
        assert first["decimal_suffix"] == ""

    def test_replaced_text(self) -> None:
        data = client.post("/extract", json={"text": SENTENCE}).json()
        assert data["replaced"] == "价格是250块，温度-3.14度"

    def test_original_hash_present(self) -> None:
        data = client.post("/extract", json={"text": SENTENCE}).json()
        assert len(data["original_hash"]) == 64  # SHA-256 hex

    def test_diagnostics_reported(self) -> None:
        data = client.post("/extract", json={"text": "百五"}).json()
        assert [d["code"] for d in data["diagnostics"]] == ["DANGLING_RIGHT"]


class TestReplaceEndpoint:
    def test_replace(self) -> None:
        resp = client.post("/replace", json={"text": "一万零二"})
        assert resp.status_code == 200
        assert resp.json() == {"replaced": "10002"}


class TestRequestValidation:
    def test_empty_body_returns_422(self) -> None:
        resp = client.post("/extract", json={})
        assert resp.status_code == 422

    def test_empty_text_returns_422(self) -> None:
        resp = client.post("/extract", json={"text": ""})
        assert resp.status_code == 422

    def test_too_long_text_returns_422(self) -> None:
        resp = client.post("/replace", json={"text": "一" * 201})
        assert resp.status_code == 422

    def test_missing_content_type_returns_422(self) -> None:
        resp = client.post("/extract")
        assert resp.status_code == 422


class TestFileUploadEndpoint:
    def test_upload_text_file(self) -> None:
        resp = client.post(
            "/extract/file",
            files={"file": ("note.txt", SENTENCE.encode("utf-8"), "text/plain")},
        )
        assert resp.status_code == 200
        assert resp.json()["count"] == 2

    def test_upload_non_utf8_file(self) -> None:
        resp = client.post(
            "/extract/file",
            files={"file": ("note.txt", b"\xff\xfe\x00", "text/plain")},
        )
        assert resp.status_code == 400

    def test_upload_empty_file(self) -> None:
        resp = client.post(
            "/extract/file",
            files={"file": ("note.txt", b"   ", "text/plain")},
        )
        assert resp.status_code == 422
