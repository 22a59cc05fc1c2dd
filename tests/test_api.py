"""Tests for the HTTP parse endpoints."""

import pytest
from pathlib import Path

from fastapi.testclient import TestClient

from cueparse.main import app


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def sample_vtt() -> bytes:
    return (Path(__file__).parent / "fixtures" / "sample.vtt").read_bytes()


class TestHealth:
    """Tests for the health check."""

    def test_root(self, client):
        r = client.get("/")
        assert r.status_code == 200
        assert r.json() == {"status": "ok", "service": "cueparse"}


class TestParseUpload:
    """Tests for multipart uploads."""

    def test_parse_upload_with_meta(self, client, sample_vtt):
        r = client.post(
            "/api/parse",
            files={"file": ("sample.vtt", sample_vtt, "text/vtt")},
            data={"meta": "true"},
        )

        assert r.status_code == 200
        body = r.json()
        assert body["valid"] is True
        assert body["strict"] is True
        assert len(body["cues"]) == 5
        assert body["meta"]["Language"] == "en"
        assert body["stats"]["total_cues"] == 5
        assert body["stats"]["notes_count"] == 1

    def test_parse_upload_without_meta_omits_it(self, client):
        content = b"WEBVTT\n\n1\n00:00:01.000 --> 00:00:02.000\nHello"
        r = client.post("/api/parse", files={"file": ("a.vtt", content, "text/vtt")})

        assert r.status_code == 200
        body = r.json()
        assert "meta" not in body
        assert body["cues"][0]["identifier"] == "1"
        assert body["cues"][0]["start"] == 1.0

    def test_parse_upload_with_bom(self, client):
        content = "\ufeffWEBVTT\n\n00:00:01.000 --> 00:00:02.000\nHi".encode("utf-8")
        r = client.post("/api/parse", files={"file": ("bom.vtt", content, "text/vtt")})

        assert r.status_code == 200
        assert r.json()["cues"][0]["text"] == "Hi"

    def test_parse_text_with_bom(self, client):
        r = client.post("/api/parse/text", json={"content": "\ufeffWEBVTT"})

        assert r.status_code == 200
        assert r.json()["valid"] is True

    def test_rejects_other_extensions(self, client):
        r = client.post("/api/parse", files={"file": ("a.srt", b"1\n", "text/plain")})
        assert r.status_code == 400
        assert "Unsupported file format" in r.json()["detail"]

    def test_rejects_undecodable_upload(self, client):
        r = client.post("/api/parse", files={"file": ("a.vtt", b"WEBVTT\n\n\xff\xfe", "text/vtt")})
        assert r.status_code == 400

    def test_strict_cue_error_is_422(self, client):
        r = client.post(
            "/api/parse",
            files={"file": ("a.vtt", b"WEBVTT\n\norphan", "text/vtt")},
        )

        assert r.status_code == 422
        detail = r.json()["detail"]
        assert detail["kind"] == "standalone_identifier"
        assert detail["cue_index"] == 0

    def test_lenient_cue_error_is_reported(self, client):
        r = client.post(
            "/api/parse",
            files={"file": ("a.vtt", b"WEBVTT\n\norphan", "text/vtt")},
            data={"strict": "false"},
        )

        assert r.status_code == 200
        body = r.json()
        assert body["valid"] is False
        assert body["errors"][0]["kind"] == "standalone_identifier"
        assert body["stats"]["errors_by_kind"] == {"standalone_identifier": 1}


class TestParseText:
    """Tests for JSON text parsing."""

    def test_parse_text(self, client):
        r = client.post("/api/parse/text", json={"content": "WEBVTT"})

        assert r.status_code == 200
        body = r.json()
        assert body["valid"] is True
        assert body["cues"] == []
        assert body["errors"] == []

    def test_structural_error_is_422(self, client):
        r = client.post("/api/parse/text", json={"content": "hello", "strict": False})

        assert r.status_code == 422
        assert r.json()["detail"]["kind"] == "missing_signature"
