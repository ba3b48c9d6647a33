"""Tests for schema document loading."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
import requests

from sdkgen import utils
from sdkgen.utils import SchemaLoaderError, load_schema, load_schema_file, load_schema_url

if TYPE_CHECKING:
    from pathlib import Path


class FakeResponse:
    def __init__(self, payload=None, status: int = 200, content_type: str = "application/json"):
        self.payload = payload
        self.status_code = status
        self.headers = {"content-type": content_type}

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(response=self)

    def json(self):
        if self.payload is None:
            raise ValueError("no JSON body")
        return self.payload


class TestLoadSchemaFile:
    def test_loads_document(self, schema_file: Path) -> None:
        source, data = load_schema_file(schema_file)
        assert source == str(schema_file)
        assert "resources" in data

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_schema_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(SchemaLoaderError, match="Invalid JSON"):
            load_schema_file(path)


class TestLoadSchemaUrl:
    def test_invalid_url(self) -> None:
        with pytest.raises(SchemaLoaderError, match="Invalid URL"):
            load_schema_url("not-a-url")

    def test_fetches_document(self, monkeypatch, schema_document) -> None:
        calls = []

        def fake_get(url, timeout):
            calls.append((url, timeout))
            return FakeResponse(schema_document)

        monkeypatch.setattr(utils.requests, "get", fake_get)
        source, data = load_schema_url("https://example.com/schema.json", timeout=5)

        assert source == "https://example.com/schema.json"
        assert data == schema_document
        assert calls == [("https://example.com/schema.json", 5)]

    def test_http_error(self, monkeypatch) -> None:
        monkeypatch.setattr(utils.requests, "get", lambda url, timeout: FakeResponse(status=404))
        with pytest.raises(SchemaLoaderError, match="HTTP error 404"):
            load_schema_url("https://example.com/schema.json")

    def test_timeout(self, monkeypatch) -> None:
        def fake_get(url, timeout):
            raise requests.exceptions.Timeout()

        monkeypatch.setattr(utils.requests, "get", fake_get)
        with pytest.raises(SchemaLoaderError, match="timeout"):
            load_schema_url("https://example.com/schema.json")

    def test_body_not_json(self, monkeypatch) -> None:
        monkeypatch.setattr(
            utils.requests, "get", lambda url, timeout: FakeResponse(content_type="text/html")
        )
        with pytest.raises(SchemaLoaderError, match="Invalid JSON response"):
            load_schema_url("https://example.com/schema")


class TestLoadSchema:
    def test_requires_a_source(self) -> None:
        with pytest.raises(SchemaLoaderError, match="must be provided"):
            load_schema()

    def test_rejects_both_sources(self, schema_file: Path) -> None:
        with pytest.raises(SchemaLoaderError, match="both"):
            load_schema(schema_file, "https://example.com/schema.json")

    def test_converts_resources(self, tmp_path: Path, schema_document) -> None:
        schema_document["resources"]["example::Broken"] = {"properties": {"x": {"type": "date"}}}
        path = tmp_path / "schema.json"
        path.write_text(json.dumps(schema_document))

        _, resources, errors = load_schema(path)

        assert [r.name for r in resources] == ["ResourceInput", "Bucket"]
        assert len(errors) == 1
