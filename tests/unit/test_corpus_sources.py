"""Unit tests for HTTP and file corpus sources."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import requests

from hanzi_finder.corpus import sources
from hanzi_finder.corpus.sources import FileCorpusSource, HttpCorpusSource
from hanzi_finder.errors import CorpusLoadError


class _Response:
    def __init__(self, status: int, payload) -> None:
        self.status_code = status
        self._payload = payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


def test_http_source_returns_decoded_json(monkeypatch) -> None:
    seen = {}

    def fake_get(url, timeout):
        seen["url"] = url
        seen["timeout"] = timeout
        return _Response(200, [{"word": "木"}])

    monkeypatch.setattr(sources.requests, "get", fake_get)

    assert HttpCorpusSource("https://example.test/word.json", timeout=3.0)() == [{"word": "木"}]
    assert seen == {"url": "https://example.test/word.json", "timeout": 3.0}


def test_http_source_raises_on_error_status(monkeypatch) -> None:
    monkeypatch.setattr(sources.requests, "get", lambda url, timeout: _Response(404, None))

    with pytest.raises(CorpusLoadError, match="404"):
        HttpCorpusSource("https://example.test/word.json")()


def test_http_source_raises_on_transport_failure(monkeypatch) -> None:
    def fail(url, timeout):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(sources.requests, "get", fail)

    with pytest.raises(CorpusLoadError, match="connection refused"):
        HttpCorpusSource("https://example.test/word.json")()


def test_http_source_raises_on_invalid_json(monkeypatch) -> None:
    monkeypatch.setattr(
        sources.requests, "get", lambda url, timeout: _Response(200, ValueError("bad json"))
    )

    with pytest.raises(CorpusLoadError, match="not valid JSON"):
        HttpCorpusSource("https://example.test/word.json")()


def test_file_source_reads_json(tmp_path: Path) -> None:
    path = tmp_path / "word.json"
    path.write_text(json.dumps([{"word": "林"}], ensure_ascii=False), encoding="utf-8")

    assert FileCorpusSource(path)() == [{"word": "林"}]


def test_file_source_missing_file(tmp_path: Path) -> None:
    with pytest.raises(CorpusLoadError, match="not found"):
        FileCorpusSource(tmp_path / "missing.json")()
