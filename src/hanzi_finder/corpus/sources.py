"""Corpus sources returning the raw character array in one fetch."""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from pathlib import Path
from typing import Any, Callable

import requests

from hanzi_finder.errors import CorpusLoadError

logger = logging.getLogger(__name__)

CorpusSource = Callable[[], Any]


@dataclass(frozen=True)
class HttpCorpusSource:
    """Fetch the full corpus JSON array from an HTTP endpoint."""

    url: str
    timeout: float = 10.0

    def __call__(self) -> Any:
        logger.debug("Fetching corpus from %s", self.url)
        try:
            resp = requests.get(self.url, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as exc:
            raise CorpusLoadError(f"Failed to fetch corpus from {self.url}: {exc}") from exc
        except ValueError as exc:
            raise CorpusLoadError(f"Corpus response from {self.url} is not valid JSON") from exc


@dataclass(frozen=True)
class FileCorpusSource:
    """Read the full corpus JSON array from a local UTF-8 file."""

    path: Path

    def __call__(self) -> Any:
        if not self.path.exists():
            raise CorpusLoadError(f"Corpus file not found: {self.path}")
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                return json.load(handle)
        except (OSError, ValueError) as exc:
            raise CorpusLoadError(f"Failed to read corpus file {self.path}: {exc}") from exc
