"""Shared fixtures: a deterministic oracle and a small character corpus."""

from __future__ import annotations

import pytest

from hanzi_finder.corpus.loader import CorpusLoader
from hanzi_finder.engine import CharacterEngine
from hanzi_finder.models import CharacterRecord
from hanzi_finder.oracle import SafeOracle

ORACLE_TABLE = {
    "好": {"radicals": ["女", "子"], "element": "水", "strokes": 6, "pinyin": "hǎo", "structure": "左右结构"},
    "女": {"radicals": ["女"], "element": "水", "strokes": 3, "pinyin": "nǚ", "structure": "单一结构"},
    "子": {"radicals": ["子"], "element": "水", "strokes": 3, "pinyin": "zǐ", "structure": "单一结构"},
    "木": {"radicals": ["木"], "element": "木", "strokes": 4, "pinyin": "mù", "structure": "单一结构"},
    "林": {"radicals": ["木"], "element": "木", "strokes": 8, "pinyin": "lín", "structure": "左右结构"},
    "森": {"radicals": ["木"], "element": "木", "strokes": 12, "pinyin": "sēn", "structure": "品字结构"},
    "一": {"radicals": [], "element": "土", "strokes": 1, "pinyin": "yī", "structure": "单一结构"},
}


class FakeOracle:
    """Oracle answering from ``ORACLE_TABLE``; listed characters raise instead."""

    def __init__(self, failing: set[str] | None = None) -> None:
        self.failing = failing or set()
        self.calls: list[tuple[str, str]] = []

    def _entry(self, method: str, char: str) -> dict:
        self.calls.append((method, char))
        if char in self.failing:
            raise RuntimeError(f"oracle failure for {char}")
        return ORACLE_TABLE.get(char, {})

    def radicals_of(self, char):
        return self._entry("radicals", char).get("radicals", [])

    def five_element_of(self, char):
        return self._entry("element", char).get("element")

    def stroke_count_of(self, char):
        return self._entry("strokes", char).get("strokes", 0)

    def romanization_of(self, char):
        return self._entry("pinyin", char).get("pinyin", "")

    def structure_of(self, char):
        return self._entry("structure", char).get("structure", "")


def make_record(word: str, **fields: str) -> CharacterRecord:
    """Build a record whose pinyin and strokes default to the oracle table."""

    entry = ORACLE_TABLE.get(word, {})
    fields.setdefault("pinyin", entry.get("pinyin", ""))
    fields.setdefault("strokes", str(entry.get("strokes", "")))
    fields.setdefault("radicals", (entry.get("radicals") or [""])[0])
    return CharacterRecord(word=word, oldword=word, **fields)


@pytest.fixture
def fake_oracle() -> FakeOracle:
    return FakeOracle()


@pytest.fixture
def oracle(fake_oracle: FakeOracle) -> SafeOracle:
    return SafeOracle(fake_oracle)


@pytest.fixture
def corpus_payload() -> list[dict[str, str]]:
    return [make_record(word).to_dict() for word in ["好", "女", "木", "林", "森", "一"]]


@pytest.fixture
def engine(corpus_payload, fake_oracle) -> CharacterEngine:
    return CharacterEngine(CorpusLoader(lambda: corpus_payload), fake_oracle)


@pytest.fixture(name="make_record")
def make_record_fixture():
    return make_record
