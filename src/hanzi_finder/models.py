"""Data models shared by the corpus, index, search and session layers.

Records are immutable and keyed by the character glyph so that every layer can
deduplicate, intersect and compare results by identity without consulting the
other fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

SearchMode = Literal["AND", "OR"]
SortMode = Literal["default", "stroke-asc", "stroke-desc", "pinyin-asc", "pinyin-desc"]

FIVE_ELEMENTS: tuple[str, ...] = ("金", "木", "水", "火", "土")
SEARCH_MODES: tuple[str, ...] = ("AND", "OR")
SORT_MODES: tuple[str, ...] = ("default", "stroke-asc", "stroke-desc", "pinyin-asc", "pinyin-desc")


@dataclass(frozen=True)
class CharacterRecord:
    """One dictionary entry from the character corpus.

    Only ``word`` takes part in equality and hashing; two records for the same
    glyph are the same character even if their annotations differ. The
    ``radicals`` field is the corpus's own annotation and is informational;
    indexing uses the linguistics oracle's decomposition instead.
    """

    word: str
    oldword: str = field(default="", compare=False)
    strokes: str = field(default="", compare=False)
    pinyin: str = field(default="", compare=False)
    radicals: str = field(default="", compare=False)
    explanation: str = field(default="", compare=False)
    more: str = field(default="", compare=False)

    def to_dict(self) -> dict[str, str]:
        """Return the record in the corpus JSON shape."""

        return {
            "word": self.word,
            "oldword": self.oldword,
            "strokes": self.strokes,
            "pinyin": self.pinyin,
            "radicals": self.radicals,
            "explanation": self.explanation,
            "more": self.more,
        }


RadicalIndex = dict[str, tuple[CharacterRecord, ...]]


@dataclass(frozen=True)
class SelectionState:
    """Snapshot of one browsing session's selections and derived results.

    ``results`` and ``unsorted_results`` are derived caches: ``unsorted_results``
    holds the query/filter pipeline output in pipeline order and ``results`` is
    that output after applying ``sort_mode``.
    """

    selected_radicals: tuple[str, ...] = ()
    selected_elements: tuple[str, ...] = ()
    search_mode: SearchMode = "OR"
    sort_mode: SortMode = "default"
    results: tuple[CharacterRecord, ...] = ()
    unsorted_results: tuple[CharacterRecord, ...] = ()
