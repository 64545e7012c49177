"""Per-character detail view and navigation within a result list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from hanzi_finder.models import CharacterRecord
from hanzi_finder.oracle import SafeOracle


@dataclass(frozen=True)
class CharacterDetail:
    """Corpus record combined with oracle-derived metadata for display."""

    record: CharacterRecord
    stroke_count: int
    five_element: str | None
    structure: str
    radical_components: tuple[str, ...]
    romanization: str


def describe_character(record: CharacterRecord, oracle: SafeOracle) -> CharacterDetail:
    """Collect derived linguistic metadata for one record.

    Args:
        record: Corpus record.
        oracle: Failure-tolerant oracle.

    Returns:
        Detail bundle; unknown values are empty/zero/``None``.
    """

    return CharacterDetail(
        record=record,
        stroke_count=oracle.stroke_count_of(record.word),
        five_element=oracle.five_element_of(record.word),
        structure=oracle.structure_of(record.word),
        radical_components=oracle.radicals_of(record.word),
        romanization=record.pinyin or oracle.romanization_of(record.word),
    )


class DetailCursor:
    """Tracks the character open in the detail view."""

    def __init__(self) -> None:
        self.selected: CharacterRecord | None = None

    @property
    def is_open(self) -> bool:
        return self.selected is not None

    def select(self, record: CharacterRecord) -> None:
        self.selected = record

    def clear(self) -> None:
        self.selected = None

    def _position(self, results: Sequence[CharacterRecord]) -> int:
        if self.selected is None:
            return -1
        for idx, record in enumerate(results):
            if record.word == self.selected.word:
                return idx
        return -1

    def previous(self, results: Sequence[CharacterRecord]) -> CharacterRecord | None:
        """Move to the preceding result; stays put at the first one."""

        idx = self._position(results)
        if idx > 0:
            self.selected = results[idx - 1]
        return self.selected

    def next(self, results: Sequence[CharacterRecord]) -> CharacterRecord | None:
        """Move to the following result; stays put at the last one."""

        idx = self._position(results)
        if 0 <= idx < len(results) - 1:
            self.selected = results[idx + 1]
        return self.selected
