"""Result ordering for the supported sort modes."""

from __future__ import annotations

from typing import Sequence

from hanzi_finder.collation import romanization_sort_key
from hanzi_finder.models import SORT_MODES, CharacterRecord
from hanzi_finder.oracle import SafeOracle


def _romanization(record: CharacterRecord, oracle: SafeOracle) -> str:
    """Prefer the corpus pinyin; fall back to the oracle when it is blank."""

    if record.pinyin.strip():
        return record.pinyin.strip()
    return oracle.romanization_of(record.word)


def sort_results(
    records: Sequence[CharacterRecord],
    sort_mode: str,
    oracle: SafeOracle,
) -> tuple[CharacterRecord, ...]:
    """Order records for display; equal keys keep their input order.

    Args:
        records: Pipeline output.
        sort_mode: One of ``SORT_MODES``.
        oracle: Failure-tolerant oracle used for stroke counts and readings.

    Returns:
        Sorted records.

    Raises:
        ValueError: If ``sort_mode`` is unknown.
    """

    if sort_mode not in SORT_MODES:
        raise ValueError(f"Unknown sort mode: {sort_mode!r}")
    if sort_mode == "default":
        return tuple(records)

    descending = sort_mode.endswith("-desc")
    if sort_mode.startswith("stroke"):
        strokes = {record.word: oracle.stroke_count_of(record.word) for record in records}
        return tuple(sorted(records, key=lambda r: strokes[r.word], reverse=descending))

    keys = {record.word: romanization_sort_key(_romanization(record, oracle)) for record in records}
    return tuple(sorted(records, key=lambda r: keys[r.word], reverse=descending))
