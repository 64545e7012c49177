"""Five-element filtering and distribution counts."""

from __future__ import annotations

from typing import Sequence

from hanzi_finder.models import FIVE_ELEMENTS, CharacterRecord
from hanzi_finder.oracle import SafeOracle


def filter_by_five_elements(
    records: Sequence[CharacterRecord],
    elements: Sequence[str],
    oracle: SafeOracle,
) -> Sequence[CharacterRecord]:
    """Keep records whose five-element label is one of ``elements``.

    An empty selection applies no filter and returns ``records`` unchanged.
    Otherwise input order is kept, unclassified characters are dropped and each
    character is emitted once even if repeated in the input.

    Args:
        records: Candidate records.
        elements: Wanted five-element labels.
        oracle: Failure-tolerant oracle used for classification.

    Returns:
        Filtered records.
    """

    if not elements:
        return records

    wanted = set(elements)
    seen: set[str] = set()
    results: list[CharacterRecord] = []
    for record in records:
        if record.word in seen:
            continue
        element = oracle.five_element_of(record.word)
        if element and element in wanted:
            seen.add(record.word)
            results.append(record)
    return tuple(results)


def count_five_elements(records: Sequence[CharacterRecord], oracle: SafeOracle) -> dict[str, int]:
    """Count records per five-element label.

    Each character is counted once even if repeated in the input.

    Args:
        records: Records to classify.
        oracle: Failure-tolerant oracle used for classification.

    Returns:
        Dictionary with every label in ``FIVE_ELEMENTS`` order; unclassified
        records are not counted.
    """

    counts = {element: 0 for element in FIVE_ELEMENTS}
    seen: set[str] = set()
    for record in records:
        if record.word in seen:
            continue
        seen.add(record.word)
        element = oracle.five_element_of(record.word)
        if element in counts:
            counts[element] += 1
    return counts
